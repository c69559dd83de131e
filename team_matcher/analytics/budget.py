"""Budget and ROI estimation.

Salaries are estimated from seniority; there is no payroll data.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from team_matcher.models import Employee

SENIORITY_SALARY_MAP = {
    "Junior": 60000,
    "Mid": 90000,
    "Senior": 130000,
    "Lead": 160000,
    "Principal": 200000,
}

DEFAULT_SALARY = 80000
WEEKS_PER_MONTH = 4.33
BASELINE_WEEKLY_COST = 50000


def estimate_employee_salary(seniority: Optional[str] = None) -> int:
    """Estimate annual salary from seniority, falling back to a flat default."""
    if not seniority:
        return DEFAULT_SALARY
    return SENIORITY_SALARY_MAP.get(seniority, DEFAULT_SALARY)


def calculate_team_cost(team: Sequence[Employee], project_duration_weeks: float = 12) -> dict:
    """Project cost of a team over the given duration."""
    if project_duration_weeks <= 0:
        raise ValueError("project_duration_weeks must be positive")

    cost_per_member = []
    for index, member in enumerate(team):
        salary = estimate_employee_salary(member.seniority)
        weekly_salary = salary / 12 / WEEKS_PER_MONTH
        cost_per_member.append({
            "employeeId": member.id if member.id is not None else index,
            "salary": salary,
            "projectCost": weekly_salary * project_duration_weeks,
        })

    total_cost = sum(m["projectCost"] for m in cost_per_member)
    return {
        "totalCost": total_cost,
        "monthlyCost": total_cost / (project_duration_weeks / WEEKS_PER_MONTH),
        "weeklyCost": total_cost / project_duration_weeks,
        "costPerMember": cost_per_member,
    }


def calculate_roi(
    team_cost: float,
    estimated_completion_weeks: float,
    success_probability: float = 80,
) -> dict:
    """Blend success probability (70%) with cost efficiency (30%) into a 0-100 value score."""
    if estimated_completion_weeks <= 0:
        raise ValueError("estimated_completion_weeks must be positive")

    cost_per_week = team_cost / estimated_completion_weeks
    normalized_cost = min(100, (cost_per_week / BASELINE_WEEKLY_COST) * 100)
    value_score = round(success_probability * 0.7 + (100 - normalized_cost) * 0.3)

    if value_score >= 80:
        recommendation = "Excellent value - optimal balance of cost and success probability"
    elif value_score >= 60:
        recommendation = "Good value - reasonable cost with solid success probability"
    elif value_score >= 40:
        recommendation = "Moderate value - consider optimizing team composition"
    else:
        recommendation = "Low value - high cost relative to success probability. Consider alternative team."

    return {
        "costPerWeek": cost_per_week,
        "valueScore": value_score,
        "recommendation": recommendation,
    }


@dataclass
class BudgetOption:
    """One candidate team for budget comparison."""

    team: list[Employee] = field(default_factory=list)
    estimated_weeks: float = 12
    success_probability: float = 70


def find_budget_friendly_option(options: Sequence[BudgetOption]) -> dict:
    """Indexes of the cheapest, best-value and fastest options.

    Ties keep the earliest option. ``options`` holds the per-option cost
    and value summaries in input order.
    """
    if not options:
        raise ValueError("No team options to compare")

    summaries = []
    for index, option in enumerate(options):
        cost = calculate_team_cost(option.team, option.estimated_weeks)
        roi = calculate_roi(cost["totalCost"], option.estimated_weeks, option.success_probability)
        summaries.append({
            "index": index,
            "totalCost": cost["totalCost"],
            "valueScore": roi["valueScore"],
            "weeks": option.estimated_weeks,
        })

    cheapest = min(summaries, key=lambda s: (s["totalCost"], s["index"]))
    best_value = min(summaries, key=lambda s: (-s["valueScore"], s["index"]))
    fastest = min(summaries, key=lambda s: (s["weeks"], s["index"]))

    return {
        "cheapest": cheapest["index"],
        "bestValue": best_value["index"],
        "fastest": fastest["index"],
        "options": summaries,
    }
