"""AI insights: alternative team compositions and success prediction.

Both calls degrade to a fixed default answer when the provider is not
configured, fails, or returns something unparseable.
"""

import json
import logging
from typing import Iterable, Optional

from team_matcher.agents.client import get_provider
from team_matcher.agents.prompts import load_prompt
from team_matcher.agents.providers.base import LLMProvider
from team_matcher.config import MatchingConfig
from team_matcher.models import Employee, Project, TeamMember
from team_matcher.orchestrator.errors import MatchingError
from team_matcher.parsing import parse_json_payload

logger = logging.getLogger(__name__)

STRATEGIES = ("fast", "balanced", "experienced")

TEAMS_SYSTEM = "You are an expert at building project teams. Return only valid JSON arrays, no markdown."
PREDICTION_SYSTEM = "You are a project management expert. Return only valid JSON, no markdown."

TEAMS_TEMPERATURE = 0.8
PREDICTION_TEMPERATURE = 0.7

MAX_PREDICTION_ITEMS = 5


def default_alternative_teams() -> list[dict]:
    """Teams returned when the model cannot be used."""
    return [
        {
            "strategy": "fast",
            "strategyName": "Fast Delivery Team",
            "description": "Optimized for speed with agile developers",
            "employees": [],
            "estimatedCompletionWeeks": 8,
            "successProbability": 70,
        },
        {
            "strategy": "balanced",
            "strategyName": "Balanced Team",
            "description": "Mix of experience levels for optimal results",
            "employees": [],
            "estimatedCompletionWeeks": 10,
            "successProbability": 80,
        },
        {
            "strategy": "experienced",
            "strategyName": "Experienced Team",
            "description": "Senior-heavy team for high quality",
            "employees": [],
            "estimatedCompletionWeeks": 12,
            "successProbability": 85,
        },
    ]


def default_prediction() -> dict:
    return {
        "successProbability": 70,
        "estimatedCompletionWeeks": 12,
        "riskFactors": ["Unable to analyze - AI service unavailable"],
        "strengths": ["Team composition available"],
        "recommendations": ["Review team composition manually"],
    }


def normalize_alternative_teams(parsed: list) -> list[dict]:
    """Keep the first team per known strategy and fill in any missing strategy."""
    teams = []
    seen = set()

    for team in parsed:
        if not isinstance(team, dict):
            continue
        strategy = team.get("strategy")
        if strategy not in STRATEGIES or strategy in seen:
            continue
        teams.append({
            "strategy": strategy,
            "strategyName": team.get("strategyName") or f"{strategy} team",
            "description": team.get("description") or "",
            "employees": team.get("employees") or [],
            "estimatedCompletionWeeks": team.get("estimatedCompletionWeeks") or 12,
            "successProbability": team.get("successProbability") or 70,
        })
        seen.add(strategy)

    for strategy in STRATEGIES:
        if strategy not in seen:
            teams.append({
                "strategy": strategy,
                "strategyName": f"{strategy.capitalize()} Team",
                "description": f"A {strategy} team composition",
                "employees": [],
                "estimatedCompletionWeeks": 12,
                "successProbability": 70,
            })

    return teams[:3]


def normalize_prediction(parsed: dict) -> dict:
    """Clamp the probability to 0-100 and cap each list at five items."""
    try:
        probability = float(parsed.get("successProbability") or 70)
    except (TypeError, ValueError):
        probability = 70

    def _capped(key: str) -> list:
        value = parsed.get(key)
        return value[:MAX_PREDICTION_ITEMS] if isinstance(value, list) else []

    return {
        "successProbability": max(0, min(100, probability)),
        "estimatedCompletionWeeks": parsed.get("estimatedCompletionWeeks") or 12,
        "riskFactors": _capped("riskFactors"),
        "strengths": _capped("strengths"),
        "recommendations": _capped("recommendations"),
    }


def generate_alternative_teams(
    project_description: str,
    employees: Iterable[Employee],
    skills: Iterable[dict],
    provider: Optional[LLMProvider] = None,
    config: Optional[MatchingConfig] = None,
) -> list[dict]:
    """Ask the model for fast, balanced and experienced team compositions.

    Always returns exactly three teams, one per strategy.
    """
    profiles = [
        {
            "id": e.id,
            "name": e.full_name,
            "skills": ", ".join(e.skill_names()),
            "seniority": e.seniority or "Mid",
            "experienceYears": e.total_experience_years or 0,
        }
        for e in employees
    ]
    prompt = load_prompt("alternative_teams").format(
        description=project_description,
        employees=json.dumps(profiles, indent=2),
        skills=", ".join(s["name"] for s in skills),
    )

    try:
        provider = provider or get_provider(config)
        text = provider.generate(prompt, TEAMS_SYSTEM, temperature=TEAMS_TEMPERATURE)
        parsed = parse_json_payload(text, expect=list)
    except MatchingError as e:
        logger.error(f"Error generating alternative teams: {e}")
        return default_alternative_teams()

    return normalize_alternative_teams(parsed)


def predict_project_success(
    project: Project,
    team: Iterable[TeamMember],
    provider: Optional[LLMProvider] = None,
    config: Optional[MatchingConfig] = None,
) -> dict:
    """Ask the model how likely the project is to succeed with its current team."""
    team_summary = [
        {
            "name": m.employee.full_name or "Unknown",
            "skills": ", ".join(m.employee.skill_names()),
            "seniority": m.employee.seniority or "Mid",
            "experienceYears": m.employee.total_experience_years or 0,
            "matchScore": m.score or 0,
        }
        for m in team
    ]
    prompt = load_prompt("prediction").format(
        description=project.description or "",
        skills=", ".join(s.skill_name for s in project.skills),
        seniority=", ".join(s.level for s in project.seniority),
        team=json.dumps(team_summary, indent=2),
    )

    try:
        provider = provider or get_provider(config)
        text = provider.generate(prompt, PREDICTION_SYSTEM, temperature=PREDICTION_TEMPERATURE)
        parsed = parse_json_payload(text, expect=dict)
    except MatchingError as e:
        logger.error(f"Error predicting project success: {e}")
        return default_prediction()

    return normalize_prediction(parsed)
