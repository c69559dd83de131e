"""Heuristic team analytics. Pure functions, no I/O."""

from team_matcher.analytics.skill_gaps import SkillGapReport, analyze_skill_gaps
from team_matcher.analytics.chemistry import ChemistryReport, calculate_team_chemistry
from team_matcher.analytics.budget import (
    BudgetOption,
    calculate_roi,
    calculate_team_cost,
    estimate_employee_salary,
    find_budget_friendly_option,
)
from team_matcher.analytics.resources import (
    EmployeeAllocation,
    build_resource_allocation,
    classify_conflict_severity,
    find_resource_conflicts,
    find_unallocated,
)
from team_matcher.analytics.qualification import rank_qualified_employees
from team_matcher.analytics.growth import calculate_employee_growth

__all__ = [
    "SkillGapReport",
    "analyze_skill_gaps",
    "ChemistryReport",
    "calculate_team_chemistry",
    "BudgetOption",
    "calculate_roi",
    "calculate_team_cost",
    "estimate_employee_salary",
    "find_budget_friendly_option",
    "EmployeeAllocation",
    "build_resource_allocation",
    "classify_conflict_severity",
    "find_resource_conflicts",
    "find_unallocated",
    "rank_qualified_employees",
    "calculate_employee_growth",
]
