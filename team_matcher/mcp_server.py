"""Tool functions for projects, teams and analytics.

Every function takes an optional ``db_path`` and returns a plain dict (or
list of dicts) so it can be exposed over MCP or printed by the CLI.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from team_matcher.agents.insights import generate_alternative_teams, predict_project_success
from team_matcher.analytics import (
    BudgetOption,
    EmployeeAllocation,
    analyze_skill_gaps,
    build_resource_allocation,
    calculate_employee_growth,
    calculate_roi,
    calculate_team_chemistry,
    calculate_team_cost,
    find_budget_friendly_option,
    find_resource_conflicts,
    find_unallocated,
    rank_qualified_employees,
)
from team_matcher.config import MatchingConfig
from team_matcher.db.config import get_db_path
from team_matcher.db.employees import EmployeeRepository
from team_matcher.db.match_runs import MatchRunRepository
from team_matcher.db.projects import ProjectRepository
from team_matcher.db.teams import TeamRepository
from team_matcher.orchestrator.errors import ConfigurationError
from team_matcher.orchestrator.pipeline import MatchOutcome, MatchPipeline, spawn_match
from team_matcher.schemas import CreateProjectInput, SaveTeamInput, TeamBudgetInput

logger = logging.getLogger(__name__)


def _path(db_path: Optional[str]) -> Path:
    return Path(db_path) if db_path else get_db_path()


def _config(path: Path) -> MatchingConfig:
    return replace(MatchingConfig.from_env(), db_path=path)


def _insights_config(path: Path) -> Optional[MatchingConfig]:
    """Config for insight calls; None lets them fall back to their defaults."""
    try:
        return _config(path)
    except ConfigurationError as e:
        logger.warning(f"Invalid AI configuration: {e}")
        return None


def _validation_message(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'input'}: {e['msg']}"
        for e in error.errors()
    )


def _not_found(project_id: int) -> dict:
    return {"error": f"Project not found: {project_id}"}


def _allocations(path: Path) -> list[EmployeeAllocation]:
    assignments = TeamRepository(path).assignments_by_employee()
    return [
        EmployeeAllocation(employee=e, projects=assignments.get(e.id, []))
        for e in EmployeeRepository(path).list_all()
    ]


# --- Projects ---

def create_project(
    name: str,
    description: Optional[str] = None,
    skills: Optional[list[dict]] = None,
    seniority: Optional[list[dict]] = None,
    db_path: Optional[str] = None,
) -> dict:
    """
    Create a project and start AI matching in the background.

    Returns as soon as the project row exists. Matching failures never
    reach the caller; they show up in the logs and in get_match_runs.

    Args:
        name: Project name (1-100 characters)
        description: Free-text description the model matches against
        skills: Required skills as {skill_id | skill_name, min_experience_years}
        seniority: Required seniority as {level, required_count}
    """
    try:
        data = CreateProjectInput(
            name=name,
            description=description,
            skills=skills or [],
            seniority=seniority or [],
        )
    except ValidationError as e:
        return {"success": False, "error": _validation_message(e)}

    path = _path(db_path)
    employees = EmployeeRepository(path)
    catalog = {s["id"]: s["name"] for s in employees.list_skills()}

    unknown = [s.skill_id for s in data.skills if s.skill_id is not None and s.skill_id not in catalog]
    if unknown:
        return {"success": False, "error": f"Unknown skill IDs: {unknown}"}

    project_id = ProjectRepository(path).create(
        name=data.name,
        description=data.description,
        skills=[s.to_requirement(catalog) for s in data.skills],
        seniority=[s.to_requirement() for s in data.seniority],
    )
    logger.info(f"Created project {project_id}: {data.name}")

    spawn_match(project_id, db_path=path)

    return {"success": True, "id": project_id}


def list_projects(db_path: Optional[str] = None) -> list[dict]:
    """List projects newest first with headcount and experience summaries."""
    projects = ProjectRepository(_path(db_path)).list_all()
    return [
        {
            "id": p.id,
            "title": p.name,
            "description": p.description or "",
            "developersNeeded": sum(s.required_count for s in p.seniority),
            "experienceYears": max((s.min_experience_years for s in p.skills), default=0),
            "skills": [s.skill_name for s in p.skills],
            "categories": [s.level for s in p.seniority],
        }
        for p in projects
    ]


def get_project(project_id: int, db_path: Optional[str] = None) -> dict:
    """
    Get a project with its team.

    The team is sorted by score descending; manually assigned members
    (no score) come last.
    """
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project:
        return _not_found(project_id)

    team = TeamRepository(path).list_for_project(project_id)
    return {
        "project": project.to_dict(),
        "team": [m.to_dict() for m in team],
    }


def delete_project(project_id: int, db_path: Optional[str] = None) -> dict:
    """Delete a project with its requirements, team and match history."""
    if not ProjectRepository(_path(db_path)).delete(project_id):
        return {"success": False, "error": f"Project not found: {project_id}"}
    logger.info(f"Deleted project {project_id}")
    return {"success": True}


def save_project_team(project_id: int, employee_ids: list[int], db_path: Optional[str] = None) -> dict:
    """
    Replace a project's team with a hand-picked set of employees.

    Unknown ids are ignored. Saved members carry no score. If none of the
    ids exist the current team is left untouched.
    """
    try:
        data = SaveTeamInput(project_id=project_id, employee_ids=employee_ids)
    except ValidationError as e:
        return {"success": False, "error": _validation_message(e)}

    path = _path(db_path)
    if not ProjectRepository(path).get(data.project_id):
        return {"success": False, "error": f"Project not found: {data.project_id}"}

    existing = EmployeeRepository(path).find_existing_ids(data.employee_ids)
    valid_ids = [i for i in dict.fromkeys(data.employee_ids) if i in existing]
    if not valid_ids:
        return {"success": False, "error": "No valid employees found"}

    count = TeamRepository(path).replace_for_project(data.project_id, valid_ids)

    logger.info(f"Saved team of {count} for project {data.project_id}")
    return {"success": True, "count": count}


def rerun_matching(project_id: int, db_path: Optional[str] = None) -> dict:
    """Run AI matching synchronously and report the outcome (for diagnosis)."""
    path = _path(db_path)
    if not ProjectRepository(path).get(project_id):
        return _not_found(project_id)
    try:
        config = _config(path)
    except ConfigurationError as e:
        return MatchOutcome(
            project_id=project_id,
            status="config_error",
            error_type=type(e).__name__,
            error=str(e),
        ).to_dict()
    return MatchPipeline(config).run(project_id).to_dict()


def get_match_runs(project_id: int, limit: int = 20, db_path: Optional[str] = None) -> list[dict]:
    """Recent matching runs for a project, newest first."""
    return MatchRunRepository(_path(db_path)).list_for_project(project_id, limit=limit)


# --- Team analytics ---

def get_qualified_employees(project_id: int, db_path: Optional[str] = None) -> Union[list[dict], dict]:
    """Rank employees not yet on the team against the project requirements."""
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project:
        return _not_found(project_id)

    on_team = TeamRepository(path).employee_ids_for_project(project_id)
    return rank_qualified_employees(project, EmployeeRepository(path).list_all(), exclude_ids=on_team)


def get_skill_gaps(project_id: int, db_path: Optional[str] = None) -> dict:
    """Missing, weak and covered skills for the current team."""
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project:
        return _not_found(project_id)

    team = TeamRepository(path).list_for_project(project_id)
    return analyze_skill_gaps(project.skills, [m.employee for m in team]).to_dict()


def get_team_chemistry(project_id: int, db_path: Optional[str] = None) -> dict:
    """Chemistry score for the current team."""
    path = _path(db_path)
    if not ProjectRepository(path).get(project_id):
        return _not_found(project_id)

    team = TeamRepository(path).list_for_project(project_id)
    return calculate_team_chemistry([m.employee for m in team]).to_dict()


def get_team_budget(
    project_id: int,
    project_duration_weeks: float = 12,
    employee_ids: Optional[list[int]] = None,
    db_path: Optional[str] = None,
) -> dict:
    """
    Estimate team cost and ROI over the project duration.

    Args:
        project_id: Project to price
        project_duration_weeks: Planned duration (default 12)
        employee_ids: Price these employees instead of the saved team
    """
    try:
        data = TeamBudgetInput(
            project_id=project_id,
            employee_ids=employee_ids,
            project_duration_weeks=project_duration_weeks,
        )
    except ValidationError as e:
        return {"error": _validation_message(e)}

    path = _path(db_path)
    if not ProjectRepository(path).get(data.project_id):
        return _not_found(data.project_id)

    if data.employee_ids is not None:
        team = EmployeeRepository(path).list_by_ids(data.employee_ids)
    else:
        team = [m.employee for m in TeamRepository(path).list_for_project(data.project_id)]

    cost = calculate_team_cost(team, data.project_duration_weeks)
    roi = calculate_roi(cost["totalCost"], data.project_duration_weeks)
    return {"cost": cost, "roi": roi}


def _positive_number(value, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def get_budget_options(project_id: int, db_path: Optional[str] = None) -> dict:
    """
    Compare cost and value of the AI-suggested fast, balanced and experienced teams.

    Returns each option's cost summary plus the strategy that is cheapest,
    best value and fastest.
    """
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project or not project.description:
        return {"error": f"Project not found or missing description: {project_id}"}

    repo = EmployeeRepository(path)
    employees = repo.list_all()
    by_id = {e.id: e for e in employees}
    teams = generate_alternative_teams(
        project.description, employees, repo.list_skills(), config=_insights_config(path)
    )

    options = [
        BudgetOption(
            team=[
                by_id[m["employeeId"]]
                for m in team["employees"]
                if isinstance(m, dict) and m.get("employeeId") in by_id
            ],
            estimated_weeks=_positive_number(team["estimatedCompletionWeeks"], 12),
            success_probability=_positive_number(team["successProbability"], 70),
        )
        for team in teams
    ]
    comparison = find_budget_friendly_option(options)

    return {
        "options": [
            {
                "strategy": team["strategy"],
                "strategyName": team["strategyName"],
                "employeeIds": [e.id for e in option.team],
                "estimatedWeeks": summary["weeks"],
                "totalCost": summary["totalCost"],
                "valueScore": summary["valueScore"],
            }
            for team, option, summary in zip(teams, options, comparison["options"])
        ],
        "cheapest": teams[comparison["cheapest"]]["strategy"],
        "bestValue": teams[comparison["bestValue"]]["strategy"],
        "fastest": teams[comparison["fastest"]]["strategy"],
    }


# --- Resources ---

def get_resource_conflicts(db_path: Optional[str] = None) -> list[dict]:
    """Employees assigned to two or more projects, most severe first."""
    return find_resource_conflicts(_allocations(_path(db_path)))


def get_resource_allocation(db_path: Optional[str] = None) -> list[dict]:
    """Project count and utilization for every employee."""
    return build_resource_allocation(_allocations(_path(db_path)))


def get_unallocated_employees(db_path: Optional[str] = None) -> list[dict]:
    """Employees not assigned to any project."""
    return find_unallocated(_allocations(_path(db_path)))


def get_employee_growth(employee_id: Optional[int] = None, db_path: Optional[str] = None) -> list[dict]:
    """Growth metrics for one employee, or for everyone when no id is given."""
    path = _path(db_path)
    allocations = _allocations(path)
    if employee_id is not None:
        allocations = [a for a in allocations if a.employee.id == employee_id]
    return [calculate_employee_growth(a.employee, a.projects) for a in allocations]


# --- AI insights ---

def get_alternative_teams(project_id: int, db_path: Optional[str] = None) -> Union[list[dict], dict]:
    """Fast, balanced and experienced team compositions suggested by the model."""
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project or not project.description:
        return {"error": f"Project not found or missing description: {project_id}"}

    repo = EmployeeRepository(path)
    employees = repo.list_all()
    teams = generate_alternative_teams(
        project.description, employees, repo.list_skills(), config=_insights_config(path)
    )

    names = {e.id: e.full_name for e in employees}
    return [
        dict(
            team,
            employees=[
                dict(m, employeeName=names.get(m.get("employeeId"), f"Employee #{m.get('employeeId')}"))
                for m in team["employees"]
                if isinstance(m, dict)
            ],
        )
        for team in teams
    ]


def get_project_prediction(project_id: int, db_path: Optional[str] = None) -> dict:
    """Model-estimated success probability, risks and strengths for the current team."""
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project:
        return _not_found(project_id)

    team = TeamRepository(path).list_for_project(project_id)
    return predict_project_success(project, team, config=_insights_config(path))


def suggest_team_members(project_id: int, db_path: Optional[str] = None) -> Union[list[dict], dict]:
    """
    Suggest employees to add to a project's team.

    Takes the model's balanced team restricted to employees not already
    assigned. Without a usable suggestion, returns the first five
    available employees.
    """
    path = _path(db_path)
    project = ProjectRepository(path).get(project_id)
    if not project or not project.description:
        return {"error": f"Project not found or missing description: {project_id}"}

    repo = EmployeeRepository(path)
    on_team = TeamRepository(path).employee_ids_for_project(project_id)
    available = [e for e in repo.list_all() if e.id not in on_team]
    if not available:
        return []

    suggestions = generate_alternative_teams(
        project.description, available, repo.list_skills(), config=_insights_config(path)
    )
    balanced = next((t for t in suggestions if t["strategy"] == "balanced"), suggestions[0])

    if not balanced["employees"]:
        return [
            {"employeeId": e.id, "fullName": e.full_name, "reason": "Top match based on skills"}
            for e in available[:5]
        ]

    picks = {m.get("employeeId"): m for m in balanced["employees"] if isinstance(m, dict)}
    return [
        {
            "employeeId": e.id,
            "fullName": e.full_name,
            "reason": picks[e.id].get("reason") or "AI recommended based on project requirements",
            "score": picks[e.id].get("score") or 0,
        }
        for e in available
        if e.id in picks
    ]
