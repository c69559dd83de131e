#!/usr/bin/env python3
"""
MCP Server wrapper for team-matcher tools.

Exposes project creation, AI matching, team editing and team analytics
tools via MCP.
"""
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from fastmcp import FastMCP

from team_matcher.mcp_server import (
    # Projects
    create_project,
    list_projects,
    get_project,
    delete_project,
    save_project_team,
    rerun_matching,
    get_match_runs,
    # Team analytics
    get_qualified_employees,
    get_skill_gaps,
    get_team_chemistry,
    get_team_budget,
    get_budget_options,
    # Resources
    get_resource_conflicts,
    get_resource_allocation,
    get_unallocated_employees,
    get_employee_growth,
    # AI insights
    get_alternative_teams,
    get_project_prediction,
    suggest_team_members,
)

mcp = FastMCP("team-matcher")


@mcp.tool()
def new_project(
    name: str,
    description: Optional[str] = None,
    skills: Optional[list[dict]] = None,
    seniority: Optional[list[dict]] = None,
) -> dict:
    """Create a project. AI matching runs in the background; returns the new id immediately."""
    return create_project(name, description=description, skills=skills, seniority=seniority)

@mcp.tool()
def projects() -> list[dict]:
    """List projects newest first with skill and headcount summaries."""
    return list_projects()

@mcp.tool()
def project(project_id: int) -> dict:
    """Get a project with its team, best scores first."""
    return get_project(project_id)

@mcp.tool()
def remove_project(project_id: int) -> dict:
    """Delete a project and everything attached to it."""
    return delete_project(project_id)

@mcp.tool()
def save_team(project_id: int, employee_ids: list[int]) -> dict:
    """Replace a project's team with the given employees."""
    return save_project_team(project_id, employee_ids)

@mcp.tool()
def rematch(project_id: int) -> dict:
    """Run AI matching now and return the outcome."""
    return rerun_matching(project_id)

@mcp.tool()
def match_runs(project_id: int, limit: int = 20) -> list[dict]:
    """Recent matching runs for a project with status and error details."""
    return get_match_runs(project_id, limit=limit)

@mcp.tool()
def qualified_employees(project_id: int):
    """Rank employees not on the team by skill and seniority fit."""
    return get_qualified_employees(project_id)

@mcp.tool()
def skill_gaps(project_id: int) -> dict:
    """Missing, weak and covered skills for the project team."""
    return get_skill_gaps(project_id)

@mcp.tool()
def team_chemistry(project_id: int) -> dict:
    """Chemistry score for the project team with per-factor notes."""
    return get_team_chemistry(project_id)

@mcp.tool()
def team_budget(project_id: int, project_duration_weeks: float = 12, employee_ids: Optional[list[int]] = None) -> dict:
    """Estimated team cost and ROI over the project duration."""
    return get_team_budget(project_id, project_duration_weeks=project_duration_weeks, employee_ids=employee_ids)

@mcp.tool()
def budget_options(project_id: int) -> dict:
    """Cost and value of the AI-suggested alternative teams, with the cheapest, best-value and fastest picks."""
    return get_budget_options(project_id)

@mcp.tool()
def resource_conflicts() -> list[dict]:
    """Employees assigned to two or more projects."""
    return get_resource_conflicts()

@mcp.tool()
def resource_allocation() -> list[dict]:
    """Project count and utilization for every employee."""
    return get_resource_allocation()

@mcp.tool()
def unallocated_employees() -> list[dict]:
    """Employees with no project assignments."""
    return get_unallocated_employees()

@mcp.tool()
def employee_growth(employee_id: Optional[int] = None) -> list[dict]:
    """Skill growth and promotion readiness for one or all employees."""
    return get_employee_growth(employee_id)

@mcp.tool()
def alternative_teams(project_id: int):
    """Fast, balanced and experienced team options suggested by AI."""
    return get_alternative_teams(project_id)

@mcp.tool()
def project_prediction(project_id: int) -> dict:
    """AI success prediction with risks, strengths and recommendations."""
    return get_project_prediction(project_id)

@mcp.tool()
def suggest_members(project_id: int):
    """AI suggestions for employees to add to the team."""
    return suggest_team_members(project_id)


if __name__ == "__main__":
    mcp.run()
