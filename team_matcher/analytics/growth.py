"""Employee growth and career readiness estimates.

Skill growth is approximated from project count; there is no history of
experience over time.
"""

from typing import Optional

from team_matcher.models import SENIORITY_LEVELS, Employee

MAX_SKILL_GROWTH_YEARS = 5


def _next_level(current: str) -> Optional[str]:
    if current not in SENIORITY_LEVELS:
        return None
    index = SENIORITY_LEVELS.index(current)
    if index < len(SENIORITY_LEVELS) - 1:
        return SENIORITY_LEVELS[index + 1]
    return None


def calculate_employee_growth(employee: Employee, projects: Optional[list[dict]] = None) -> dict:
    """Skill growth and promotion readiness for one employee.

    Args:
        employee: Employee with skills loaded
        projects: Assigned projects as ``{"projectId", "projectName"}`` dicts

    Returns:
        Dict with currentSkills, projectHistory, skillGrowth and careerPath
    """
    projects = projects or []
    project_count = len(projects)

    current_skills = [
        {"skillName": s.skill_name, "experienceYears": s.experience_years}
        for s in employee.skills
    ]
    skill_names = [s["skillName"] for s in current_skills]

    project_history = [
        {
            "projectId": p["projectId"],
            "projectName": p["projectName"],
            "skillsUsed": skill_names,
        }
        for p in projects
    ]

    growth = min(project_count * 0.5, MAX_SKILL_GROWTH_YEARS)
    skill_growth = [
        {
            "skillName": s["skillName"],
            "initialExperience": max(0, s["experienceYears"] - growth),
            "currentExperience": s["experienceYears"],
            "growth": growth,
            "projects": project_count,
        }
        for s in current_skills
    ]

    current_level = employee.seniority or "Junior"
    next_level = _next_level(current_level)

    readiness = min(
        100,
        round(
            (project_count * 10 + len(current_skills) * 5
             + (employee.total_experience_years or 0) * 2) / 3
        ),
    )

    if readiness >= 80 and next_level:
        recommendations = [f"Ready for promotion to {next_level} level"]
    elif readiness < 50:
        recommendations = [
            "Gain more project experience to advance",
            "Develop additional skills in your domain",
        ]
    else:
        recommendations = [
            "Continue building project experience",
            "Take on more challenging projects",
        ]

    return {
        "employeeId": employee.id,
        "employeeName": employee.full_name,
        "currentSkills": current_skills,
        "projectHistory": project_history,
        "skillGrowth": skill_growth,
        "careerPath": {
            "currentLevel": current_level,
            "nextLevel": next_level,
            "readinessScore": readiness,
            "recommendations": recommendations,
        },
    }
