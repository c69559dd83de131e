"""Rank employees against a project's skill and seniority requirements."""

from typing import Iterable, Optional

from team_matcher.models import Employee, Project

SKILL_MATCH_POINTS = 10
MAX_EXCESS_BONUS = 5
SENIORITY_MATCH_POINTS = 5


def _score_employee(project: Project, employee: Employee) -> dict:
    experience = {s.skill_name: s.experience_years or 0 for s in employee.skills}
    required_levels = {s.level for s in project.seniority}

    match_score = 0.0
    matched = 0
    skill_matches = []

    for requirement in project.skills:
        has = experience.get(requirement.skill_name)
        is_match = has is not None and has >= requirement.min_experience_years
        if is_match:
            matched += 1
            match_score += SKILL_MATCH_POINTS
            match_score += min(has - requirement.min_experience_years, MAX_EXCESS_BONUS)
        skill_matches.append({
            "skillName": requirement.skill_name,
            "required": requirement.min_experience_years,
            "has": has if is_match else 0,
            "match": is_match,
        })

    seniority_match = employee.seniority in required_levels
    if seniority_match:
        match_score += SENIORITY_MATCH_POINTS

    total = len(project.skills)
    return {
        "employeeId": employee.id,
        "fullName": employee.full_name,
        "role": employee.role,
        "seniority": employee.seniority,
        "totalExperienceYears": employee.total_experience_years,
        "location": employee.location,
        "languages": list(employee.languages),
        "skills": [
            {"name": s.skill_name, "experienceYears": s.experience_years}
            for s in employee.skills
        ],
        "matchScore": match_score,
        "skillMatchPercentage": (matched / total) * 100 if total > 0 else 0,
        "skillMatches": skill_matches,
        "seniorityMatch": seniority_match,
        "isQualified": total > 0 and matched == total,
    }


def rank_qualified_employees(
    project: Project,
    employees: Iterable[Employee],
    exclude_ids: Optional[Iterable[int]] = None,
) -> list[dict]:
    """Score every employee not already on the team.

    Each required skill held with enough experience earns 10 points plus up
    to 5 for excess years; matching a required seniority level earns 5.
    Fully qualified employees come first, then by score.
    """
    excluded = set(exclude_ids or [])
    ranked = [
        _score_employee(project, employee)
        for employee in employees
        if employee.id not in excluded
    ]
    ranked.sort(key=lambda r: (not r["isQualified"], -r["matchScore"]))
    return ranked
