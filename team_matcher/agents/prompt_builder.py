"""Build the matching prompt sent to the language model."""

import json
from typing import Iterable, Union

from team_matcher.agents.prompts import load_prompt
from team_matcher.models import Employee


def employee_profiles(employees: Iterable[Employee]) -> list[dict]:
    """Serialize the roster into the profile shape the model sees."""
    return [
        {
            "id": employee.id,
            "fullname": employee.full_name,
            "skills": ", ".join(employee.skill_names()),
            "role": employee.role or None,
            "seniority": employee.seniority or None,
            "total_experience_years": employee.total_experience_years,
        }
        for employee in employees
    ]


def _skill_name(skill: Union[str, dict]) -> str:
    if isinstance(skill, dict):
        return skill.get("name", "")
    return skill


def build_match_prompt(
    project_description: str,
    employees: list[Employee],
    skills: list[Union[str, dict]],
) -> str:
    """Assemble the skill catalog, project description and roster into one prompt.

    Sections with no content are left out. The fixed instruction asking for
    a JSON array of ``{employeeId, employeeName, score}`` always closes the
    prompt. Same inputs always give the same prompt.
    """
    sections = []

    if skills:
        names = ", ".join(_skill_name(s) for s in skills)
        sections.append(f"# The available skills are: {names}")

    if project_description:
        sections.append(f"# The project description is: {project_description} .")

    if employees:
        profiles = json.dumps(employee_profiles(employees), indent=2)
        sections.append(f"# The profiles are: {profiles}")

    sections.append(load_prompt("match_instruction").strip())
    return "\n\n".join(sections)
