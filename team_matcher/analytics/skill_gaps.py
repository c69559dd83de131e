"""Skill gap analysis for a project team."""

from dataclasses import dataclass, field
from typing import Iterable

from team_matcher.models import Employee, SkillRequirement


def format_years(value: float) -> str:
    """Render 5.0 as '5' and 2.5 as '2.5'."""
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass
class MissingSkill:
    skill: str
    min_experience: float
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "skill": self.skill,
            "minExperience": self.min_experience,
            "recommendation": self.recommendation,
        }


@dataclass
class WeakSkill:
    skill: str
    current_max_experience: float
    required: float
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "skill": self.skill,
            "currentMaxExperience": self.current_max_experience,
            "required": self.required,
            "recommendation": self.recommendation,
        }


@dataclass
class CoveredSkill:
    skill: str
    max_experience: float

    def to_dict(self) -> dict:
        return {"skill": self.skill, "maxExperience": self.max_experience}


@dataclass
class SkillGapReport:
    """Required skills split into missing, weak and covered."""

    missing_skills: list[MissingSkill] = field(default_factory=list)
    weak_skills: list[WeakSkill] = field(default_factory=list)
    covered_skills: list[CoveredSkill] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "missingSkills": [s.to_dict() for s in self.missing_skills],
            "weakSkills": [s.to_dict() for s in self.weak_skills],
            "coveredSkills": [s.to_dict() for s in self.covered_skills],
        }


def team_skill_experience(team: Iterable[Employee]) -> dict[str, float]:
    """Max years per skill name across the team."""
    experience: dict[str, float] = {}
    for member in team:
        for skill in member.skills:
            current = experience.get(skill.skill_name, 0)
            experience[skill.skill_name] = max(current, skill.experience_years or 0)
    return experience


def analyze_skill_gaps(
    required_skills: Iterable[SkillRequirement],
    team: Iterable[Employee],
) -> SkillGapReport:
    """Classify each required skill against the team's best experience.

    A skill nobody has (or has with 0 years) is missing, one held below the
    required minimum is weak, anything else is covered.
    """
    report = SkillGapReport()
    experience = team_skill_experience(team)

    for required in required_skills:
        name = required.skill_name
        minimum = required.min_experience_years
        team_years = experience.get(name, 0)

        if team_years <= 0:
            report.missing_skills.append(
                MissingSkill(
                    skill=name,
                    min_experience=minimum,
                    recommendation=(
                        f"Add a team member with {format_years(minimum)}+ years of {name} "
                        f"experience, or provide training to existing team members."
                    ),
                )
            )
        elif team_years < minimum:
            report.weak_skills.append(
                WeakSkill(
                    skill=name,
                    current_max_experience=team_years,
                    required=minimum,
                    recommendation=(
                        f"Current team has {format_years(team_years)} years of {name} experience, "
                        f"but {format_years(minimum)} years are required. Consider adding a more "
                        f"experienced developer or upskilling."
                    ),
                )
            )
        else:
            report.covered_skills.append(CoveredSkill(skill=name, max_experience=team_years))

    return report
