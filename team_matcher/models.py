"""Data types shared by the repositories, the pipeline and analytics."""

from dataclasses import dataclass, field
from typing import Optional


SENIORITY_LEVELS = ["Junior", "Mid", "Senior", "Lead", "Principal"]


@dataclass
class SkillExperience:
    """Years of experience an employee has with one skill."""

    skill_name: str
    experience_years: float = 0
    skill_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "skill_id": self.skill_id,
            "skill_name": self.skill_name,
            "experience_years": self.experience_years,
        }


@dataclass
class Employee:
    """An employee profile as loaded from the roster."""

    id: int
    full_name: str
    role: Optional[str] = None
    seniority: Optional[str] = None
    total_experience_years: float = 0
    location: Optional[str] = None
    skills: list[SkillExperience] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)

    def skill_names(self) -> list[str]:
        return [s.skill_name for s in self.skills if s.skill_name]

    def to_dict(self) -> dict:
        """Convert to dictionary for tool responses."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "role": self.role,
            "seniority": self.seniority,
            "total_experience_years": self.total_experience_years,
            "location": self.location,
            "skills": [s.to_dict() for s in self.skills],
            "languages": list(self.languages),
        }


@dataclass
class SkillRequirement:
    """A skill a project needs, with the minimum years expected."""

    skill_name: str
    min_experience_years: float = 0
    skill_id: Optional[int] = None


@dataclass
class SeniorityRequirement:
    """How many people of a given seniority level a project needs."""

    level: str
    required_count: int = 1


@dataclass
class Project:
    """A project with its ordered skill and seniority requirements."""

    id: int
    name: str
    description: Optional[str] = None
    skills: list[SkillRequirement] = field(default_factory=list)
    seniority: list[SeniorityRequirement] = field(default_factory=list)
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.name,
            "description": self.description or "",
            "skills": [
                {
                    "id": s.skill_id,
                    "name": s.skill_name,
                    "minExperienceYears": s.min_experience_years,
                }
                for s in self.skills
            ],
            "seniority": [
                {"level": s.level, "requiredCount": s.required_count}
                for s in self.seniority
            ],
        }


@dataclass
class TeamMember:
    """A persisted team assignment joined with its employee."""

    project_id: int
    employee: Employee
    score: Optional[float] = None

    @property
    def employee_id(self) -> int:
        return self.employee.id

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "employee_id": self.employee.id,
            "score": self.score,
            "employee": self.employee.to_dict(),
        }
