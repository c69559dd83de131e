"""Tool input schemas - centralized validation

Each tool that accepts structured input validates it here before touching
the database.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from team_matcher.models import SeniorityRequirement, SkillRequirement


class SkillRequirementInput(BaseModel):
    """A required skill, identified by catalog id or by name."""

    skill_id: Optional[int] = Field(default=None, ge=1, description="Skill catalog id")
    skill_name: Optional[str] = Field(default=None, max_length=100, description="Skill name")
    min_experience_years: float = Field(
        default=0,
        ge=0,
        description="Minimum years of experience with the skill"
    )

    @field_validator('skill_name')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if v else v

    def to_requirement(self, names_by_id: Optional[dict[int, str]] = None) -> SkillRequirement:
        name = self.skill_name or (names_by_id or {}).get(self.skill_id, "")
        return SkillRequirement(
            skill_name=name,
            min_experience_years=self.min_experience_years,
            skill_id=self.skill_id,
        )


class SeniorityRequirementInput(BaseModel):
    """How many people of one seniority level the project needs."""

    level: str = Field(..., min_length=1, max_length=50, description="Seniority level")
    required_count: int = Field(default=1, ge=1, le=100, description="Headcount at this level")

    def to_requirement(self) -> SeniorityRequirement:
        return SeniorityRequirement(level=self.level.strip(), required_count=self.required_count)


class CreateProjectInput(BaseModel):
    """Schema for project creation

    Used by: create_project tool
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Payments API",
            "description": "Rebuild the payments API in Python with FastAPI",
            "skills": [{"skill_name": "Python", "min_experience_years": 3}],
            "seniority": [{"level": "Senior", "required_count": 1}]
        }
    })

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Project name"
    )
    description: Optional[str] = Field(
        default=None,
        max_length=5000,
        description="Free-text project description used for matching"
    )
    skills: list[SkillRequirementInput] = Field(default_factory=list)
    seniority: list[SeniorityRequirementInput] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Ensure name is not just whitespace"""
        if not v.strip():
            raise ValueError("Project name cannot be empty or whitespace only")
        return v.strip()

    @field_validator('description')
    @classmethod
    def normalize_description(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        """Every skill needs an id or a name"""
        for skill in v:
            if skill.skill_id is None and not skill.skill_name:
                raise ValueError("Each skill requires skill_id or skill_name")
        return v


class SaveTeamInput(BaseModel):
    """Schema for replacing a project's team

    Used by: save_project_team tool
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "project_id": 1,
            "employee_ids": [3, 7, 12]
        }
    })

    project_id: int = Field(..., ge=1, description="Project id")
    employee_ids: list[int] = Field(default_factory=list, description="Employees to assign")


class TeamBudgetInput(BaseModel):
    """Schema for budget estimation

    Used by: get_team_budget tool
    """
    project_id: int = Field(..., ge=1, description="Project id")
    employee_ids: Optional[list[int]] = Field(
        default=None,
        description="Price these employees instead of the saved team"
    )
    project_duration_weeks: float = Field(
        default=12,
        gt=0,
        le=520,
        description="Planned project duration in weeks"
    )
