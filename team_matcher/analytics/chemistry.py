"""Team chemistry scoring.

Overall score is a weighted blend of four factors, each on a 0-100 scale:

    seniority balance       30%
    skill diversity         30%
    location compatibility  20%
    language overlap        20%
"""

from dataclasses import dataclass, field
from typing import Sequence

from team_matcher.models import Employee

WEIGHTS = {
    "seniority_balance": 0.3,
    "skill_diversity": 0.3,
    "location_compatibility": 0.2,
    "language_overlap": 0.2,
}


@dataclass
class FactorScore:
    score: float
    note: str

    def to_dict(self) -> dict:
        return {"score": self.score, "note": self.note}


@dataclass
class ChemistryReport:
    """Chemistry score, per-factor notes and improvement recommendations."""

    overall_score: int
    seniority_balance: FactorScore
    skill_diversity: FactorScore
    location_compatibility: FactorScore
    language_overlap: FactorScore
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "factors": {
                "seniorityBalance": self.seniority_balance.to_dict(),
                "skillDiversity": self.skill_diversity.to_dict(),
                "locationCompatibility": self.location_compatibility.to_dict(),
                "languageOverlap": self.language_overlap.to_dict(),
            },
            "recommendations": self.recommendations,
        }

    @classmethod
    def empty(cls) -> "ChemistryReport":
        """Report for a team with no members: everything scores 0."""
        return cls(
            overall_score=0,
            seniority_balance=FactorScore(0, "No team members"),
            skill_diversity=FactorScore(0, "No team members"),
            location_compatibility=FactorScore(0, "No team members"),
            language_overlap=FactorScore(0, "No team members"),
            recommendations=[],
        )


def calculate_team_chemistry(team: Sequence[Employee]) -> ChemistryReport:
    """Score how well a team's members fit together."""
    if not team:
        return ChemistryReport.empty()

    size = len(team)

    # Seniority balance: more distinct levels is better
    levels = {member.seniority or "Unknown" for member in team}
    seniority_score = min(100, len(levels) * 25)
    seniority_note = (
        "Good mix of experience levels"
        if len(levels) >= 2
        else "Consider adding more diverse seniority levels"
    )

    # Skill diversity: distinct skills per member
    all_skills = {name for member in team for name in member.skill_names()}
    skill_score = min(100, (len(all_skills) / size) * 30)
    skill_note = (
        "Good skill diversity"
        if len(all_skills) > size
        else "Some team members may have overlapping skills"
    )

    # Location compatibility
    locations = {member.location for member in team if member.location}
    if not locations:
        location_score = 100
        location_note = "No location data for team members"
    elif len(locations) == 1:
        location_score = 100
        location_note = "All team members in same location"
    else:
        location_score = max(50, 100 - (len(locations) - 1) * 20)
        location_note = f"{len(locations)} different locations - may need coordination"

    # Language overlap: languages every member speaks
    common = set(team[0].languages)
    for member in team[1:]:
        common &= set(member.languages)
    common_languages = sorted(common)
    language_score = 100 if common_languages else 70
    language_note = (
        f"Common language: {', '.join(common_languages)}"
        if common_languages
        else "No common language - may need translation support"
    )

    overall = round(
        seniority_score * WEIGHTS["seniority_balance"]
        + skill_score * WEIGHTS["skill_diversity"]
        + location_score * WEIGHTS["location_compatibility"]
        + language_score * WEIGHTS["language_overlap"]
    )

    recommendations = []
    if len(levels) < 2:
        recommendations.append("Add team members with different seniority levels for better balance")
    if len(all_skills) <= size:
        recommendations.append("Consider adding team members with complementary skills")
    if len(locations) > 1:
        recommendations.append("Ensure timezone coordination for distributed team")
    if not common_languages:
        recommendations.append("Establish a common communication language for the team")

    return ChemistryReport(
        overall_score=max(0, min(100, overall)),
        seniority_balance=FactorScore(seniority_score, seniority_note),
        skill_diversity=FactorScore(round(skill_score, 2), skill_note),
        location_compatibility=FactorScore(location_score, location_note),
        language_overlap=FactorScore(language_score, language_note),
        recommendations=recommendations[:4],
    )
