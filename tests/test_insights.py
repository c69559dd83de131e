"""Tests for alternative teams and success prediction."""

import json

from conftest import FakeProvider
from team_matcher.models import (
    Employee,
    Project,
    SeniorityRequirement,
    SkillExperience,
    SkillRequirement,
    TeamMember,
)


def _employees():
    return [
        Employee(id=1, full_name="Alice Smith", seniority="Senior", total_experience_years=8,
                 skills=[SkillExperience("Python", 6)]),
        Employee(id=2, full_name="Bob Jones", skills=[SkillExperience("React", 3)]),
    ]


def _project():
    return Project(
        id=1,
        name="Payments API",
        description="Rebuild the payments API",
        skills=[SkillRequirement("Python", 3)],
        seniority=[SeniorityRequirement("Senior", 1)],
    )


# --- Alternative teams ---

def test_alternative_teams_from_model():
    from team_matcher.agents.insights import TEAMS_TEMPERATURE, generate_alternative_teams

    response = json.dumps([
        {"strategy": "fast", "strategyName": "Sprinters", "employees": [{"employeeId": 2, "score": 70}],
         "estimatedCompletionWeeks": 6, "successProbability": 65},
        {"strategy": "balanced", "strategyName": "Mix", "employees": [{"employeeId": 1, "score": 90}]},
        {"strategy": "experienced", "strategyName": "Veterans", "employees": []},
    ])
    provider = FakeProvider(response=f"```json\n{response}\n```")

    teams = generate_alternative_teams("Rebuild the payments API", _employees(), [{"name": "Python"}], provider=provider)

    assert [t["strategy"] for t in teams] == ["fast", "balanced", "experienced"]
    assert teams[0]["strategyName"] == "Sprinters"
    assert teams[0]["estimatedCompletionWeeks"] == 6
    assert teams[1]["employees"] == [{"employeeId": 1, "score": 90}]
    assert teams[1]["successProbability"] == 70

    call = provider.calls[0]
    assert call["temperature"] == TEAMS_TEMPERATURE
    assert "Alice Smith" in call["prompt"]
    assert "Available Skills: Python" in call["prompt"]


def test_normalize_alternative_teams_fills_missing_strategies():
    from team_matcher.agents.insights import normalize_alternative_teams

    teams = normalize_alternative_teams([
        {"strategy": "balanced", "strategyName": "First"},
        {"strategy": "balanced", "strategyName": "Duplicate"},
        {"strategy": "unknown"},
        "not a team",
    ])

    assert len(teams) == 3
    assert teams[0]["strategyName"] == "First"
    assert {t["strategy"] for t in teams} == {"fast", "balanced", "experienced"}
    filled = [t for t in teams if t["strategy"] == "fast"][0]
    assert filled["strategyName"] == "Fast Team"
    assert filled["employees"] == []


def test_alternative_teams_fall_back_on_unparseable_response():
    from team_matcher.agents.insights import default_alternative_teams, generate_alternative_teams

    provider = FakeProvider(response="Sorry, I cannot help with that.")

    teams = generate_alternative_teams("x", _employees(), [], provider=provider)

    assert teams == default_alternative_teams()


def test_alternative_teams_fall_back_without_credentials(tmp_path):
    from team_matcher.agents.insights import default_alternative_teams, generate_alternative_teams
    from team_matcher.config import MatchingConfig

    config = MatchingConfig(db_path=tmp_path / "t.db", provider="groq")

    assert generate_alternative_teams("x", _employees(), [], config=config) == default_alternative_teams()


# --- Prediction ---

def test_prediction_is_clamped_and_capped():
    from team_matcher.agents.insights import predict_project_success

    response = json.dumps({
        "successProbability": 140,
        "estimatedCompletionWeeks": 9,
        "riskFactors": [f"risk {i}" for i in range(8)],
        "strengths": ["Strong Python"],
        "recommendations": "not a list",
    })
    team = [TeamMember(project_id=1, employee=_employees()[0], score=91)]
    provider = FakeProvider(response=response)

    prediction = predict_project_success(_project(), team, provider=provider)

    assert prediction["successProbability"] == 100
    assert prediction["estimatedCompletionWeeks"] == 9
    assert len(prediction["riskFactors"]) == 5
    assert prediction["strengths"] == ["Strong Python"]
    assert prediction["recommendations"] == []
    assert "Required Seniority: Senior" in provider.calls[0]["prompt"]


def test_prediction_recovers_object_from_prose():
    from team_matcher.agents.insights import predict_project_success

    provider = FakeProvider(response='Here you go: {"successProbability": "55", "riskFactors": []} Thanks!')

    prediction = predict_project_success(_project(), [], provider=provider)

    assert prediction["successProbability"] == 55
    assert prediction["estimatedCompletionWeeks"] == 12


def test_prediction_falls_back_on_provider_error():
    from team_matcher.agents.insights import default_prediction, predict_project_success
    from team_matcher.orchestrator.errors import ProviderError

    provider = FakeProvider(error=ProviderError("Service unavailable", status_code=503))

    assert predict_project_success(_project(), [], provider=provider) == default_prediction()


def test_normalize_prediction_handles_bad_probability():
    from team_matcher.agents.insights import normalize_prediction

    assert normalize_prediction({"successProbability": "high"})["successProbability"] == 70
    assert normalize_prediction({"successProbability": -5})["successProbability"] == 0
