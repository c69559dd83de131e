"""Shared test helpers."""

import tempfile
from pathlib import Path

import pytest

from team_matcher.agents.providers.base import LLMProvider


class FakeProvider(LLMProvider):
    """Provider returning a canned response (or raising a canned error)."""

    def __init__(self, response: str = "[]", error: Exception = None, model: str = "fake-model"):
        self.response = response
        self.error = error
        self.model = model
        self.calls = []

    @property
    def name(self) -> str:
        return "fake"

    def generate(self, prompt: str, system: str, temperature: float = 0.7) -> str:
        self.calls.append({"prompt": prompt, "system": system, "temperature": temperature})
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def db_path():
    from team_matcher.db.migrations import run_migrations

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    run_migrations(path)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def roster(db_path):
    """Three employees with overlapping skills. Returns their ids by first name."""
    from team_matcher.db.employees import EmployeeRepository

    repo = EmployeeRepository(db_path)
    return {
        "alice": repo.create(
            "Alice Smith", role="Backend Engineer", seniority="Senior",
            total_experience_years=8, location="Berlin",
            skills={"Python": 6, "PostgreSQL": 4}, languages=["English", "German"],
        ),
        "bob": repo.create(
            "Bob Jones", role="Frontend Engineer", seniority="Mid",
            total_experience_years=4, location="Berlin",
            skills={"React": 3, "TypeScript": 3}, languages=["English"],
        ),
        "carol": repo.create(
            "Carol White", role="Data Engineer", seniority="Junior",
            total_experience_years=1, location="Lisbon",
            skills={"Python": 1}, languages=["Portuguese", "English"],
        ),
    }


@pytest.fixture
def project_id(db_path, roster):
    from team_matcher.db.projects import ProjectRepository
    from team_matcher.models import SeniorityRequirement, SkillRequirement

    return ProjectRepository(db_path).create(
        "Payments API",
        description="Rebuild the payments API in Python",
        skills=[SkillRequirement("Python", 3), SkillRequirement("PostgreSQL", 2)],
        seniority=[SeniorityRequirement("Senior", 1)],
    )


@pytest.fixture(autouse=True)
def clean_provider(monkeypatch):
    """Isolate tests from real credentials and the shared provider."""
    from team_matcher.agents.client import reset_provider

    for var in (
        "AI_PROVIDER", "GROQ_API_KEY", "OPENAI_API_KEY", "GROQ_MODEL", "OPENAI_MODEL",
        "AI_TEMPERATURE", "AI_MAX_TOKENS", "DEFAULT_DURATION_WEEKS",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_provider()
    yield
    reset_provider()
