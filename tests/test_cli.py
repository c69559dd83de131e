"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import FakeProvider


@pytest.fixture
def cli_db(db_path, monkeypatch):
    monkeypatch.setenv("TEAM_MATCHER_DB", str(db_path))
    return db_path


def test_version():
    from team_matcher.cli import main

    result = CliRunner().invoke(main, ["version"])

    assert result.exit_code == 0
    assert "team-matcher v0.1.0" in result.output


def test_init_creates_database(tmp_path, monkeypatch):
    from team_matcher.cli import main

    db = tmp_path / "fresh.db"
    monkeypatch.setenv("TEAM_MATCHER_DB", str(db))

    result = CliRunner().invoke(main, ["init"])

    assert result.exit_code == 0
    assert db.exists()


def test_seed_loads_roster(cli_db, tmp_path):
    from team_matcher.cli import main
    from team_matcher.db.employees import EmployeeRepository

    roster_file = tmp_path / "roster.json"
    roster_file.write_text(json.dumps({
        "skills": ["Kotlin"],
        "employees": [
            {"full_name": "Erin Black", "seniority": "Lead", "skills": {"Go": 5}, "languages": ["English"]},
            {"full_name": "Frank Green"},
        ],
    }))

    result = CliRunner().invoke(main, ["seed", str(roster_file)])

    assert result.exit_code == 0
    assert "Loaded 2 employees" in result.output
    repo = EmployeeRepository(cli_db)
    assert [e.full_name for e in repo.list_all()] == ["Erin Black", "Frank Green"]
    assert {s["name"] for s in repo.list_skills()} == {"Go", "Kotlin"}


def test_create_parses_requirements(cli_db, roster):
    from team_matcher.cli import main
    from team_matcher.db.projects import ProjectRepository

    with patch("team_matcher.mcp_server.spawn_match"):
        result = CliRunner().invoke(main, [
            "create", "-n", "Billing", "-d", "Move billing to Python",
            "-s", "Python:3", "-s", "PostgreSQL:1.5", "-l", "Senior:2", "--no-wait",
        ])

    assert result.exit_code == 0, result.output
    project = ProjectRepository(cli_db).list_all()[0]
    assert [(s.skill_name, s.min_experience_years) for s in project.skills] == [("Python", 3), ("PostgreSQL", 1.5)]
    assert [(s.level, s.required_count) for s in project.seniority] == [("Senior", 2)]


def test_create_rejects_malformed_skill(cli_db):
    from team_matcher.cli import main

    result = CliRunner().invoke(main, ["create", "-n", "Bad", "-s", "Python"])

    assert result.exit_code != 0
    assert "NAME:VALUE" in result.output


def test_create_waits_for_matching(cli_db, roster):
    from team_matcher.cli import main
    from team_matcher.db.teams import TeamRepository

    provider = FakeProvider(response=json.dumps([{"employeeId": roster["bob"], "score": 77}]))

    with patch("team_matcher.orchestrator.pipeline.get_provider", return_value=provider):
        result = CliRunner().invoke(main, ["create", "-n", "Web", "-d", "A React frontend"])

    assert result.exit_code == 0, result.output
    assert "Created project" in result.output
    project_id = int(result.output.split("Created project ")[1].split()[0])
    assert TeamRepository(cli_db).employee_ids_for_project(project_id) == {roster["bob"]}


def test_projects_and_show(cli_db, roster, project_id):
    from team_matcher.cli import main
    from team_matcher.db.teams import TeamRepository

    TeamRepository(cli_db).insert_many(project_id, [(roster["alice"], 91)])
    runner = CliRunner()

    listing = runner.invoke(main, ["projects"])
    shown = runner.invoke(main, ["show", str(project_id)])

    assert listing.exit_code == 0
    assert "Payments API" in listing.output
    assert shown.exit_code == 0
    assert "Alice Smith" in shown.output
    assert "Python" in shown.output


def test_show_missing_project(cli_db):
    from team_matcher.cli import main

    result = CliRunner().invoke(main, ["show", "404"])

    assert result.exit_code == 1
    assert "Project not found" in result.output


def test_match_reports_missing_credentials(cli_db, roster, project_id):
    from team_matcher.cli import main

    result = CliRunner().invoke(main, ["match", str(project_id)])

    assert result.exit_code == 1
    assert "config_error" in result.output
    assert "GROQ_API_KEY" in result.output


def test_match_completed(cli_db, roster, project_id):
    from team_matcher.cli import main

    provider = FakeProvider(response=json.dumps([{"employeeId": roster["alice"], "score": 90}, {"employeeId": 999}]))

    with patch("team_matcher.orchestrator.pipeline.get_provider", return_value=provider):
        result = CliRunner().invoke(main, ["match", str(project_id)])

    assert result.exit_code == 0
    assert "2 candidates, 1 added" in result.output
    assert "999" in result.output


def test_save_team_and_analytics(cli_db, roster, project_id):
    from team_matcher.cli import main

    runner = CliRunner()

    saved = runner.invoke(main, ["save-team", str(project_id), str(roster["alice"]), str(roster["carol"])])
    gaps = runner.invoke(main, ["gaps", str(project_id)])
    chemistry = runner.invoke(main, ["chemistry", str(project_id)])
    budget = runner.invoke(main, ["budget", str(project_id), "--weeks", "8"])

    assert saved.exit_code == 0
    assert "Saved team of 2" in saved.output
    assert gaps.exit_code == 0
    assert "Covered" in gaps.output
    assert chemistry.exit_code == 0
    assert "Team Chemistry" in chemistry.output
    assert budget.exit_code == 0
    assert "Value score" in budget.output


def test_delete_requires_confirmation(cli_db, project_id):
    from team_matcher.cli import main
    from team_matcher.db.projects import ProjectRepository

    runner = CliRunner()

    aborted = runner.invoke(main, ["delete", str(project_id)], input="n\n")
    assert ProjectRepository(cli_db).get(project_id) is not None

    confirmed = runner.invoke(main, ["delete", str(project_id), "--yes"])

    assert aborted.exit_code != 0
    assert confirmed.exit_code == 0
    assert ProjectRepository(cli_db).get(project_id) is None


def test_conflicts_and_runs(cli_db, roster, project_id):
    from team_matcher.cli import main

    runner = CliRunner()

    conflicts = runner.invoke(main, ["conflicts"])
    runs = runner.invoke(main, ["runs", str(project_id)])

    assert "No resource conflicts" in conflicts.output
    assert "No matching runs" in runs.output
