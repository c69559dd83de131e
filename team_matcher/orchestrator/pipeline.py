"""Matching pipeline - ranks the roster for a project and persists the team."""

import logging
import sqlite3
import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from team_matcher.agents.client import classify_provider_error, get_provider
from team_matcher.agents.prompt_builder import build_match_prompt
from team_matcher.agents.prompts import load_prompt
from team_matcher.agents.providers.base import LLMProvider
from team_matcher.config import MatchingConfig
from team_matcher.db.config import get_db_path
from team_matcher.db.employees import EmployeeRepository
from team_matcher.db.match_runs import MatchRunRepository
from team_matcher.db.projects import ProjectRepository
from team_matcher.matching.persister import persist_matches
from team_matcher.models import Project
from team_matcher.orchestrator.errors import (
    ConfigurationError,
    MissingCredentialError,
    ProviderError,
)
from team_matcher.orchestrator.logging import PipelineLogger
from team_matcher.parsing import parse_candidates

logger = logging.getLogger(__name__)


@dataclass
class MatchOutcome:
    """Result of one pipeline run.

    status is one of: completed, skipped, config_error, provider_error,
    parse_error, storage_error, error.
    """

    project_id: int
    status: str
    provider: Optional[str] = None
    model: Optional[str] = None
    candidates_found: int = 0
    assignments_created: int = 0
    discarded_ids: list[int] = field(default_factory=list)
    parse_strategy: Optional[str] = None
    error_type: Optional[str] = None
    error: Optional[str] = None
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "status": self.status,
            "provider": self.provider,
            "model": self.model,
            "candidates_found": self.candidates_found,
            "assignments_created": self.assignments_created,
            "discarded_ids": self.discarded_ids,
            "parse_strategy": self.parse_strategy,
            "error_type": self.error_type,
            "error": self.error,
            "duration_seconds": round(self.duration_seconds, 2),
        }


class MatchPipeline:
    """Runs one project through prompt, model call, parse and persist.

    ``run`` reports every failure through its :class:`MatchOutcome` and
    never raises.
    """

    def __init__(self, config: MatchingConfig, provider: Optional[LLMProvider] = None):
        self.config = config
        self.provider = provider
        self.projects = ProjectRepository(config.db_path)
        self.employees = EmployeeRepository(config.db_path)
        self.runs = MatchRunRepository(config.db_path)
        self.logger = PipelineLogger()

    def run(self, project_id: int) -> MatchOutcome:
        started = time.time()
        run_id = None

        try:
            project = self.projects.get(project_id)
            if project is None:
                outcome = self._skip(project_id, "project_not_found")
            else:
                run_id = self.runs.start(
                    project_id,
                    provider=self._provider_name(),
                    model=self._model_name(),
                )
                outcome = self._match(project)
        except sqlite3.Error as e:
            self.logger.error(project_id, type(e).__name__, str(e), category="storage")
            outcome = MatchOutcome(
                project_id=project_id,
                status="storage_error",
                error_type=type(e).__name__,
                error=str(e),
            )
        except Exception as e:
            logger.exception(f"Unexpected matching failure for project {project_id}")
            self.logger.error(project_id, type(e).__name__, str(e), category="unexpected")
            outcome = MatchOutcome(
                project_id=project_id,
                status="error",
                error_type=type(e).__name__,
                error=str(e),
            )

        outcome.duration_seconds = time.time() - started
        if run_id is not None:
            self._finish_run(run_id, outcome)
        if outcome.ok:
            self.logger.match_completed(
                project_id,
                outcome.candidates_found,
                outcome.assignments_created,
                outcome.duration_seconds,
            )
        return outcome

    def _provider_name(self) -> str:
        return self.provider.name if self.provider else self.config.provider

    def _model_name(self) -> str:
        return self.provider.model if self.provider else self.config.model_for()

    def _skip(self, project_id: int, reason: str) -> MatchOutcome:
        self.logger.match_skipped(project_id, reason)
        return MatchOutcome(project_id=project_id, status="skipped", error=reason)

    def _match(self, project: Project) -> MatchOutcome:
        project_id = project.id

        if not (project.description or "").strip():
            return self._skip(project_id, "missing_description")

        employees = self.employees.list_all()
        if not employees:
            return self._skip(project_id, "empty_roster")

        skills = self.employees.list_skills()
        if not skills:
            return self._skip(project_id, "empty_skill_catalog")

        prompt = build_match_prompt(project.description, employees, skills)

        try:
            provider = self.provider or get_provider(self.config)
        except ConfigurationError as e:
            category = "missing_credential" if isinstance(e, MissingCredentialError) else "unsupported_provider"
            self.logger.error(project_id, type(e).__name__, str(e), category=category)
            return MatchOutcome(
                project_id=project_id,
                status="config_error",
                provider=e.provider,
                error_type=type(e).__name__,
                error=str(e),
            )

        outcome = MatchOutcome(
            project_id=project_id,
            status="completed",
            provider=provider.name,
            model=provider.model,
        )
        self.logger.match_started(project_id, provider.name, provider.model, len(prompt))

        try:
            text = provider.generate(
                prompt,
                load_prompt("match_system").strip(),
                temperature=self.config.temperature,
            )
        except ProviderError as e:
            self.logger.error(project_id, type(e).__name__, str(e), category=classify_provider_error(e))
            outcome.status = "provider_error"
            outcome.error_type = type(e).__name__
            outcome.error = str(e)
            return outcome

        parsed = parse_candidates(text)
        outcome.parse_strategy = parsed.strategy
        if parsed.strategy == "failed":
            self.logger.error(project_id, "ResponseParseError", parsed.error or "No candidates recovered")
            outcome.status = "parse_error"
            outcome.error_type = "ResponseParseError"
            outcome.error = parsed.error
            return outcome

        if parsed.strategy == "recovered":
            self.logger.response_recovered(project_id, len(parsed.candidates))

        outcome.candidates_found = len(parsed.candidates)
        result = persist_matches(self.config.db_path, project_id, parsed.candidates)
        outcome.assignments_created = result.inserted
        outcome.discarded_ids = result.discarded_ids
        if result.discarded_ids:
            self.logger.candidates_discarded(project_id, result.discarded_ids)

        return outcome

    def _finish_run(self, run_id: int, outcome: MatchOutcome) -> None:
        try:
            self.runs.finish(
                run_id,
                status=outcome.status,
                candidates_found=outcome.candidates_found,
                assignments_created=outcome.assignments_created,
                error_type=outcome.error_type,
                error_message=outcome.error,
                provider=outcome.provider,
                model=outcome.model,
            )
        except sqlite3.Error as e:
            logger.warning(f"Could not record match run {run_id}: {e}")


def _detached_config(project_id: int, db_path: Optional[Path]) -> Optional[MatchingConfig]:
    """Build the run's config from the environment, recording a config_error run on failure."""
    try:
        config = MatchingConfig.from_env()
    except ConfigurationError as e:
        PipelineLogger().error(project_id, type(e).__name__, str(e), category="invalid_setting")
        runs = MatchRunRepository(db_path or get_db_path())
        run_id = runs.start(project_id)
        runs.finish(run_id, status="config_error", error_type=type(e).__name__, error_message=str(e))
        return None

    if db_path is not None:
        config = replace(config, db_path=Path(db_path))
    return config


def _run_detached(
    project_id: int,
    config: Optional[MatchingConfig],
    provider: Optional[LLMProvider],
    db_path: Optional[Path] = None,
) -> None:
    try:
        config = config or _detached_config(project_id, db_path)
        if config is not None:
            MatchPipeline(config, provider=provider).run(project_id)
    except Exception:
        logger.exception(f"Detached matching failed for project {project_id}")


def spawn_match(
    project_id: int,
    config: Optional[MatchingConfig] = None,
    provider: Optional[LLMProvider] = None,
    db_path: Optional[Path] = None,
) -> threading.Thread:
    """Start matching for a project on a daemon thread and return immediately.

    Without ``config`` the thread reads it from the environment, pointed
    at ``db_path`` when given. The caller gets no result; outcomes land in
    the team table, the match_runs table and the logs.
    """
    thread = threading.Thread(
        target=_run_detached,
        args=(project_id, config, provider, db_path),
        name=f"match-project-{project_id}",
        daemon=True,
    )
    thread.start()
    return thread
