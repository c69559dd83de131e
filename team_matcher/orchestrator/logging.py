"""Structured logging for the matching pipeline."""

import json
import logging
from datetime import datetime, timezone


class PipelineLogger:
    """Structured JSON logger for matching events."""

    def __init__(self, name: str = "team_matcher.pipeline"):
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def _log(self, level: int, event: str, **kwargs):
        """Log a structured event."""
        data = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **kwargs
        }
        self.logger.log(level, json.dumps(data))

    def match_started(self, project_id: int, provider: str, model: str, prompt_chars: int):
        """Log the start of a provider call."""
        self._log(
            logging.INFO,
            "match_started",
            project_id=project_id,
            provider=provider,
            model=model,
            prompt_chars=prompt_chars
        )

    def match_skipped(self, project_id: int, reason: str):
        self._log(logging.WARNING, "match_skipped", project_id=project_id, reason=reason)

    def response_recovered(self, project_id: int, recovered: int):
        """Log that candidates were salvaged from a malformed response."""
        self._log(
            logging.WARNING,
            "response_recovered",
            project_id=project_id,
            recovered=recovered
        )

    def candidates_discarded(self, project_id: int, employee_ids: list[int]):
        """Log candidate ids that do not exist in the roster."""
        self._log(
            logging.WARNING,
            "candidates_discarded",
            project_id=project_id,
            employee_ids=employee_ids
        )

    def match_completed(self, project_id: int, candidates: int, inserted: int, duration_seconds: float):
        """Log pipeline completion."""
        self._log(
            logging.INFO,
            "match_completed",
            project_id=project_id,
            candidates=candidates,
            inserted=inserted,
            duration_seconds=round(duration_seconds, 2)
        )

    def error(self, project_id: int, error_type: str, message: str, category: str = None):
        """Log an error."""
        self._log(
            logging.ERROR,
            "error",
            project_id=project_id,
            error_type=error_type,
            category=category,
            message=message
        )
