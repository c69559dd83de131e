"""Validate raw match candidates and persist them as team assignments."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from team_matcher.db.employees import EmployeeRepository
from team_matcher.db.teams import TeamRepository

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """A shape-checked match record: a positive employee id and optional score."""

    employee_id: int
    score: Optional[float] = None


@dataclass
class PersistResult:
    """What happened to one batch of candidates."""

    inserted: int = 0
    valid_candidates: int = 0
    discarded_ids: list[int] = field(default_factory=list)
    skipped_duplicates: int = 0

    def to_dict(self) -> dict:
        return {
            "inserted": self.inserted,
            "valid_candidates": self.valid_candidates,
            "discarded_ids": self.discarded_ids,
            "skipped_duplicates": self.skipped_duplicates,
        }


def _coerce_employee_id(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    value = int(value)
    return value if value > 0 else None


def _coerce_score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().rstrip("%"))
        except ValueError:
            return None
    return None


def normalize_candidates(raw: Iterable[Any]) -> list[Candidate]:
    """Keep records with a numeric employeeId > 0, coercing score to float or None.

    Repeated ids collapse to their first occurrence.
    """
    seen: set[int] = set()
    candidates = []
    for item in raw or []:
        if not isinstance(item, dict):
            continue
        employee_id = _coerce_employee_id(item.get("employeeId"))
        if employee_id is None or employee_id in seen:
            continue
        seen.add(employee_id)
        candidates.append(Candidate(employee_id=employee_id, score=_coerce_score(item.get("score"))))
    return candidates


def persist_matches(db_path: Path, project_id: int, raw_candidates: Iterable[Any]) -> PersistResult:
    """Validate candidates against the roster and insert the survivors.

    Unknown employee ids are dropped with a warning. Pairs already on the
    team are skipped rather than raising, so repeating a persist is safe.
    """
    result = PersistResult()

    candidates = normalize_candidates(raw_candidates)
    if not candidates:
        logger.warning(f"No valid employee IDs in candidates for project {project_id}")
        return result

    existing = EmployeeRepository(db_path).find_existing_ids(c.employee_id for c in candidates)
    result.discarded_ids = [c.employee_id for c in candidates if c.employee_id not in existing]
    if result.discarded_ids:
        logger.warning(
            f"Discarding unknown employee IDs for project {project_id}: {result.discarded_ids}"
        )

    survivors = [c for c in candidates if c.employee_id in existing]
    result.valid_candidates = len(survivors)
    if not survivors:
        return result

    result.inserted = TeamRepository(db_path).insert_many(
        project_id,
        [(c.employee_id, c.score) for c in survivors],
    )
    result.skipped_duplicates = result.valid_candidates - result.inserted

    logger.info(
        f"Added {result.inserted} employees to project {project_id}"
        f" ({result.skipped_duplicates} already assigned)"
    )
    return result
