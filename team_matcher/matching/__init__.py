"""Candidate validation and team persistence."""

from team_matcher.matching.persister import (
    Candidate,
    PersistResult,
    normalize_candidates,
    persist_matches,
)

__all__ = ["Candidate", "PersistResult", "normalize_candidates", "persist_matches"]
