"""Match run history repository."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from team_matcher.db.connection import get_db


class MatchRunRepository:
    """Records each matching pipeline run for diagnosis."""

    def __init__(self, db_path: Path):
        self.db_path = str(db_path)

    def start(self, project_id: int, provider: Optional[str] = None, model: Optional[str] = None) -> int:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO match_runs (project_id, provider, model, status, started_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (project_id, provider, model, "running", datetime.now(timezone.utc).isoformat())
            )
            conn.commit()
            return cursor.lastrowid

    def finish(
        self,
        run_id: int,
        status: str,
        candidates_found: int = 0,
        assignments_created: int = 0,
        error_type: Optional[str] = None,
        error_message: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        """Close a run with its outcome."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE match_runs SET
                    status = ?,
                    candidates_found = ?,
                    assignments_created = ?,
                    error_type = ?,
                    error_message = ?,
                    provider = COALESCE(?, provider),
                    model = COALESCE(?, model),
                    finished_at = ?
                WHERE id = ?
                """,
                (
                    status,
                    candidates_found,
                    assignments_created,
                    error_type,
                    error_message,
                    provider,
                    model,
                    datetime.now(timezone.utc).isoformat(),
                    run_id,
                )
            )
            conn.commit()

    def get(self, run_id: int) -> Optional[dict]:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM match_runs WHERE id = ?", (run_id,))
            row = cursor.fetchone()
            return dict(row) if row else None

    def list_for_project(self, project_id: int, limit: int = 20) -> list[dict]:
        """Most recent runs first."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM match_runs
                WHERE project_id = ?
                ORDER BY id DESC
                LIMIT ?
                """,
                (project_id, limit)
            )
            return [dict(row) for row in cursor.fetchall()]
