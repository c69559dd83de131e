"""Team assignment repository.

At most one row exists per (project, employee) pair. Inserts use
``INSERT OR IGNORE`` so re-running a persist never duplicates a pair and
never raises for one.
"""

from pathlib import Path
from typing import Iterable, Optional

from team_matcher.db.connection import get_db
from team_matcher.db.employees import EmployeeRepository
from team_matcher.models import TeamMember


class TeamRepository:
    """Repository for project_team rows."""

    def __init__(self, db_path: Path):
        self.db_path = str(db_path)

    def insert_many(
        self,
        project_id: int,
        rows: Iterable[tuple[int, Optional[float]]],
    ) -> int:
        """Insert (employee_id, score) rows, skipping existing pairs.

        Returns:
            Number of rows actually inserted.
        """
        rows = [(project_id, employee_id, score) for employee_id, score in rows]
        if not rows:
            return 0

        with get_db(self.db_path) as conn:
            before = conn.total_changes
            conn.executemany(
                """
                INSERT OR IGNORE INTO project_team (project_id, employee_id, score)
                VALUES (?, ?, ?)
                """,
                rows
            )
            conn.commit()
            return conn.total_changes - before

    def replace_for_project(self, project_id: int, employee_ids: Iterable[int]) -> int:
        """Swap a project's team for unscored assignments in one transaction.

        Returns:
            Number of rows inserted.
        """
        rows = [(project_id, employee_id, None) for employee_id in employee_ids]

        with get_db(self.db_path) as conn:
            conn.execute("DELETE FROM project_team WHERE project_id = ?", (project_id,))
            before = conn.total_changes
            conn.executemany(
                """
                INSERT OR IGNORE INTO project_team (project_id, employee_id, score)
                VALUES (?, ?, ?)
                """,
                rows
            )
            inserted = conn.total_changes - before
            conn.commit()
            return inserted

    def employee_ids_for_project(self, project_id: int) -> set[int]:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT employee_id FROM project_team WHERE project_id = ?",
                (project_id,)
            )
            return {row["employee_id"] for row in cursor.fetchall()}

    def list_for_project(self, project_id: int) -> list[TeamMember]:
        """Get team members sorted by score descending, manual (null) scores last."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT employee_id, score FROM project_team
                WHERE project_id = ?
                ORDER BY score IS NULL, score DESC, id ASC
                """,
                (project_id,)
            )
            rows = [dict(row) for row in cursor.fetchall()]

        employees = {
            e.id: e
            for e in EmployeeRepository(self.db_path).list_by_ids(r["employee_id"] for r in rows)
        }
        return [
            TeamMember(project_id=project_id, employee=employees[r["employee_id"]], score=r["score"])
            for r in rows
            if r["employee_id"] in employees
        ]

    def assignments_by_employee(self) -> dict[int, list[dict]]:
        """Map every employee id to the projects it is assigned to.

        Employees with no assignments map to an empty list.
        """
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM employees ORDER BY id ASC")
            result = {row["id"]: [] for row in cursor.fetchall()}

            cursor.execute(
                """
                SELECT pt.employee_id, p.id AS project_id, p.name AS project_name
                FROM project_team pt
                JOIN projects p ON p.id = pt.project_id
                ORDER BY pt.employee_id, p.id
                """
            )
            for row in cursor.fetchall():
                result.setdefault(row["employee_id"], []).append(
                    {"projectId": row["project_id"], "projectName": row["project_name"]}
                )
        return result
