"""Employee and skill catalog repository."""

import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from team_matcher.db.connection import get_db
from team_matcher.models import Employee, SkillExperience


def get_or_create_named(cursor: sqlite3.Cursor, table: str, name: str) -> int:
    """Return the id of a catalog row (skills, locations, languages), creating it if needed."""
    if table not in ("skills", "locations", "languages"):
        raise ValueError(f"Not a catalog table: {table}")
    cursor.execute(f"INSERT OR IGNORE INTO {table} (name) VALUES (?)", (name,))
    cursor.execute(f"SELECT id FROM {table} WHERE name = ?", (name,))
    return cursor.fetchone()[0]


class EmployeeRepository:
    """Repository for employees and the shared skill catalog."""

    def __init__(self, db_path: Path):
        self.db_path = str(db_path)

    def create(
        self,
        full_name: str,
        role: Optional[str] = None,
        seniority: Optional[str] = None,
        total_experience_years: float = 0,
        location: Optional[str] = None,
        skills: Optional[dict[str, float]] = None,
        languages: Optional[Iterable[str]] = None,
    ) -> int:
        """Create an employee with skill experience and spoken languages."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            location_id = get_or_create_named(cursor, "locations", location) if location else None
            cursor.execute(
                """
                INSERT INTO employees
                (full_name, role, seniority, total_experience_years, location_id)
                VALUES (?, ?, ?, ?, ?)
                """,
                (full_name, role, seniority, total_experience_years, location_id)
            )
            employee_id = cursor.lastrowid

            for skill_name, years in (skills or {}).items():
                skill_id = get_or_create_named(cursor, "skills", skill_name)
                cursor.execute(
                    """
                    INSERT OR REPLACE INTO employee_skills (employee_id, skill_id, experience_years)
                    VALUES (?, ?, ?)
                    """,
                    (employee_id, skill_id, years)
                )

            for language in languages or []:
                language_id = get_or_create_named(cursor, "languages", language)
                cursor.execute(
                    "INSERT OR IGNORE INTO employee_languages (employee_id, language_id) VALUES (?, ?)",
                    (employee_id, language_id)
                )

            conn.commit()

        return employee_id

    def get(self, employee_id: int) -> Optional[Employee]:
        """Get one employee with skills and languages."""
        employees = self._load(ids=[employee_id])
        return employees[0] if employees else None

    def list_all(self) -> list[Employee]:
        """Get the full roster ordered by id."""
        return self._load()

    def list_by_ids(self, ids: Iterable[int]) -> list[Employee]:
        ids = list(ids)
        if not ids:
            return []
        return self._load(ids=ids)

    def find_existing_ids(self, ids: Iterable[int]) -> set[int]:
        """Return the subset of ids that exist in the employees table."""
        ids = list(dict.fromkeys(ids))
        if not ids:
            return set()

        placeholders = ",".join("?" * len(ids))
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT id FROM employees WHERE id IN ({placeholders})",
                ids
            )
            return {row["id"] for row in cursor.fetchall()}

    def list_skills(self) -> list[dict]:
        """Get the skill catalog ordered by name."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name FROM skills ORDER BY name ASC")
            return [dict(row) for row in cursor.fetchall()]

    def create_skill(self, name: str) -> int:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            skill_id = get_or_create_named(cursor, "skills", name)
            conn.commit()
        return skill_id

    def _load(self, ids: Optional[list[int]] = None) -> list[Employee]:
        where = ""
        params: list = []
        if ids is not None:
            where = f"WHERE e.id IN ({','.join('?' * len(ids))})"
            params = list(ids)

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT e.id, e.full_name, e.role, e.seniority,
                       e.total_experience_years, l.name AS location
                FROM employees e
                LEFT JOIN locations l ON l.id = e.location_id
                {where}
                ORDER BY e.id ASC
                """,
                params
            )
            employees = {
                row["id"]: Employee(
                    id=row["id"],
                    full_name=row["full_name"],
                    role=row["role"],
                    seniority=row["seniority"],
                    total_experience_years=row["total_experience_years"] or 0,
                    location=row["location"],
                )
                for row in cursor.fetchall()
            }
            if not employees:
                return []

            emp_ids = list(employees)
            placeholders = ",".join("?" * len(emp_ids))

            cursor.execute(
                f"""
                SELECT es.employee_id, s.id AS skill_id, s.name, es.experience_years
                FROM employee_skills es
                JOIN skills s ON s.id = es.skill_id
                WHERE es.employee_id IN ({placeholders})
                ORDER BY s.name ASC
                """,
                emp_ids
            )
            for row in cursor.fetchall():
                employees[row["employee_id"]].skills.append(
                    SkillExperience(
                        skill_name=row["name"],
                        experience_years=row["experience_years"],
                        skill_id=row["skill_id"],
                    )
                )

            cursor.execute(
                f"""
                SELECT el.employee_id, lg.name
                FROM employee_languages el
                JOIN languages lg ON lg.id = el.language_id
                WHERE el.employee_id IN ({placeholders})
                ORDER BY lg.name ASC
                """,
                emp_ids
            )
            for row in cursor.fetchall():
                employees[row["employee_id"]].languages.append(row["name"])

        return list(employees.values())
