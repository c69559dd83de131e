"""Project repository for CRUD operations."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from team_matcher.db.connection import get_db
from team_matcher.db.employees import get_or_create_named
from team_matcher.models import Project, SeniorityRequirement, SkillRequirement


class ProjectRepository:
    """Repository for project records and their requirements."""

    def __init__(self, db_path: Path):
        self.db_path = str(db_path)

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        skills: Optional[list[SkillRequirement]] = None,
        seniority: Optional[list[SeniorityRequirement]] = None,
    ) -> int:
        """Create a project with its ordered skill and seniority requirements."""
        now = datetime.now(timezone.utc).isoformat()

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO projects (name, description, created_at) VALUES (?, ?, ?)",
                (name, description, now)
            )
            project_id = cursor.lastrowid

            for position, req in enumerate(skills or []):
                skill_id = req.skill_id or get_or_create_named(cursor, "skills", req.skill_name)
                cursor.execute(
                    """
                    INSERT OR REPLACE INTO project_skills
                    (project_id, skill_id, min_experience_years, position)
                    VALUES (?, ?, ?, ?)
                    """,
                    (project_id, skill_id, req.min_experience_years, position)
                )

            for position, req in enumerate(seniority or []):
                cursor.execute(
                    """
                    INSERT INTO project_seniority
                    (project_id, seniority_level, required_count, position)
                    VALUES (?, ?, ?, ?)
                    """,
                    (project_id, req.level, req.required_count, position)
                )

            conn.commit()

        return project_id

    def get(self, project_id: int) -> Optional[Project]:
        """Get a project by ID, including requirements."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM projects WHERE id = ?", (project_id,))
            row = cursor.fetchone()
            if not row:
                return None
            project = Project(
                id=row["id"],
                name=row["name"],
                description=row["description"],
                created_at=row["created_at"],
            )
            self._attach_requirements(cursor, [project])
            return project

    def list_all(self) -> list[Project]:
        """Get all projects, newest first."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM projects ORDER BY id DESC")
            projects = [
                Project(
                    id=row["id"],
                    name=row["name"],
                    description=row["description"],
                    created_at=row["created_at"],
                )
                for row in cursor.fetchall()
            ]
            self._attach_requirements(cursor, projects)
            return projects

    def delete(self, project_id: int) -> bool:
        """Delete a project. Requirements, team rows and match runs cascade."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM projects WHERE id = ?", (project_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _attach_requirements(self, cursor, projects: list[Project]) -> None:
        if not projects:
            return
        by_id = {p.id: p for p in projects}
        placeholders = ",".join("?" * len(by_id))

        cursor.execute(
            f"""
            SELECT ps.project_id, ps.skill_id, s.name, ps.min_experience_years
            FROM project_skills ps
            JOIN skills s ON s.id = ps.skill_id
            WHERE ps.project_id IN ({placeholders})
            ORDER BY ps.project_id, ps.position ASC
            """,
            list(by_id)
        )
        for row in cursor.fetchall():
            by_id[row["project_id"]].skills.append(
                SkillRequirement(
                    skill_name=row["name"],
                    min_experience_years=row["min_experience_years"],
                    skill_id=row["skill_id"],
                )
            )

        cursor.execute(
            f"""
            SELECT project_id, seniority_level, required_count
            FROM project_seniority
            WHERE project_id IN ({placeholders})
            ORDER BY project_id, position ASC
            """,
            list(by_id)
        )
        for row in cursor.fetchall():
            by_id[row["project_id"]].seniority.append(
                SeniorityRequirement(level=row["seniority_level"], required_count=row["required_count"])
            )
