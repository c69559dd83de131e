"""Database migrations for team matcher tables."""

import sqlite3
from pathlib import Path


MIGRATIONS = [
    # Shared catalogs
    """
    CREATE TABLE IF NOT EXISTS skills (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS locations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS languages (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE
    )
    """,

    # Employees and their experience
    """
    CREATE TABLE IF NOT EXISTS employees (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        full_name TEXT NOT NULL,
        role TEXT,
        seniority TEXT,
        total_experience_years REAL DEFAULT 0,
        location_id INTEGER,
        FOREIGN KEY (location_id) REFERENCES locations(id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS employee_skills (
        employee_id INTEGER NOT NULL,
        skill_id INTEGER NOT NULL,
        experience_years REAL NOT NULL DEFAULT 0,
        PRIMARY KEY (employee_id, skill_id),
        FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE,
        FOREIGN KEY (skill_id) REFERENCES skills(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS employee_languages (
        employee_id INTEGER NOT NULL,
        language_id INTEGER NOT NULL,
        PRIMARY KEY (employee_id, language_id),
        FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE,
        FOREIGN KEY (language_id) REFERENCES languages(id) ON DELETE CASCADE
    )
    """,

    # Projects and their requirements
    """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project_skills (
        project_id INTEGER NOT NULL,
        skill_id INTEGER NOT NULL,
        min_experience_years REAL NOT NULL DEFAULT 0,
        position INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (project_id, skill_id),
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE,
        FOREIGN KEY (skill_id) REFERENCES skills(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project_seniority (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        project_id INTEGER NOT NULL,
        seniority_level TEXT NOT NULL,
        required_count INTEGER NOT NULL DEFAULT 1,
        position INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
    )
    """,

    # Team assignments (one row per project/employee pair)
    """
    CREATE TABLE IF NOT EXISTS project_team (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        project_id INTEGER NOT NULL,
        employee_id INTEGER NOT NULL,
        score REAL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(project_id, employee_id),
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE,
        FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE
    )
    """,

    # Matching run history
    """
    CREATE TABLE IF NOT EXISTS match_runs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        project_id INTEGER NOT NULL,
        provider TEXT,
        model TEXT,
        status TEXT NOT NULL,
        candidates_found INTEGER DEFAULT 0,
        assignments_created INTEGER DEFAULT 0,
        error_type TEXT,
        error_message TEXT,
        started_at TIMESTAMP,
        finished_at TIMESTAMP,
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
    )
    """,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_team_project ON project_team(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_team_employee ON project_team(employee_id)",
    "CREATE INDEX IF NOT EXISTS idx_employee_skills_skill ON employee_skills(skill_id)",
    "CREATE INDEX IF NOT EXISTS idx_match_runs_project ON match_runs(project_id, started_at)",
]


def run_migrations(db_path: Path) -> None:
    """Run all migrations to set up team matcher tables."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, timeout=10)
    cursor = conn.cursor()

    # Enable WAL mode so the background matcher can write while readers query
    cursor.execute("PRAGMA journal_mode = WAL")

    for migration in MIGRATIONS:
        cursor.execute(migration)

    for index in INDEXES:
        cursor.execute(index)

    conn.commit()
    conn.close()
