"""Database configuration."""

import os
from pathlib import Path

# Default database location (override with TEAM_MATCHER_DB env var)
DEFAULT_DB_PATH = Path.cwd() / "data" / "team_matcher.db"


def get_db_path() -> Path:
    """Get the database path, with environment override support."""
    env_path = os.environ.get("TEAM_MATCHER_DB")
    if env_path:
        return Path(env_path)
    return DEFAULT_DB_PATH
