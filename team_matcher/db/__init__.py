"""Database layer: connection, migrations and repositories."""
