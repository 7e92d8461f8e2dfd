"""Helper utilities for tests."""

from datetime import date, timedelta
from pathlib import Path
from types import SimpleNamespace
import sqlite3

from cli.migrate import apply_migration, pending_migrations


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Apply every migration the same way `migrate apply` does.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    db_manager = SimpleNamespace(get_migrations_dir=lambda: migrations_dir)
    for migration in pending_migrations(conn, db_manager):
        apply_migration(conn, migration, db_manager)


def days_ago(n: int, today: date = None) -> date:
    """The calendar date n days before today (negative n is in the future)."""
    return (today or date.today()) - timedelta(days=n)
