"""Database layer for flowtrack application."""

from flowtrack.database.base import Database
from flowtrack.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
