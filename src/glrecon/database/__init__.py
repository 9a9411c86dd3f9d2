"""Database layer for glrecon application."""

from glrecon.database.base import Database
from glrecon.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
