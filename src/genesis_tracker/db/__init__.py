"""Database layer for genesis-tracker."""

from .engine import get_db_path, init_db
from .repositories import TABLE_SPECS, TableRepository, TableSpec, UserRepository

__all__ = [
    "get_db_path",
    "init_db",
    "TABLE_SPECS",
    "TableRepository",
    "TableSpec",
    "UserRepository",
]
