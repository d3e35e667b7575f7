"""Database layer for repwise."""

from .engine import get_data_dir, get_db_path, get_export_dir, init_db
from .repositories import StateRepository

__all__ = [
    "get_data_dir",
    "get_db_path",
    "get_export_dir",
    "init_db",
    "StateRepository",
]
