"""tablewright managers."""

from tablewright.managers.base import BaseManager
from tablewright.managers.table import TableManager
from tablewright.managers.data import DataManager

__all__ = [
    "BaseManager",
    "TableManager",
    "DataManager",
]
