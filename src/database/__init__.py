"""Persistence layer: declarative base, engines, and the per-request session."""

from src.database.base import Base
from src.database.session import get_db

__all__ = ["Base", "get_db"]
