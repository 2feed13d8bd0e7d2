"""Category module: per-app category tree, locking policy, and tree view."""

from src.modules.category.service import CategoryService

__all__ = [
    "CategoryService",
]
