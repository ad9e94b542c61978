# src/lions_forum/db/__init__.py
"""Database configuration and utilities."""

from .session import Base, Database, get_db, seed_categories, storage_guard

__all__ = ["Base", "Database", "get_db", "seed_categories", "storage_guard"]
