"""Data access helpers for categories."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lions_forum.models.category import Category

__all__ = ["CategoryRepository"]


class CategoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, category_id: int) -> Category | None:
        return self.session.get(Category, category_id)

    def list_all(self) -> list[Category]:
        """Return every category sorted alphabetically."""
        return list(self.session.scalars(select(Category).order_by(Category.name.asc())))

    def find_by_name(self, name: str) -> Category | None:
        """Case-insensitive exact name match."""
        return self.session.scalars(
            select(Category).where(func.lower(Category.name) == name.lower())
        ).first()
