"""Storage access used by the catalog seeder."""

from typing import Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import Category, Ingredient, Recipe

NamedEntity = TypeVar("NamedEntity", Category, Ingredient)


class CatalogRepository:
    """Thin wrapper over a Session offering the operations seeding needs.

    All writes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def count(self, model) -> int:
        return self.db_session.scalar(select(func.count()).select_from(model)) or 0

    def count_recipes(self) -> int:
        return self.count(Recipe)

    def find_by_name(self, model: type[NamedEntity], name: str) -> NamedEntity | None:
        """Return the entity with exactly this name, or None."""
        return self.db_session.scalars(
            select(model).where(model.name == name)
        ).first()

    def create(self, entity: NamedEntity) -> NamedEntity:
        """Persist a single entity immediately so it has an identity."""
        self.db_session.add(entity)
        self.db_session.flush()
        return entity

    def bulk_create_recipes(self, recipes: Sequence[Recipe]) -> None:
        """Write a batch of recipes and their ingredient links in one flush."""
        self.db_session.add_all(recipes)
        self.db_session.flush()
