"""Ingredient model and the recipe/ingredient junction table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


# Composite primary key: a recipe references a given ingredient at most once.
recipe_ingredient = Table(
    "recipe_ingredient",
    Base.metadata,
    Column("recipe_id", Integer, ForeignKey("recipes.id"), primary_key=True),
    Column("ingredient_id", Integer, ForeignKey("ingredients.id"), primary_key=True),
)


class Ingredient(Base):
    """Single source of truth for each unique ingredient name."""

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    recipes: Mapped[list["Recipe"]] = relationship(
        "Recipe", secondary=recipe_ingredient, back_populates="ingredients"
    )

    def __repr__(self) -> str:
        return f"<Ingredient(id={self.id}, name='{self.name}')>"
