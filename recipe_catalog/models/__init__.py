"""Database models for the recipe catalog."""

from .base import Base
from .category import Category
from .ingredient import Ingredient, recipe_ingredient
from .recipe import Recipe

__all__ = [
    # Base
    "Base",
    # Models
    "Category",
    "Ingredient",
    "Recipe",
    # Junction tables
    "recipe_ingredient",
]
