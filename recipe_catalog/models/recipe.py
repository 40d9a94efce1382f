"""Recipe model for the seeded catalog."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .ingredient import recipe_ingredient


class Recipe(Base):
    """Model for storing recipes."""

    __tablename__ = "recipes"
    __table_args__ = (
        CheckConstraint("cook_time >= 0", name="ck_recipes_cook_time_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    cook_time: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False
    )

    category: Mapped["Category"] = relationship("Category", back_populates="recipes")
    ingredients: Mapped[list["Ingredient"]] = relationship(
        "Ingredient", secondary=recipe_ingredient, back_populates="recipes"
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title='{self.title}')>"
