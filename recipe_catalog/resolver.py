"""Get-or-create resolution of categories and ingredients by name."""

import logging
from dataclasses import dataclass, field

from .models import Category, Ingredient
from .repository import CatalogRepository, NamedEntity

logger = logging.getLogger(__name__)


@dataclass
class EntityCache:
    """Name -> entity lookups for a single ingestion run.

    One instance is created per run and discarded when the run ends.
    """

    categories: dict[str, Category] = field(default_factory=dict)
    ingredients: dict[str, Ingredient] = field(default_factory=dict)
    created_categories: int = 0
    created_ingredients: int = 0

    def mapping_for(self, model: type) -> dict:
        if model is Category:
            return self.categories
        if model is Ingredient:
            return self.ingredients
        raise TypeError(f"No name cache for {model.__name__}")


def resolve_by_name(
    model: type[NamedEntity],
    name: str,
    repository: CatalogRepository,
    cache: EntityCache,
) -> NamedEntity:
    """Find an entity by exact name, creating it if it does not exist.

    Order: run cache, then storage, then create. A created entity is flushed
    before it is returned so recipes can reference it.
    """
    mapping = cache.mapping_for(model)
    entity = mapping.get(name)
    if entity is not None:
        return entity

    entity = repository.find_by_name(model, name)
    if entity is None:
        entity = repository.create(model(name=name))
        if model is Category:
            cache.created_categories += 1
        else:
            cache.created_ingredients += 1
        logger.debug(f"Created {model.__name__} '{name}' (id={entity.id})")

    mapping[name] = entity
    return entity


def get_or_create_category(name: str, repository: CatalogRepository, cache: EntityCache) -> Category:
    return resolve_by_name(Category, name, repository, cache)


def get_or_create_ingredients(
    names: list[str], repository: CatalogRepository, cache: EntityCache
) -> list[Ingredient]:
    """Resolve every name, collapsing repeats to a single entity."""
    ingredients: list[Ingredient] = []
    seen_ids: set[int] = set()
    for name in names:
        ingredient = resolve_by_name(Ingredient, name, repository, cache)
        if ingredient.id not in seen_ids:
            seen_ids.add(ingredient.id)
            ingredients.append(ingredient)
    return ingredients
