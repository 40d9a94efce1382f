"""One-shot catalog seeding from the bundled recipe dataset.

The seeder runs when the application starts. It does nothing if the
database already holds recipes; otherwise it streams the CSV dataset,
resolves categories and ingredients by name, and writes recipes in batches,
all inside a single transaction.
"""

import csv
import enum
import logging
from contextlib import closing
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from sqlalchemy.orm import sessionmaker

from .config import Settings, get_settings
from .database import catalog_transaction
from .exceptions import SourceUnreadableError
from .models import Recipe
from .parser import ParsedRecipe, RowRejection, parse_row
from .repository import CatalogRepository
from .resolver import EntityCache, get_or_create_category, get_or_create_ingredients

logger = logging.getLogger(__name__)

# Long step lists and descriptions exceed csv's default 131072-character field limit
CSV_FIELD_SIZE_LIMIT = 2**31 - 1
csv.field_size_limit(CSV_FIELD_SIZE_LIMIT)


class SeedState(str, enum.Enum):
    """Lifecycle of a seeding run."""

    NOT_STARTED = "not_started"
    GUARDING = "guarding"
    SKIPPED = "skipped"
    INGESTING = "ingesting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class SeedResult:
    """Outcome of a seeding run."""

    state: SeedState = SeedState.NOT_STARTED
    existing_recipes: int = 0
    recipes_loaded: int = 0
    rows_rejected: int = 0
    categories_created: int = 0
    ingredients_created: int = 0
    batches_flushed: int = 0


def read_dataset(path: Path) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_number, record)`` for every CSV record in the file.

    Raises:
        SourceUnreadableError: If the file cannot be opened or decoded, or is
            not valid CSV.
    """
    try:
        handle = open(path, "r", encoding="utf-8", newline="")
    except OSError as e:
        raise SourceUnreadableError(path, str(e)) from e

    with handle:
        reader = csv.reader(handle)
        while True:
            try:
                record = next(reader)
            except StopIteration:
                return
            except (csv.Error, UnicodeDecodeError) as e:
                raise SourceUnreadableError(path, f"line {reader.line_num}: {e}") from e
            yield reader.line_num, record


def build_recipe(parsed: ParsedRecipe, repository: CatalogRepository, cache: EntityCache) -> Recipe:
    """Resolve a parsed row's category and ingredients and build its Recipe."""
    category = get_or_create_category(parsed.category_name, repository, cache)
    ingredients = get_or_create_ingredients(parsed.ingredient_names, repository, cache)
    return Recipe(
        title=parsed.title,
        description=parsed.description,
        cook_time=parsed.cook_time,
        created_at=datetime.now(timezone.utc),
        category=category,
        ingredients=ingredients,
    )


def ingest_records(
    records: Iterator[tuple[int, list[str]]],
    repository: CatalogRepository,
    cache: EntityCache,
    result: SeedResult,
    max_recipes: int,
    batch_size: int,
) -> None:
    """Parse and store records until the source or the ceiling runs out.

    The first record is a header and is discarded. Rejected rows are logged
    and skipped. Recipes are written every ``batch_size`` rows and once more
    for the remainder.
    """
    next(records, None)

    batch: list[Recipe] = []
    while result.recipes_loaded < max_recipes:
        item = next(records, None)
        if item is None:
            break
        line_number, record = item

        parsed = parse_row(record, line_number)
        if isinstance(parsed, RowRejection):
            result.rows_rejected += 1
            logger.warning(f"Skipping line {parsed.line_number}: {parsed.reason}")
            continue

        batch.append(build_recipe(parsed, repository, cache))
        result.recipes_loaded += 1

        if len(batch) >= batch_size:
            repository.bulk_create_recipes(batch)
            result.batches_flushed += 1
            batch = []
            logger.info(f"Processed {result.recipes_loaded} recipes")

    if batch:
        repository.bulk_create_recipes(batch)
        result.batches_flushed += 1
        logger.info(f"Processed {result.recipes_loaded} recipes in total")


def seed_catalog(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
) -> SeedResult:
    """Populate an empty catalog from the seed dataset.

    Safe to call on every startup: when recipes already exist the run is
    skipped without touching the dataset.

    Args:
        settings: Settings to use. Loaded from the environment if omitted.
        session_factory: Session factory. Defaults to the application's.

    Returns:
        SeedResult describing what happened.

    Raises:
        SourceUnreadableError: If the dataset is missing or corrupt. Nothing
            written during the run is kept.
    """
    settings = settings or get_settings()
    result = SeedResult()

    try:
        with catalog_transaction(session_factory) as db:
            repository = CatalogRepository(db)

            result.state = SeedState.GUARDING
            result.existing_recipes = repository.count_recipes()
            if result.existing_recipes > 0:
                logger.info(
                    f"Database already contains {result.existing_recipes} recipes. "
                    "Skipping initialization."
                )
                result.state = SeedState.SKIPPED
                return result

            logger.info(
                f"Starting data initialization. Loading up to {settings.seed_max_recipes} "
                f"recipes from {settings.seed_dataset_path}"
            )
            result.state = SeedState.INGESTING
            cache = EntityCache()
            with closing(read_dataset(settings.seed_dataset_path)) as records:
                ingest_records(
                    records,
                    repository,
                    cache,
                    result,
                    max_recipes=settings.seed_max_recipes,
                    batch_size=settings.seed_batch_size,
                )
            result.categories_created = cache.created_categories
            result.ingredients_created = cache.created_ingredients
    except Exception:
        result.state = SeedState.FAILED
        logger.exception("Failed to initialize data from CSV")
        raise

    result.state = SeedState.COMPLETED
    logger.info(
        f"Data initialization completed successfully. Loaded {result.recipes_loaded} recipes "
        f"({result.rows_rejected} rejected, {result.categories_created} new categories, "
        f"{result.ingredients_created} new ingredients)."
    )
    return result
