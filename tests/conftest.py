"""Pytest configuration and fixtures for catalog tests."""

import csv

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_catalog.config import Settings
from recipe_catalog.models import Base

HEADER = [
    "id", "title", "url", "minutes", "author", "submitted", "nutrition",
    "n_steps", "tags", "steps", "ingredients", "description",
]


def make_row(
    title="Pasta Salad",
    minutes="25",
    tags="['30-minutes-or-less', 'pasta']",
    ingredients="['pasta', 'tomato', 'pasta']",
    description="A simple salad.",
    recipe_id="1",
):
    """Build a 12-column dataset row with the given fields."""
    return [
        recipe_id, title, "url", minutes, "author", "date", "nutrition", "3",
        tags, "steps", ingredients, description,
    ]


@pytest.fixture
def engine():
    """In-memory SQLite database with all tables created.

    StaticPool keeps one connection so every session sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def write_dataset(tmp_path):
    """Write rows (header first) to a CSV file and return its path."""

    def _write(rows, header=HEADER, name="recipes.csv"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            if header is not None:
                writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def make_settings():
    def _make(dataset_path, **overrides):
        values = {
            "database_url": "sqlite://",
            "seed_dataset_path": dataset_path,
            "seed_max_recipes": 500,
            "seed_batch_size": 50,
        }
        values.update(overrides)
        return Settings(**values)

    return _make
