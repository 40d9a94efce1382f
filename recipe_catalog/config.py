"""Configuration management with pydantic-settings and validation."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


# Bundled dataset shipped inside the package
DEFAULT_DATASET_PATH = Path(__file__).resolve().parent / "data" / "RAW_recipes.csv"

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str = "sqlite:///./recipe_catalog.db"
    auto_create_tables: bool = True

    # Catalog Seeding
    seed_on_startup: bool = True
    seed_dataset_path: Path = DEFAULT_DATASET_PATH
    seed_max_recipes: int = 500
    seed_batch_size: int = 50

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v):
        """Heroku-style hosts use postgres:// but SQLAlchemy requires postgresql://."""
        if v is None or (isinstance(v, str) and v.strip() == ""):
            raise ValueError("DATABASE_URL is empty")
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("seed_max_recipes", "seed_batch_size")
    @classmethod
    def check_positive(cls, v, info):
        """Ceiling and batch size must both be at least 1."""
        if v < 1:
            raise ValueError(f"{info.field_name} must be a positive integer, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {v!r}")
        return level


def get_settings() -> Settings:
    """Load and validate settings from environment.

    Raises:
        ValidationError: If environment variables are present but invalid.
    """
    return Settings()
