"""Exception classes for the recipe catalog.

Exception Hierarchy:
    CatalogError (base)
    └── SourceUnreadableError
"""

from pathlib import Path


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    pass


class SourceUnreadableError(CatalogError):
    """Raised when the seed dataset cannot be opened, decoded or parsed as CSV.

    This is fatal for the ingestion run: the run's transaction is rolled back
    and the error propagates to abort application startup.
    """

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Seed dataset {self.path} is unreadable: {reason}")
