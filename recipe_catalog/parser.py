"""Row parsing for the recipe seed dataset.

Each CSV record is turned into either a ``ParsedRecipe`` or a
``RowRejection``. Column positions are fixed by the dataset layout:

    id, title, url, minutes, author, submitted, nutrition, n_steps,
    tags, steps, ingredients, description
"""

import re
from dataclasses import dataclass, field
from typing import Sequence

MIN_COLUMNS = 12

TITLE_COLUMN = 1
COOK_TIME_COLUMN = 3
TAGS_COLUMN = 8
INGREDIENTS_COLUMN = 10
DESCRIPTION_COLUMN = 11

DEFAULT_CATEGORY = "General"

# Characters stripped from pseudo-list fields such as "['a', 'b']"
_LIST_DELIMITERS = re.compile(r"[\[\]'\"]")
# Trim everything at or below U+0020, not just str.isspace() characters
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ParsedRecipe:
    """A recipe row that passed validation but is not yet persisted."""

    title: str
    cook_time: int
    description: str
    category_name: str
    ingredient_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RowRejection:
    """A row that was skipped, and why."""

    line_number: int
    reason: str


def split_pseudo_list(value: str) -> list[str]:
    """Split a bracket/quote-delimited list like ``"['a', 'b']"`` into tokens.

    Brackets and quotes are removed, the remainder is split on commas,
    each token is trimmed, and empty tokens are dropped.
    """
    tokens = _LIST_DELIMITERS.sub("", value).split(",")
    return [t for t in (token.strip(_TRIM_CHARS) for token in tokens) if t]


def extract_category_name(tags: str) -> str:
    """Return the first tag, or ``"General"`` when there are none."""
    names = split_pseudo_list(tags)
    return names[0] if names else DEFAULT_CATEGORY


def _parse_cook_time(value: str) -> int | None:
    # int() alone also accepts surrounding whitespace and "1_000"
    if not _INTEGER.fullmatch(value):
        return None
    minutes = int(value)
    return minutes if minutes >= 0 else None


def parse_row(record: Sequence[str], line_number: int = 0) -> ParsedRecipe | RowRejection:
    """Parse one raw CSV record.

    Args:
        record: Fields of the record as produced by ``csv.reader``.
        line_number: Source line, used only in the rejection reason.

    Returns:
        ParsedRecipe on success, RowRejection if the record is unusable.
    """
    if len(record) < MIN_COLUMNS:
        return RowRejection(
            line_number,
            f"insufficient columns: expected at least {MIN_COLUMNS}, got {len(record)}",
        )

    title = record[TITLE_COLUMN]
    if not title.strip(_TRIM_CHARS):
        return RowRejection(line_number, "missing title")

    cook_time = _parse_cook_time(record[COOK_TIME_COLUMN])
    if cook_time is None:
        return RowRejection(
            line_number,
            f"invalid cook time {record[COOK_TIME_COLUMN]!r} for recipe {title!r}",
        )

    return ParsedRecipe(
        title=title,
        cook_time=cook_time,
        description=record[DESCRIPTION_COLUMN],
        category_name=extract_category_name(record[TAGS_COLUMN]),
        ingredient_names=split_pseudo_list(record[INGREDIENTS_COLUMN]),
    )
