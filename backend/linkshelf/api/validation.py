"""
Shared validation utilities for API endpoints.

Query parameters are parsed leniently where clients expect defaults
(pagination) and strictly where a bad value would change the result set
(id lists).
"""

from typing import List, Optional
from fastapi import Path

from linkshelf.core.config import settings
from linkshelf.core.database import MAX_DB_INT
from linkshelf.core.exceptions import ValidationError


def parse_positive_int(value: Optional[str], default: int) -> int:
    """
    Parse a positive integer query parameter.

    Missing, non-numeric, zero or negative values fall back to ``default``.
    """
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    if parsed < 1:
        return default
    return min(parsed, MAX_DB_INT)


def parse_page(value: Optional[str]) -> int:
    return parse_positive_int(value, 1)


def parse_page_size(value: Optional[str]) -> int:
    """Page size defaults to DEFAULT_PAGE_SIZE and is capped at MAX_PAGE_SIZE."""
    return min(
        parse_positive_int(value, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE
    )


def parse_id_list(values: Optional[List[str]], param_name: str = "tagIds") -> Optional[List[int]]:
    """
    Parse ids given as repeated and/or comma-separated query values.

    ``?tagIds=1,2&tagIds=3`` -> ``[1, 2, 3]``. Returns None when nothing
    was supplied.

    Raises:
        ValidationError: If any entry is not a positive integer
    """
    if not values:
        return None

    ids: List[int] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                parsed = int(part)
            except ValueError:
                raise ValidationError(f"Invalid {param_name}: '{part}' is not an integer")
            if parsed < 1 or parsed > MAX_DB_INT:
                raise ValidationError(f"Invalid {param_name}: '{part}' is out of range")
            ids.append(parsed)

    return ids or None


# Path parameter dependencies for resource ids
LinkIdParam = Path(..., description="Link ID")
TagIdParam = Path(..., description="Tag ID")
