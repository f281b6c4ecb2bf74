"""
Search over a user's links.

Text matching is case-insensitive substring containment on title,
description and URL. Tag filters are ANDed with the text filter.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from linkshelf.core.config import settings
from linkshelf.core.exceptions import ValidationError
from linkshelf.models.link import Link
from linkshelf.models.tag import Tag

logger = logging.getLogger(__name__)

# Public sort field name -> column
SORT_FIELDS = {
    "title": Link.title,
    "url": Link.url,
    "createdAt": Link.created_at,
    "updatedAt": Link.updated_at,
}
SORT_DIRECTIONS = ("asc", "desc")


def parse_sort(sort: Optional[str]) -> Tuple[str, str]:
    """
    Parse ``field[:direction]`` into a (field, direction) pair.

    Defaults to newest first. The direction defaults to ``asc`` when only a
    field is given.

    Raises:
        ValidationError: Unknown field or direction
    """
    if not sort or not sort.strip():
        return "createdAt", "desc"

    field, _, direction = sort.strip().partition(":")
    direction = (direction or "asc").lower()

    if field not in SORT_FIELDS:
        raise ValidationError(
            f"Invalid sort field '{field}'; expected one of: {', '.join(SORT_FIELDS)}"
        )
    if direction not in SORT_DIRECTIONS:
        raise ValidationError(
            f"Invalid sort direction '{direction}'; expected 'asc' or 'desc'"
        )
    return field, direction


class SearchService:
    def __init__(self, db: Session):
        self.db = db

    def search(
        self,
        user_id: int,
        query: Optional[str] = None,
        tag_name: Optional[str] = None,
        tag_ids: Optional[List[int]] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> List[Link]:
        """
        Find the user's links matching every supplied filter.

        Args:
            user_id: Owner whose links are searched
            query: Substring matched against title, description or URL
            tag_name: Only links carrying a tag with this name (any case)
            tag_ids: Only links carrying at least one of these tags
            page: 1-based page; pagination applies only if page or limit is set
            limit: Page size
            sort: ``field:direction``, e.g. ``title:asc``

        Returns:
            Matching links, possibly empty
        """
        field, direction = parse_sort(sort)

        q = (
            self.db.query(Link)
            .options(selectinload(Link.tags))
            .filter(Link.user_id == user_id)
        )

        text = (query or "").strip()
        if text:
            q = q.filter(
                or_(
                    Link.title.icontains(text, autoescape=True),
                    Link.description.icontains(text, autoescape=True),
                    Link.url.icontains(text, autoescape=True),
                )
            )

        name = (tag_name or "").strip()
        if name:
            q = q.filter(
                Link.tags.any(
                    (Tag.user_id == user_id) & (func.lower(Tag.name) == name.lower())
                )
            )

        if tag_ids:
            q = q.filter(Link.tags.any(Tag.id.in_(tag_ids)))

        column = SORT_FIELDS[field]
        if direction == "desc":
            q = q.order_by(column.desc(), Link.id.desc())
        else:
            q = q.order_by(column.asc(), Link.id.asc())

        if page is not None or limit is not None:
            page = page or 1
            limit = limit or settings.DEFAULT_PAGE_SIZE
            q = q.offset((page - 1) * limit).limit(limit)

        links = q.all()
        logger.debug(f"Search by user {user_id} returned {len(links)} links")
        return links
