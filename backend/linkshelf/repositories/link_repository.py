"""
Repository for Link database operations.

Every method takes the requesting user's id explicitly; nothing here reads
request state.
"""

import logging
import math
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from linkshelf.core.database import utcnow
from linkshelf.core.exceptions import ValidationError
from linkshelf.models.link import Link
from linkshelf.models.tag import Tag
from linkshelf.repositories.ownership import get_owned_or_raise
from linkshelf.schemas.link import LinkCreate, LinkUpdate

logger = logging.getLogger(__name__)


def resolve_user_tags(db: Session, user_id: int, tag_ids: Iterable[int]) -> List[Tag]:
    """
    Load the tags named by ``tag_ids``, all of which must belong to the user.

    Raises:
        ValidationError: If any id is unknown or owned by someone else
    """
    wanted = list(dict.fromkeys(tag_ids))
    if not wanted:
        return []

    tags = (
        db.query(Tag)
        .filter(Tag.id.in_(wanted), Tag.user_id == user_id)
        .all()
    )
    found = {tag.id for tag in tags}
    missing = [tag_id for tag_id in wanted if tag_id not in found]
    if missing:
        raise ValidationError(
            "Invalid tag ids: " + ", ".join(str(tag_id) for tag_id in missing)
        )
    return tags


def build_pagination(total: int, page: int, page_size: int) -> dict:
    return {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size) if page_size else 0,
    }


class LinkRepository:
    """Repository for Link database operations"""

    def __init__(self, db: Session):
        self.db = db

    def _owned_query(self, user_id: int):
        return (
            self.db.query(Link)
            .options(selectinload(Link.tags))
            .filter(Link.user_id == user_id)
        )

    def list(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 10,
        tag_ids: Optional[List[int]] = None,
    ) -> dict:
        """
        Page through a user's links, newest first.

        If ``tag_ids`` is given, only links carrying at least one of those
        tags are included. ``total`` counts every matching link, not just
        the returned page.
        """
        query = self._owned_query(user_id)
        if tag_ids:
            query = query.filter(Link.tags.any(Tag.id.in_(tag_ids)))

        total = query.order_by(None).count()
        links = (
            query.order_by(Link.created_at.desc(), Link.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        return {
            "links": links,
            "pagination": build_pagination(total, page, page_size),
        }

    def create(self, user_id: int, data: LinkCreate) -> Link:
        tags = resolve_user_tags(self.db, user_id, data.tag_ids or [])

        link = Link(
            user_id=user_id,
            url=data.url,
            title=data.title,
            description=data.description,
            tags=tags,
        )
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)

        logger.info(f"User {user_id} created link {link.id} with {len(tags)} tags")
        return link

    def update(self, user_id: int, link_id: int, data: LinkUpdate) -> Link:
        """
        Apply a partial update to a link the user owns.

        Only fields present in the request are touched. ``tag_ids``, when
        present, replaces the link's whole tag set.
        """
        link = get_owned_or_raise(self.db, Link, link_id, user_id)

        changes = data.model_dump(exclude_unset=True)
        tag_ids = changes.pop("tag_ids", None)
        new_tags = None
        if "tag_ids" in data.model_fields_set:
            new_tags = resolve_user_tags(self.db, user_id, tag_ids or [])

        for key, value in changes.items():
            setattr(link, key, value)
        if new_tags is not None:
            link.tags = new_tags
            # Association rows alone do not trigger onupdate
            link.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(link)

        logger.info(f"User {user_id} updated link {link_id}")
        return link

    def delete(self, user_id: int, link_id: int) -> None:
        """Delete a link and its tag associations; the tags themselves stay."""
        link = get_owned_or_raise(self.db, Link, link_id, user_id)

        self.db.delete(link)
        self.db.commit()

        logger.info(f"User {user_id} deleted link {link_id}")
