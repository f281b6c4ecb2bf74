"""
Repository for Tag database operations.
"""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from linkshelf.core.exceptions import DuplicateTag
from linkshelf.models.tag import Tag
from linkshelf.repositories.ownership import get_owned_or_raise

logger = logging.getLogger(__name__)


class TagRepository:
    """Repository for Tag database operations"""

    def __init__(self, db: Session):
        self.db = db

    def list(self, user_id: int) -> List[Tag]:
        """All of a user's tags by name, each with its links loaded."""
        return (
            self.db.query(Tag)
            .options(selectinload(Tag.links))
            .filter(Tag.user_id == user_id)
            .order_by(func.lower(Tag.name), Tag.name)
            .all()
        )

    def find_by_name(
        self, user_id: int, name: str, exclude_id: Optional[int] = None
    ) -> Optional[Tag]:
        """Case-insensitive lookup of a user's tag by name."""
        query = self.db.query(Tag).filter(
            Tag.user_id == user_id, func.lower(Tag.name) == name.lower()
        )
        if exclude_id is not None:
            query = query.filter(Tag.id != exclude_id)
        return query.first()

    def _commit_or_duplicate(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            # Unique index on (user_id, lower(name)) caught a concurrent insert
            self.db.rollback()
            raise DuplicateTag()

    def create(self, user_id: int, name: str) -> Tag:
        if self.find_by_name(user_id, name) is not None:
            raise DuplicateTag()

        tag = Tag(user_id=user_id, name=name)
        self.db.add(tag)
        self._commit_or_duplicate()
        self.db.refresh(tag)

        logger.info(f"User {user_id} created tag {tag.id}")
        return tag

    def update(self, user_id: int, tag_id: int, name: str) -> Tag:
        """Rename a tag. Changing only the casing of its own name is allowed."""
        tag = get_owned_or_raise(self.db, Tag, tag_id, user_id)

        if self.find_by_name(user_id, name, exclude_id=tag_id) is not None:
            raise DuplicateTag()

        tag.name = name
        self._commit_or_duplicate()
        self.db.refresh(tag)

        logger.info(f"User {user_id} renamed tag {tag_id}")
        return tag

    def delete(self, user_id: int, tag_id: int) -> None:
        """Delete a tag, detaching it from its links without deleting them."""
        tag = get_owned_or_raise(self.db, Tag, tag_id, user_id)

        detached = len(tag.links)
        tag.links.clear()
        self.db.delete(tag)
        self.db.commit()

        logger.info(f"User {user_id} deleted tag {tag_id}, detached from {detached} links")
