"""
Repository for User database operations.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linkshelf.core.exceptions import DuplicateEmail
from linkshelf.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive email lookup."""
        return self.db.query(User).filter(User.email == email).first()

    def create(self, email: str, password_hash: str, name: Optional[str] = None) -> User:
        """Create a user, translating the unique-email constraint to DuplicateEmail."""
        if self.get_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(email=email, password_hash=password_hash, name=name)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.db.rollback()
            raise DuplicateEmail()
        self.db.refresh(user)

        logger.info(f"Created user {user.id}")
        return user
