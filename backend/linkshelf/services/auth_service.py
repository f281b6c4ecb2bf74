"""Registration and password login."""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from linkshelf.core.auth import (
    create_access_token,
    hash_password,
    pwd_context,
    verify_password,
)
from linkshelf.core.exceptions import InvalidCredentials, ValidationError
from linkshelf.models.user import User
from linkshelf.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.users = UserRepository(db)

    def register(
        self, email: str, password: str, name: Optional[str] = None
    ) -> Tuple[User, str]:
        """
        Create an account and issue its first token.

        Raises:
            ValidationError: Email or password missing
            DuplicateEmail: Email already registered (case-sensitive match)
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.users.create(
            email=email, password_hash=hash_password(password), name=name
        )
        return user, create_access_token(user.id)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same error, and an
        unknown email still pays for one hash verification.
        """
        user = self.users.get_by_email(email)
        if user is None:
            pwd_context.dummy_verify()
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        return user, create_access_token(user.id)
