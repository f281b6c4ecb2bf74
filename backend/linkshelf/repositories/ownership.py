"""Existence-then-ownership lookup shared by the link and tag repositories."""

import logging
from typing import Type, TypeVar

from sqlalchemy.orm import Session

from linkshelf.core.database import MAX_DB_INT
from linkshelf.core.exceptions import Forbidden, NotFound
from linkshelf.core.logging_config import log_security_event

T = TypeVar("T")


def get_owned_or_raise(db: Session, model: Type[T], object_id: int, user_id: int) -> T:
    """
    Load a row by id and check that ``user_id`` owns it.

    A filter on both id and owner cannot tell "missing" from "not yours",
    so the row is fetched by id alone first.

    Raises:
        NotFound: No row with this id exists
        Forbidden: The row exists but belongs to another user
    """
    label = model.__name__
    # Ids outside the integer column range cannot exist
    if not 1 <= object_id <= MAX_DB_INT:
        raise NotFound(f"{label} not found")

    obj = db.get(model, object_id)
    if obj is None:
        raise NotFound(f"{label} not found")

    if obj.user_id != user_id:
        log_security_event(
            event_type="authz.forbidden",
            message=f"User {user_id} attempted to modify {label.lower()} {object_id}",
            level=logging.WARNING,
            user_id=user_id,
            event_category="authorization",
            resource=label.lower(),
            resource_id=object_id,
        )
        raise Forbidden(f"You do not have permission to modify this {label.lower()}")

    return obj
