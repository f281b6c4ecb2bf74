"""Domain exceptions for linkshelf.

Every error the API reports to a client is one of these. The HTTP layer maps
them to a status code and a ``{"error": message}`` body, so repositories and
services never build responses themselves.
"""

from typing import Any, Dict, Optional


class LinkshelfError(Exception):
    """Base exception for all linkshelf errors.

    Attributes:
        message: Human-readable error message, safe to show to clients
        status_code: HTTP status the error maps to
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(LinkshelfError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateEmail(LinkshelfError):
    status_code = 400
    default_message = "Email already registered"


class DuplicateTag(LinkshelfError):
    status_code = 400
    default_message = "Tag name already exists for this user"


class Unauthenticated(LinkshelfError):
    """Missing, invalid or expired token, or a token for a vanished user."""

    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    """Login failure. Deliberately identical for unknown email and bad password."""

    default_message = "Invalid credentials"


class Forbidden(LinkshelfError):
    """Authenticated, but the target resource belongs to another user."""

    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFound(LinkshelfError):
    status_code = 404
    default_message = "Resource not found"
