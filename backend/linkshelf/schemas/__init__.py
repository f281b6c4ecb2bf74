from linkshelf.schemas.base import Message
from linkshelf.schemas.user import User, UserCreate, UserLogin, AuthResponse
from linkshelf.schemas.link import Link, LinkCreate, LinkUpdate, LinkPage, Pagination
from linkshelf.schemas.tag import Tag, TagCreate, TagUpdate, TagRef, LinkRef

__all__ = [
    "User",
    "UserCreate",
    "UserLogin",
    "AuthResponse",
    "Message",
    "Link",
    "LinkCreate",
    "LinkUpdate",
    "LinkPage",
    "Pagination",
    "Tag",
    "TagCreate",
    "TagUpdate",
    "TagRef",
    "LinkRef",
]
