from .user import User
from .link import Link, link_tags
from .tag import Tag

__all__ = [
    "User",
    "Link",
    "Tag",
    "link_tags",
]
