from linkshelf.repositories.user_repository import UserRepository
from linkshelf.repositories.link_repository import LinkRepository
from linkshelf.repositories.tag_repository import TagRepository

__all__ = [
    "UserRepository",
    "LinkRepository",
    "TagRepository",
]
