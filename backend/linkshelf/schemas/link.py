from pydantic import AfterValidator, field_validator
from datetime import datetime
from typing import Annotated, Optional, List
from urllib.parse import urlparse

from .base import CamelModel
from .tag import TagRef


def validate_link_url(url: str) -> str:
    """Require an http(s) URL with a hostname."""
    url = url.strip()
    if not url:
        raise ValueError("URL is required")
    try:
        parsed = urlparse(url)
    except ValueError:
        raise ValueError("Invalid URL format")
    if parsed.scheme not in ("http", "https"):
        raise ValueError("Only HTTP and HTTPS URLs are allowed")
    if not parsed.hostname:
        raise ValueError("URL must have a valid hostname")
    return url


def validate_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValueError("Title is required")
    return title


LinkUrl = Annotated[str, AfterValidator(validate_link_url)]
LinkTitle = Annotated[str, AfterValidator(validate_title)]


class LinkCreate(CamelModel):
    url: LinkUrl
    title: LinkTitle
    description: Optional[str] = None
    tag_ids: Optional[List[int]] = None


class LinkUpdate(CamelModel):
    """Partial update; omitted fields are left unchanged.

    ``tag_ids`` replaces the whole tag set when present (an empty list
    clears it).
    """

    url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    tag_ids: Optional[List[int]] = None

    @field_validator("url")
    @classmethod
    def check_url(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("URL cannot be null")
        return validate_link_url(v)

    @field_validator("title")
    @classmethod
    def check_title(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Title cannot be null")
        return validate_title(v)

    @field_validator("tag_ids")
    @classmethod
    def check_tag_ids(cls, v: Optional[List[int]]) -> List[int]:
        if v is None:
            raise ValueError("tagIds cannot be null; send [] to clear tags")
        return v


class Link(CamelModel):
    id: int
    url: str
    title: str
    description: Optional[str] = None
    tags: List[TagRef] = []
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    total: int
    page: int
    page_size: int
    total_pages: int


class LinkPage(CamelModel):
    links: List[Link]
    pagination: Pagination
