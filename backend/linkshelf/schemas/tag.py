from pydantic import field_validator
from datetime import datetime
from typing import List

from .base import CamelModel

MAX_TAG_NAME_LENGTH = 50


class TagBase(CamelModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace; casing is preserved as entered."""
        v = v.strip()
        if not v:
            raise ValueError("Tag name cannot be empty")
        if len(v) > MAX_TAG_NAME_LENGTH:
            raise ValueError(
                f"Tag name cannot exceed {MAX_TAG_NAME_LENGTH} characters"
            )
        return v


class TagCreate(TagBase):
    pass


class TagUpdate(TagBase):
    pass


class TagRef(CamelModel):
    """Tag as embedded in a link."""

    id: int
    name: str


class LinkRef(CamelModel):
    """Link as embedded in a tag."""

    id: int
    url: str
    title: str


class Tag(TagBase):
    id: int
    created_at: datetime
    updated_at: datetime
    links: List[LinkRef] = []
    link_count: int = 0
