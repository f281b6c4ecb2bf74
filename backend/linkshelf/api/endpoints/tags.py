from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from linkshelf.api.validation import TagIdParam
from linkshelf.core.database import get_db
from linkshelf.core.auth import get_current_user
from linkshelf.models.user import User
from linkshelf.repositories.tag_repository import TagRepository
from linkshelf.schemas.base import Message
from linkshelf.schemas.tag import Tag as TagSchema, TagCreate, TagUpdate

router = APIRouter()


@router.get("", response_model=List[TagSchema])
def get_tags(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get all tags for the current user.

    - Ordered by name
    - Each tag includes the links it is attached to and a link count
    """
    return TagRepository(db).list(current_user.id)


@router.post("", response_model=TagSchema, status_code=status.HTTP_201_CREATED)
def create_tag(
    tag: TagCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a tag. Names are unique per user, ignoring case."""
    return TagRepository(db).create(current_user.id, tag.name)


@router.put("/{tag_id}", response_model=TagSchema)
def update_tag(
    tag_update: TagUpdate,
    tag_id: int = TagIdParam,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rename a tag."""
    return TagRepository(db).update(current_user.id, tag_id, tag_update.name)


@router.delete("/{tag_id}", response_model=Message)
def delete_tag(
    tag_id: int = TagIdParam,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a tag.

    The tag is removed from every link it was attached to; the links
    themselves are kept.
    """
    TagRepository(db).delete(current_user.id, tag_id)
    return {"message": "Tag deleted successfully"}
