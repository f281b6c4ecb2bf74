from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from linkshelf.api.validation import (
    LinkIdParam,
    parse_id_list,
    parse_page,
    parse_page_size,
)
from linkshelf.core.database import get_db
from linkshelf.core.auth import get_current_user
from linkshelf.models.user import User
from linkshelf.repositories.link_repository import LinkRepository
from linkshelf.schemas.link import (
    Link as LinkSchema,
    LinkCreate,
    LinkPage,
    LinkUpdate,
)
from linkshelf.schemas.base import Message

router = APIRouter()


@router.get("", response_model=LinkPage)
def get_links(
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Links per page"),
    tag_ids: Optional[List[str]] = Query(
        None, alias="tagIds", description="Only links with any of these tag ids"
    ),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get the current user's links, newest first.

    - Invalid or missing page/pageSize fall back to 1 and the default size
    - tagIds may be repeated or comma-separated
    """
    return LinkRepository(db).list(
        current_user.id,
        page=parse_page(page),
        page_size=parse_page_size(page_size),
        tag_ids=parse_id_list(tag_ids),
    )


@router.post("", response_model=LinkSchema, status_code=status.HTTP_201_CREATED)
def create_link(
    link: LinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save a new link, optionally tagged with some of the user's tags."""
    return LinkRepository(db).create(current_user.id, link)


@router.put("/{link_id}", response_model=LinkSchema)
def update_link(
    link_update: LinkUpdate,
    link_id: int = LinkIdParam,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update fields of a link; tagIds, when sent, replaces all of its tags."""
    return LinkRepository(db).update(current_user.id, link_id, link_update)


@router.delete("/{link_id}", response_model=Message)
def delete_link(
    link_id: int = LinkIdParam,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a link. Its tags are kept."""
    LinkRepository(db).delete(current_user.id, link_id)
    return {"message": "Link deleted successfully"}
