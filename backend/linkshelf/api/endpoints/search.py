from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from linkshelf.api.validation import parse_id_list, parse_page, parse_page_size
from linkshelf.core.database import get_db
from linkshelf.core.auth import get_current_user
from linkshelf.models.user import User
from linkshelf.schemas.link import Link as LinkSchema
from linkshelf.services.search_service import SearchService

router = APIRouter()


@router.get("", response_model=List[LinkSchema])
def search_links(
    q: Optional[str] = Query(None, description="Text to find in title, description or URL"),
    query: Optional[str] = Query(None, description="Alias of q"),
    tag: Optional[str] = Query(None, description="Tag name filter"),
    tag_ids: Optional[List[str]] = Query(None, alias="tagIds"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Alias of limit"),
    sort: Optional[str] = Query(None, description="field:direction, e.g. title:asc"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Search the current user's links.

    - q matches title, description or URL, case-insensitively
    - tag and tagIds restrict to tagged links and combine with q
    - Results are paginated only when page or limit is given
    - Returns an empty list when nothing matches
    """
    size = limit if limit is not None else page_size
    paginate = page is not None or size is not None

    return SearchService(db).search(
        current_user.id,
        query=q if q is not None else query,
        tag_name=tag,
        tag_ids=parse_id_list(tag_ids),
        page=parse_page(page) if paginate else None,
        limit=parse_page_size(size) if paginate else None,
        sort=sort,
    )
