"""Tags API: every tag with its snippet count."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import InternalError
from app.routers.utils.dependencies import get_snippet_service
from app.schemas.snippet import TagRead
from app.services.snippet_service import SnippetService

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
)


@router.get("", response_model=List[TagRead])
def list_tags(
    svc: SnippetService = Depends(get_snippet_service),
) -> List[TagRead]:
    """List tags ordered by name."""
    try:
        return svc.list_tags()
    except SQLAlchemyError as e:
        raise InternalError("Failed to fetch tags") from e
