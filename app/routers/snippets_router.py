"""Snippets API: filtered listing and transactional create/update/delete."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import InputValidationError, InternalError
from app.routers.utils.dependencies import get_snippet_service
from app.schemas.common import SuccessResponse
from app.schemas.snippet import SnippetPayload, SnippetRead, SnippetUpdate
from app.services.snippet_service import SnippetService

router = APIRouter(
    prefix="/snippets",
    tags=["snippets"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[SnippetRead])
def list_snippets(
    search: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    svc: SnippetService = Depends(get_snippet_service),
) -> List[SnippetRead]:
    """List snippets, optionally filtered by free text and/or an exact tag."""
    try:
        return svc.list_snippets(search=search, tag=tag)
    except SQLAlchemyError as e:
        raise InternalError("Failed to fetch snippets") from e


@router.get("/{snippet_id}", response_model=SnippetRead)
def get_snippet(
    snippet_id: int,
    svc: SnippetService = Depends(get_snippet_service),
) -> SnippetRead:
    """Get a snippet by ID."""
    try:
        return svc.get_snippet(snippet_id)
    except SQLAlchemyError as e:
        raise InternalError("Failed to fetch snippet") from e


@router.post("", response_model=SnippetRead, status_code=201)
def create_snippet(
    payload: SnippetPayload,
    svc: SnippetService = Depends(get_snippet_service),
) -> SnippetRead:
    """Create a snippet and attach its tags, creating missing tags."""
    data, tag_names = payload.split()
    try:
        return svc.create_snippet(data, tag_names)
    except SQLAlchemyError as e:
        raise InputValidationError("Failed to create snippet") from e


@router.put("/{snippet_id}", response_model=SnippetRead)
def update_snippet(
    snippet_id: int,
    payload: SnippetPayload,
    svc: SnippetService = Depends(get_snippet_service),
) -> SnippetRead:
    """Replace a snippet's fields and its tag set."""
    data, tag_names = payload.split(SnippetUpdate)
    try:
        return svc.update_snippet(snippet_id, data, tag_names)
    except SQLAlchemyError as e:
        raise InputValidationError("Failed to update snippet") from e


@router.delete("/{snippet_id}", response_model=SuccessResponse)
def delete_snippet(
    snippet_id: int,
    svc: SnippetService = Depends(get_snippet_service),
) -> SuccessResponse:
    """Delete a snippet and its tag associations."""
    try:
        svc.delete_snippet(snippet_id)
    except SQLAlchemyError as e:
        raise InputValidationError("Failed to delete snippet") from e
    return SuccessResponse()
