"""Contact form API: store submissions and list them."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import InputValidationError, InternalError
from app.infra.logging_config import get_logger
from app.routers.utils.dependencies import get_message_service
from app.schemas.common import SuccessResponse
from app.schemas.message import MessageCreate, MessageRead
from app.services.message_service import MessageService

logger = get_logger("contact")

router = APIRouter(
    prefix="",
    tags=["contact"],
)


@router.post("/contact", response_model=SuccessResponse)
def submit_contact_message(
    data: MessageCreate,
    svc: MessageService = Depends(get_message_service),
) -> SuccessResponse:
    """Store a contact form submission."""
    try:
        svc.create_message(data)
    except SQLAlchemyError as e:
        logger.error("Contact form error: %s", e)
        raise InputValidationError("Invalid message data") from e
    return SuccessResponse()


@router.get("/messages", response_model=List[MessageRead])
def list_messages(
    svc: MessageService = Depends(get_message_service),
) -> List[MessageRead]:
    """List all contact messages, oldest first."""
    try:
        messages = svc.get_messages()
    except SQLAlchemyError as e:
        logger.error("Fetch messages error: %s", e)
        raise InternalError("Failed to fetch messages") from e
    return [MessageRead.model_validate(m) for m in messages]
