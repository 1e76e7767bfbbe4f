"""Service for contact form messages."""

from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from app.models.message import Message
from app.schemas.message import MessageCreate


class MessageService:
    """Stores contact form submissions."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_message(self, data: MessageCreate) -> Message:
        message = Message(name=data.name, email=str(data.email), message=data.message)
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def get_messages(self) -> List[Message]:
        """All messages, oldest first."""
        return self.db.query(Message).order_by(Message.created_at, Message.id).all()
