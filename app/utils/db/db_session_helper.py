"""Session scope for code running outside a request (commands, scripts)."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from app.db import SessionLocal


@contextmanager
def db_session() -> Iterator[Session]:
    """Yield a session; roll back on error and always close."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
