from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import get_db
from app.infra.logging_config import get_logger
from app.schemas.common import HealthResponse

logger = get_logger("system")

router = APIRouter(
    prefix="",
    tags=["system"],
)


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)):
    """Report whether the database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="error", database="unreachable").model_dump(),
        )
    return HealthResponse(status="ok", database="ok")
