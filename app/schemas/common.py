"""Small response bodies shared by several routers."""

from __future__ import annotations

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str
    database: str
