"""Pydantic schemas for the password generator."""

from __future__ import annotations

from pydantic import Field

from app.schemas.base import ApiModel


class PasswordRequest(ApiModel):
    length: int = Field(12, le=256)
    include_upper: bool = True
    include_numbers: bool = True
    include_special: bool = True


class PasswordResponse(ApiModel):
    password: str
