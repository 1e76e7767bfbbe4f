"""Application error taxonomy, mapped to HTTP responses in app.main."""

from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """Base error carrying the HTTP status it should surface as."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InputValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Validation failed"


class MissingParameterError(InputValidationError):
    """A required request parameter was absent or empty."""

    default_message = "Required parameter is missing"


class NotFoundError(AppError):
    """Referenced row does not exist."""

    status_code = 404
    default_message = "Not found"


class UpstreamError(AppError):
    """External provider returned a failure; its status is passed through."""

    status_code = 502
    default_message = "Upstream request failed"

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["code"] = self.status_code
        return body


class ServiceUnavailableError(AppError):
    """A required piece of configuration is missing."""

    status_code = 500
    default_message = "Service is not configured"


class InternalError(AppError):
    """Unexpected failure."""

    status_code = 500
