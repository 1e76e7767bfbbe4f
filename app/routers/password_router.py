"""Password generator API."""

from fastapi import APIRouter

from app.core.password import generate_password
from app.schemas.password import PasswordRequest, PasswordResponse

router = APIRouter(
    prefix="/password",
    tags=["password"],
)


@router.post("", response_model=PasswordResponse)
def create_password(data: PasswordRequest) -> PasswordResponse:
    """Generate a random password with the requested character classes."""
    return PasswordResponse(
        password=generate_password(
            length=data.length,
            include_upper=data.include_upper,
            include_numbers=data.include_numbers,
            include_special=data.include_special,
        )
    )
