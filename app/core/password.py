"""Random password generation."""

from __future__ import annotations

import secrets
import string

from app.core.errors import InputValidationError

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SPECIAL = "!@#$%^&*()-_=+[]{}|;:,.<>?"

MIN_LENGTH = 6


def generate_password(
    length: int = 12,
    include_upper: bool = True,
    include_numbers: bool = True,
    include_special: bool = True,
) -> str:
    """
    Generate a password of ``length`` characters.

    Lowercase letters are always in the pool. Every enabled optional class
    contributes at least one character; at least one must be enabled.
    """
    if length < MIN_LENGTH:
        raise InputValidationError(
            f"Please enter a valid password length (minimum {MIN_LENGTH})."
        )

    optional = [
        chars
        for enabled, chars in (
            (include_upper, UPPERCASE),
            (include_numbers, DIGITS),
            (include_special, SPECIAL),
        )
        if enabled
    ]
    if not optional:
        raise InputValidationError(
            "Please select at least one additional character type."
        )

    pool = LOWERCASE + "".join(optional)
    chars = [secrets.choice(group) for group in optional]
    chars.extend(secrets.choice(pool) for _ in range(length - len(chars)))

    rng = secrets.SystemRandom()
    rng.shuffle(chars)
    return "".join(chars)
