"""Custom validators and types."""

import re
from typing import Annotated

from pydantic import AfterValidator, Field

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9-]+$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


def validate_email(value: str) -> str:
    """
    Validate and normalize an email address.

    Only the overall shape is checked (local@domain.tld); the address is
    stripped and lower-cased so lookups are case-insensitive.
    """
    normalized = value.strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError("Invalid email address")
    return normalized


def validate_subdomain(value: str) -> str:
    """Subdomains may only contain lowercase letters, numbers, and hyphens."""
    if not SUBDOMAIN_PATTERN.match(value):
        raise ValueError(
            "Subdomain must contain only lowercase letters, numbers, and hyphens"
        )
    return value


def validate_hex_color(value: str) -> str:
    """Colors are #RRGGBB."""
    if not HEX_COLOR_PATTERN.match(value):
        raise ValueError("Color must be a hex value like #2563EB")
    return value.upper()


Email = Annotated[
    str,
    Field(min_length=3, max_length=255),
    AfterValidator(validate_email),
]

Subdomain = Annotated[
    str,
    Field(min_length=1, max_length=63),
    AfterValidator(validate_subdomain),
]

HexColor = Annotated[str, AfterValidator(validate_hex_color)]
