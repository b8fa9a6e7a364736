from __future__ import annotations

from .errors import ValidationError


def validate_city(raw: str | None) -> str:
    """Return the trimmed city name or raise ``ValidationError`` when blank."""
    city = (raw or "").strip()
    if not city:
        raise ValidationError("City name is required. Please provide a valid city name.")
    return city
