"""Domain models.

Plain dataclasses, not Pydantic: the domain layer doesn't know about
serialization. Response schemas live under app/schemas.
"""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from app.exceptions import InvalidTypeError


class Gender(StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"


def parse_gender(value: str) -> Gender:
    """Turn a raw value (any case) into a ``Gender``.

    Raises:
        InvalidTypeError: if the value names no known gender.
    """
    try:
        return Gender(value.strip().upper())
    except ValueError:
        allowed = ", ".join(g.value for g in Gender)
        raise InvalidTypeError(f"Invalid gender '{value}'. Allowed values: {allowed}") from None


@dataclass(frozen=True)
class Person:
    """A person. Every field is optional; nothing here enforces presence."""

    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    birth_date: date | None = None
    gender: Gender | None = None
