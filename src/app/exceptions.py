"""Domain exceptions raised during request handling.

Each exception class carries a ``kind`` tag from ``FaultKind``. The handlers in
handlers.py never branch on the exception class itself: they read the tag and
look the response up in a table, so adding a new fault means adding a class
with an existing kind (or a new kind plus one table row).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar


class FaultKind(StrEnum):
    """Every category of failure the API knows how to report."""

    INVALID_TYPE = "invalid_type"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    FIELD_VALIDATION = "field_validation"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure."""

    field: str
    message: str


class DomainError(Exception):
    """Base class for all domain exceptions.

    A bare ``DomainError`` is unclassified and is reported as a 500 with a
    generic message.
    """

    kind: ClassVar[FaultKind] = FaultKind.UNCLASSIFIED

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidTypeError(DomainError):
    """Raised when a value cannot be interpreted as the expected type."""

    kind = FaultKind.INVALID_TYPE


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""

    kind = FaultKind.CONFLICT


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    kind = FaultKind.RESOURCE_NOT_FOUND

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")


class FieldValidationError(DomainError):
    """Raised by services that validate input themselves."""

    kind = FaultKind.FIELD_VALIDATION

    def __init__(self, violations: Iterable[FieldViolation]) -> None:
        self.violations = tuple(violations)
        fields = ", ".join(dict.fromkeys(v.field for v in self.violations))
        super().__init__(f"Invalid fields: {fields}")
