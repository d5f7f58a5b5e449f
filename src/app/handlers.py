"""Fault translation: turn anything raised during a request into an error response.

Two layers:

- ``translate`` is pure. It takes a ``Fault`` value and returns the status code
  and body, dispatching on ``Fault.kind`` through ``FAULT_TABLE``.
- The exception handlers registered by ``register_exception_handlers`` sit at
  the FastAPI boundary. They turn an exception into a ``Fault``, log it, and
  wrap the translated body in a JSONResponse.

Every exception that escapes an endpoint ends up in exactly one handler. Log
lines get request_id, method and path from the context RequestIDMiddleware binds.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions import DomainError, FaultKind, FieldViolation
from app.logging import get_logger
from app.schemas.error import ExceptionDetails, ValidationExceptionDetails

logger = get_logger(__name__)

VALIDATION_DETAILS = "Check the wrong fields"
GENERIC_DETAILS = "Unexpected error occurred."

# Location FastAPI puts in front of request body field paths
_BODY = "body"


@dataclass(frozen=True)
class FaultSpec:
    status: int
    title: str


FAULT_TABLE: dict[FaultKind, FaultSpec] = {
    FaultKind.INVALID_TYPE: FaultSpec(400, "InvalidTypeException Exception"),
    FaultKind.CONFLICT: FaultSpec(409, "Conflict Exception"),
    FaultKind.RESOURCE_NOT_FOUND: FaultSpec(404, "Resource Exception"),
    FaultKind.FIELD_VALIDATION: FaultSpec(400, "Field Validation Exception"),
    FaultKind.UNCLASSIFIED: FaultSpec(500, "Internal Server Error"),
}


@dataclass(frozen=True)
class Fault:
    """What went wrong, reduced to the data the translator needs.

    ``type_name`` is the fully-qualified name of the exception that caused the
    fault; it becomes the developer message. ``violations`` is only read for
    ``FaultKind.FIELD_VALIDATION``.
    """

    kind: FaultKind
    message: str
    type_name: str
    violations: tuple[FieldViolation, ...] = ()


def _qualified_name(exc: BaseException) -> str:
    cls = type(exc)
    return f"{cls.__module__}.{cls.__qualname__}"


def collect_violations(violations: Iterable[FieldViolation]) -> dict[str, str]:
    """Reduce field errors to one message per field.

    When a field has several errors the first one wins, so the result only
    depends on the order the validator reported them in.
    """
    collected: dict[str, str] = {}
    for violation in violations:
        collected.setdefault(violation.field, violation.message)
    return collected


def translate(fault: Fault, *, timestamp: datetime | None = None) -> tuple[int, ExceptionDetails]:
    """Map a fault to ``(status_code, body)``.

    Args:
        fault: The fault to report.
        timestamp: Moment of failure; defaults to the current local time.
    """
    entry = FAULT_TABLE[fault.kind]
    common: dict[str, Any] = {
        "status": entry.status,
        "title": entry.title,
        "timestamp": timestamp or datetime.now(),
        "developer_message": fault.type_name,
    }

    match fault.kind:
        case FaultKind.FIELD_VALIDATION:
            body: ExceptionDetails = ValidationExceptionDetails(
                details=VALIDATION_DETAILS,
                violations=collect_violations(fault.violations),
                **common,
            )
        case FaultKind.UNCLASSIFIED:
            # Never echo the message: it may carry internals
            body = ExceptionDetails(details=GENERIC_DETAILS, **common)
        case _:
            body = ExceptionDetails(details=fault.message, **common)

    return entry.status, body


def _field_name(error: dict[str, Any]) -> str:
    """Name the request field a validation error points at.

    Body fields drop the location: ``("body", "address", "street")`` ->
    ``"address.street"``. Path, query, header and cookie parameters keep it
    (``"query.limit"``) so same-named parameters don't collide. A malformed
    JSON body reports a character offset instead of a field, so it is keyed
    as ``"body"``.
    """
    parts = [str(part) for part in error.get("loc", ())]
    if error.get("type") == "json_invalid" or parts == [_BODY]:
        return _BODY
    if parts and parts[0] == _BODY:
        parts = parts[1:]
    return ".".join(parts)


def fault_from_domain_error(exc: DomainError) -> Fault:
    return Fault(
        kind=exc.kind,
        message=exc.message,
        type_name=_qualified_name(exc),
        violations=getattr(exc, "violations", ()),
    )


def fault_from_request_validation(exc: RequestValidationError) -> Fault:
    violations = tuple(
        FieldViolation(field=_field_name(error), message=error.get("msg", ""))
        for error in exc.errors()
    )
    return Fault(
        kind=FaultKind.FIELD_VALIDATION,
        message=VALIDATION_DETAILS,
        type_name=_qualified_name(exc),
        violations=violations,
    )


def fault_from_unhandled(exc: Exception) -> Fault:
    return Fault(kind=FaultKind.UNCLASSIFIED, message=str(exc), type_name=_qualified_name(exc))


def _respond(fault: Fault) -> JSONResponse:
    status_code, body = translate(fault)
    return JSONResponse(status_code=status_code, content=body.to_json())


def _log_violations(fault: Fault) -> None:
    logger.info(
        "field_validation_error",
        violations=collect_violations(fault.violations),
        error_type=fault.type_name,
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate any ``DomainError`` according to its kind."""
    fault = fault_from_domain_error(exc)
    match fault.kind:
        case FaultKind.FIELD_VALIDATION:
            _log_violations(fault)
        case FaultKind.UNCLASSIFIED:
            logger.error(
                "unclassified_domain_error", error=fault.message, error_type=fault.type_name
            )
        case _:
            logger.error(str(fault.kind), error=fault.message, error_type=fault.type_name)
    return _respond(fault)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with one violation per invalid field."""
    fault = fault_from_request_validation(exc)
    _log_violations(fault)
    return _respond(fault)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    The log line carries the message and traceback; the client gets the
    generic details only.
    """
    fault = fault_from_unhandled(exc)
    logger.exception("unhandled_exception", error=fault.message, error_type=fault.type_name)
    return _respond(fault)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the fault handlers on ``app``."""
    # Starlette types handlers as taking Exception; ours take the narrower class
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
