"""Error response schemas.

Every error response has the same body:
{"status", "title", "details", "timestamp", "developerMessage"}, plus
"violations" for field validation failures. Exception handlers in
handlers.py construct these from faults.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ExceptionDetails(BaseModel):
    """Body returned for every failed request.

    ``timestamp`` is a naive local datetime, so it serializes as ISO 8601
    without an offset.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    status: int
    title: str
    details: str
    timestamp: datetime
    developer_message: str

    def to_json(self) -> dict[str, object]:
        """Dump with camelCase keys and JSON-safe values, ready for JSONResponse."""
        return self.model_dump(mode="json", by_alias=True)


class ValidationExceptionDetails(ExceptionDetails):
    """Field validation failure: one message per invalid field."""

    violations: dict[str, str]
