from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.exceptions import ConflictError, DomainError, FieldValidationError, NotFoundError
from app.main import create_app
from app.models import parse_gender
from tests.factories import make_violation


class PersonPayload(BaseModel):
    """Request body with a couple of validated fields, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str | None = None
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    birth_date: date


# Endpoints that raise each kind of fault, standing in for real resource routers
fault_routes = APIRouter(prefix="/faulty")


@fault_routes.get("/gender/{value}")
async def read_gender(value: str) -> dict[str, str]:
    return {"gender": parse_gender(value)}


@fault_routes.post("/people/duplicate")
async def create_duplicate() -> None:
    raise ConflictError("Email ana@example.com already registered")


@fault_routes.get("/people/{person_id}")
async def read_person(person_id: int) -> None:
    raise NotFoundError("Person", person_id)


@fault_routes.post("/people", status_code=201)
async def create_person(payload: PersonPayload) -> PersonPayload:
    return payload


@fault_routes.post("/people/checked")
async def create_person_checked() -> None:
    raise FieldValidationError(
        [
            make_violation("email", "must be unique"),
            make_violation("email", "must be lowercase"),
            make_violation("lastName", "must not be blank"),
        ]
    )


@fault_routes.get("/domain")
async def unclassified_domain_error() -> None:
    raise DomainError("ledger row 17 is locked by pid 4242")


@fault_routes.get("/boom")
async def boom() -> None:
    raise RuntimeError("connection to db://admin:hunter2@10.0.0.5 refused")


@pytest.fixture
def app() -> FastAPI:
    """Fresh application with the fault-raising endpoints mounted."""
    application = create_app()
    application.include_router(fault_routes)
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app in-process.

    Starlette re-raises unhandled exceptions after the 500 handler has
    responded; raise_app_exceptions=False lets tests inspect that response.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
