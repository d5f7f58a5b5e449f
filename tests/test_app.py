"""Tests for application wiring: health probe, request IDs, settings."""

import logging
import uuid

import pytest
from httpx import AsyncClient

from app.config import Settings
from app.main import create_app
from app.middleware import REQUEST_ID_HEADER


@pytest.mark.asyncio
async def test_health_returns_ok(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_request_id_is_generated_when_missing(client: AsyncClient) -> None:
    resp = await client.get("/health")
    uuid.UUID(resp.headers[REQUEST_ID_HEADER])


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient) -> None:
    resp = await client.get("/health", headers={REQUEST_ID_HEADER: "trace-abc"})
    assert resp.headers[REQUEST_ID_HEADER] == "trace-abc"


def test_create_app_uses_settings() -> None:
    app = create_app(Settings(api_title="Staff Directory", api_version="9.9.9"))
    assert app.title == "Staff Directory"
    assert app.version == "9.9.9"


def test_log_level_reads_env_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert Settings().log_level == "DEBUG"


def test_create_app_leaves_log_level_alone() -> None:
    root = logging.getLogger()
    level = root.level

    create_app(Settings(api_title="Staff Directory", LOG_LEVEL="CRITICAL"))

    assert root.level == level
