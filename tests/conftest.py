from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from jsonparams.config import get_settings
from jsonparams.main import create_app
from jsonparams.parsing import ParserRegistry, default_registry


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXTRA_JSON_MIME_TYPES", raising=False)
    monkeypatch.delenv("MAX_BODY_BYTES", raising=False)
    monkeypatch.setenv("SHOW_EXCEPTIONS", "true")
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def registry() -> ParserRegistry:
    # Fresh per test so registrations never leak between tests.
    return default_registry()


@pytest.fixture
def app(registry: ParserRegistry) -> FastAPI:
    return create_app(registry=registry)


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
