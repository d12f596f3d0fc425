from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from jsonparams.config import get_settings
from jsonparams.main import create_app
from jsonparams.middleware import ParamsParserMiddleware
from jsonparams.parsing import ParamsParseError, ParamsParser, default_registry


@pytest.fixture
async def echo_client() -> AsyncIterator[AsyncClient]:
    app = FastAPI()

    @app.post("/echo")
    async def echo(request: Request) -> dict:
        return {
            "raw": (await request.body()).decode(),
            "parsed": getattr(request.state, "request_parameters", None),
        }

    app.add_middleware(ParamsParserMiddleware, parser=ParamsParser(default_registry()), max_body_bytes=32)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def test_body_is_replayed_to_handlers(echo_client) -> None:
    resp = await echo_client.post("/echo", json={"a": [1, None]})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["parsed"] == {"a": [1]}
    assert payload["raw"].replace(" ", "") == '{"a":[1,null]}'


async def test_unparsed_bodies_reach_handlers_untouched(echo_client) -> None:
    resp = await echo_client.post("/echo", content="hello", headers={"Content-Type": "text/plain"})
    assert resp.json() == {"raw": "hello", "parsed": None}


async def test_oversized_body_is_rejected(echo_client) -> None:
    resp = await echo_client.post("/echo", json={"blob": "x" * 64})
    assert resp.status_code == 413
    assert resp.json()["error"]["code"] == "REQUEST_TOO_LARGE"


async def test_parse_error_propagates_when_show_exceptions_disabled(monkeypatch) -> None:
    monkeypatch.setenv("SHOW_EXCEPTIONS", "false")
    get_settings.cache_clear()
    app = create_app(registry=default_registry())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        with pytest.raises(ParamsParseError):
            await client.post("/parse", content="{oops", headers={"Content-Type": "application/json"})


async def test_extra_json_mime_types_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("EXTRA_JSON_MIME_TYPES", "application/vnd.api+json, application/merge-patch+json")
    get_settings.cache_clear()
    app = create_app(registry=default_registry())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        resp = await client.patch(
            "/parse", content='{"name": "David"}', headers={"Content-Type": "application/merge-patch+json"}
        )
    assert resp.status_code == 200
    assert resp.json()["request_parameters"] == {"name": "David"}


async def test_extra_json_mime_types_do_not_leak_into_caller_registry(monkeypatch) -> None:
    monkeypatch.setenv("EXTRA_JSON_MIME_TYPES", "application/vnd.api+json")
    get_settings.cache_clear()
    registry = default_registry()

    app = create_app(registry=registry)

    assert "application/vnd.api+json" not in registry
    assert "application/vnd.api+json" in app.state.params_registry
