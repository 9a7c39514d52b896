from __future__ import annotations

import httpx
import pytest

from adapters import update_check
from adapters.update_check import check_for_update, fetch_latest_version, is_newer


def _pypi(response: httpx.Response | Exception, calls: list[httpx.Request]) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if isinstance(response, Exception):
            raise response
        return response

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    ("latest", "current", "expected"),
    [("0.2.0", "0.1.0", True), ("0.1.0", "0.1.0", False), ("0.1.0", "0.2.0", False), ("nightly", "0.1.0", False)],
)
def test_is_newer(latest, current, expected):
    assert is_newer(latest, current) is expected


@pytest.mark.asyncio
async def test_latest_version_comes_from_pypi_json(settings):
    calls: list[httpx.Request] = []
    async with _pypi(httpx.Response(200, json={"info": {"version": "0.3.1"}}), calls) as client:
        assert await fetch_latest_version(settings=settings, client=client) == "0.3.1"
    assert str(calls[0].url) == "https://pypi.org/pypi/create-odd-app/json"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json={"info": {}}),
        httpx.ConnectError("offline"),
    ],
)
async def test_lookup_failures_are_silent(settings, response):
    async with _pypi(response, []) as client:
        assert await fetch_latest_version(settings=settings, client=client) is None


@pytest.mark.asyncio
async def test_check_for_update_only_reports_newer_versions(settings):
    response = httpx.Response(200, json={"info": {"version": "0.2.0"}})
    async with _pypi(response, []) as client:
        assert await check_for_update(settings=settings, client=client, current="0.1.0") == "0.2.0"
        assert await check_for_update(settings=settings, client=client, current="0.2.0") is None


@pytest.mark.asyncio
async def test_check_is_skipped_when_not_installed(settings, monkeypatch):
    calls: list[httpx.Request] = []
    monkeypatch.setattr(update_check, "installed_version", lambda: None)
    async with _pypi(httpx.Response(200, json={"info": {"version": "0.2.0"}}), calls) as client:
        assert await check_for_update(settings=settings, client=client) is None
    assert calls == []
