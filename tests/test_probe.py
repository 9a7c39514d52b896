from __future__ import annotations

import httpx
import pytest

from adapters.github.probe import probe


async def _probe_with(status_or_exc, settings) -> tuple[bool, list[httpx.Request]]:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if isinstance(status_or_exc, type) and issubclass(status_or_exc, Exception):
            raise status_or_exc("boom", request=request)
        headers = {"Location": "https://api.github.com/elsewhere"} if 300 <= status_or_exc < 400 else {}
        return httpx.Response(status_or_exc, headers=headers)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True) as client:
        ok = await probe("https://api.github.com/repos/acme/tmpl", settings=settings, client=client)
    return ok, calls


@pytest.mark.asyncio
async def test_only_200_counts_as_existing(settings):
    ok, calls = await _probe_with(200, settings)
    assert ok is True
    assert [request.method for request in calls] == ["HEAD"]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [201, 204, 301, 302, 304, 403, 404, 429, 500, 503])
async def test_any_other_status_is_false(settings, status):
    ok, calls = await _probe_with(status, settings)
    assert ok is False
    # Redirects are not followed, and there is no retry at this layer.
    assert len(calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError])
async def test_transport_failures_are_false(settings, error):
    ok, calls = await _probe_with(error, settings)
    assert ok is False
    assert len(calls) == 1
