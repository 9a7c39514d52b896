from __future__ import annotations

import httpx
import pytest

from adapters.github.validator import build_manifest_url, has_template_manifest
from core.domain.models import RepositoryReference


def test_manifest_url_at_repo_root(settings):
    reference = RepositoryReference(owner="acme", name="tmpl", branch="main")
    assert (
        build_manifest_url(reference, settings=settings)
        == "https://api.github.com/repos/acme/tmpl/contents/package.json?ref=main"
    )


def test_manifest_url_in_sub_path(settings):
    reference = RepositoryReference(owner="acme", name="tmpl", branch="v2", sub_path="apps/web")
    assert (
        build_manifest_url(reference, settings=settings)
        == "https://api.github.com/repos/acme/tmpl/contents/apps/web/package.json?ref=v2"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(("status", "expected"), [(200, True), (404, False)])
async def test_has_template_manifest_probes_contents_api(settings, status, expected):
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status)

    reference = RepositoryReference(owner="acme", name="tmpl", branch="main", sub_path="web")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await has_template_manifest(reference, settings=settings, client=client) is expected

    assert len(calls) == 1
    assert calls[0].method == "HEAD"
    assert calls[0].url.path == "/repos/acme/tmpl/contents/web/package.json"
    assert calls[0].url.params["ref"] == "main"
