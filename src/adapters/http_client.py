"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent para la API de GitHub y codeload.
- Facilita testeo: se puede sustituir por un cliente con `httpx.MockTransport`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from core.config import AppSettings

GITHUB_JSON_HEADERS = {
    # GitHub requiere UA. Accept JSON versión estable.
    "Accept": "application/vnd.github+json",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    timeout_seconds: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `transport` permite inyectar un `MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds or settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


@asynccontextmanager
async def client_scope(
    client: httpx.AsyncClient | None,
    settings: AppSettings | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Usa el cliente inyectado (sin cerrarlo) o abre uno propio para la llamada."""

    if client is not None:
        yield client
        return
    async with build_async_client(settings) as own:
        yield own
