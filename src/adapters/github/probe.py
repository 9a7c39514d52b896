"""Existence probe (HEAD) para recursos de GitHub.

Reglas:
- 200 => existe.
- Cualquier otro status (incluidas redirecciones) o fallo de transporte => no existe.
- Sin reintentos: el reintento es responsabilidad del motor de descarga.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import GITHUB_JSON_HEADERS, client_scope
from core.config import AppSettings

logger = logging.getLogger(__name__)


async def probe(
    url: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """`True` solo si `HEAD url` responde exactamente 200."""

    try:
        async with client_scope(client, settings) as http:
            response = await http.head(url, headers=GITHUB_JSON_HEADERS, follow_redirects=False)
    except httpx.HTTPError as exc:
        logger.debug("probe %s failed: %s", url, exc)
        return False

    logger.debug("probe %s -> HTTP %s", url, response.status_code)
    return response.status_code == 200
