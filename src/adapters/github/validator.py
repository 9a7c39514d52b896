"""Validación de templates: ¿existe `package.json` en esa rama/ruta?

Un `True` no garantiza que la descarga funcione (hay un hueco TOCTOU); el
motor de descarga tiene su propia política de reintentos.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from adapters.github.probe import probe
from core.config import AppSettings
from core.domain.models import RepositoryReference

MANIFEST_FILENAME = "package.json"


def build_manifest_url(reference: RepositoryReference, *, settings: AppSettings | None = None) -> str:
    settings = settings or AppSettings()
    contents_url = f"{settings.github_api_url.rstrip('/')}/repos/{reference.owner}/{reference.name}/contents"
    sub_path = reference.sub_path.strip("/")
    manifest_path = f"/{sub_path}/{MANIFEST_FILENAME}" if sub_path else f"/{MANIFEST_FILENAME}"
    return f"{contents_url}{manifest_path}?ref={quote(reference.branch, safe='')}"


async def has_template_manifest(
    reference: RepositoryReference,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """`True` si la API de contents responde 200 para el manifest del template."""

    url = build_manifest_url(reference, settings=settings)
    return await probe(url, settings=settings, client=client)
