"""Parser de URLs de repositorio GitHub.

Formatos aceptados:
- https://github.com/<owner>/<name>            -> rama por defecto (lookup a la API)
- https://github.com/<owner>/<name>/           -> igual que el anterior
- https://github.com/<owner>/<name>/tree/<branch>[/<sub/path>]

Cualquier otra forma devuelve `None`; nunca lanza.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from adapters.http_client import GITHUB_JSON_HEADERS, client_scope
from core.config import AppSettings
from core.domain.models import RepositoryReference

logger = logging.getLogger(__name__)

TREE_MARKER = "tree"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def is_github_url(url: str, *, settings: AppSettings | None = None) -> bool:
    """Compara el origen (scheme + host) de `url` con el host de templates."""

    settings = settings or AppSettings()
    try:
        return _origin(url) == _origin(settings.github_web_url)
    except ValueError:
        return False


def _origin(url: str) -> tuple[str, str | None, int | None]:
    # Como `URL.origin`: sin credenciales y con el puerto por defecto normalizado.
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    return scheme, parts.hostname, parts.port or _DEFAULT_PORTS.get(scheme)


async def fetch_default_branch(
    *,
    owner: str,
    name: str,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> str | None:
    settings = settings or AppSettings()
    url = f"{settings.github_api_url.rstrip('/')}/repos/{owner}/{name}"

    try:
        async with client_scope(client, settings) as http:
            resp = await http.get(url, headers=GITHUB_JSON_HEADERS)
    except httpx.HTTPError as exc:
        logger.debug("default branch lookup for %s/%s failed: %s", owner, name, exc)
        return None

    if resp.status_code != 200:
        logger.debug("default branch lookup for %s/%s -> HTTP %s", owner, name, resp.status_code)
        return None

    try:
        data: Any = resp.json()
    except ValueError:
        return None
    branch = data.get("default_branch") if isinstance(data, dict) else None
    return branch if isinstance(branch, str) and branch else None


def _build(owner: str, name: str, branch: str, sub_path: str) -> RepositoryReference | None:
    try:
        return RepositoryReference(owner=owner, name=name, branch=branch, sub_path=sub_path)
    except ValidationError:
        return None


async def parse_repo_url(
    url: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> RepositoryReference | None:
    """Convierte una URL de GitHub en `RepositoryReference`.

    Solo la forma sin rama hace I/O (un único lookup de `default_branch`).
    """

    settings = settings or AppSettings()
    if not is_github_url(url, settings=settings):
        return None

    segments = urlsplit(url).path.split("/")
    # ["", owner, name, ref_kind, branch, *sub_path]
    owner = segments[1] if len(segments) > 1 else ""
    name = segments[2] if len(segments) > 2 else ""
    ref_kind = segments[3] if len(segments) > 3 else None
    branch = segments[4] if len(segments) > 4 else None
    sub_path = "/".join(segments[5:])

    if not owner or not name:
        return None

    if ref_kind is None or (ref_kind == "" and branch is None):
        default_branch = await fetch_default_branch(
            owner=owner,
            name=name,
            settings=settings,
            client=client,
        )
        if default_branch is None:
            return None
        return _build(owner, name, default_branch, "")

    if ref_kind == TREE_MARKER and branch:
        return _build(owner, name, branch, sub_path)

    return None
