"""Aviso de nueva versión publicada (best-effort).

Se consulta la API JSON de PyPI; cualquier fallo (red, status, JSON,
versión no parseable) equivale a "no hay aviso".
"""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

import httpx
from packaging.version import InvalidVersion, Version

from adapters.http_client import client_scope
from core.config import AppSettings

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "create-odd-app"
UPGRADE_COMMAND = f"pip install --upgrade {DISTRIBUTION_NAME}"


def installed_version() -> str | None:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return None


def is_newer(latest: str, current: str) -> bool:
    try:
        return Version(latest) > Version(current)
    except InvalidVersion:
        return False


async def fetch_latest_version(
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> str | None:
    settings = settings or AppSettings()
    url = f"{settings.pypi_url.rstrip('/')}/pypi/{DISTRIBUTION_NAME}/json"

    try:
        async with client_scope(client, settings) as http:
            resp = await http.get(url)
    except httpx.HTTPError as exc:
        logger.debug("update check failed: %s", exc)
        return None

    if resp.status_code != 200:
        logger.debug("update check -> HTTP %s", resp.status_code)
        return None

    try:
        data = resp.json()
    except ValueError:
        return None
    info = data.get("info") if isinstance(data, dict) else None
    latest = info.get("version") if isinstance(info, dict) else None
    return latest if isinstance(latest, str) and latest else None


async def check_for_update(
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
    current: str | None = None,
) -> str | None:
    """Versión publicada si es más reciente que la instalada; si no, `None`."""

    current = current or installed_version()
    if current is None:
        return None
    latest = await fetch_latest_version(settings=settings, client=client)
    if latest is None or not is_newer(latest, current):
        return None
    return latest
