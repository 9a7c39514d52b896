"""Descarga + extracción del tarball de un template (codeload).

Flujo por intento:
1) stream del `tar.gz` a un fichero temporal con nombre único
2) extracción en el destino (se quita el directorio envoltorio `<name>-<ref>/`)
3) borrado del temporal, pase lo que pase

Los intentos se repiten como unidad (máximo `download_max_attempts`). Al
agotarlos se lanza `DownloadFailure` con el mensaje del último error.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tarfile
import tempfile
import time
from collections.abc import Callable, Iterator
from pathlib import Path, PurePosixPath

import httpx

from adapters.http_client import client_scope
from core.config import AppSettings
from core.domain.models import AttemptOutcome, RepositoryReference, RetrievalAttempt
from core.errors import DownloadFailure

logger = logging.getLogger(__name__)

TEMP_PREFIX = "create-odd-app.temp"

_RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    httpx.HTTPError,
    tarfile.TarError,
    OSError,
    TimeoutError,
)


def build_tarball_url(
    owner: str,
    name: str,
    branch: str,
    *,
    settings: AppSettings | None = None,
) -> str:
    settings = settings or AppSettings()
    return f"{settings.github_codeload_url.rstrip('/')}/{owner}/{name}/tar.gz/{branch}"


def download_branch_for(reference: RepositoryReference, settings: AppSettings) -> str:
    """Rama del tarball: la fija de config si existe, si no la de la referencia."""

    return settings.download_branch or reference.branch


def temp_artifact_path(temp_dir: Path, attempt_number: int) -> Path:
    # pid + reloj en ns: único entre invocaciones concurrentes en el mismo host.
    return temp_dir / f"{TEMP_PREFIX}-{os.getpid()}-{time.time_ns()}-{attempt_number}.tar.gz"


async def download_tar(url: str, target: Path, *, client: httpx.AsyncClient) -> Path:
    """Hace stream de `url` a `target`. Cualquier status distinto de 200 es error."""

    async with client.stream("GET", url) as response:
        if response.status_code != 200:
            raise httpx.HTTPStatusError(
                f"Download failed with HTTP {response.status_code} for {url}",
                request=response.request,
                response=response,
            )
        with target.open("wb") as fh:
            async for chunk in response.aiter_bytes():
                fh.write(chunk)
    return target


def _strip_first(path: str) -> str:
    return "/".join(PurePosixPath(path).parts[1:])


def _select_members(archive: tarfile.TarFile, name: str) -> Iterator[tarfile.TarInfo]:
    for member in archive.getmembers():
        if not member.name.startswith(name):
            continue
        stripped = _strip_first(member.name)
        if not stripped:
            continue
        member.name = stripped
        if member.islnk():
            # Los hardlinks apuntan a rutas del archivo: también llevan el envoltorio.
            member.linkname = _strip_first(member.linkname)
            if not member.linkname:
                continue
        yield member


def extract_tarball(archive_path: Path, destination: Path, *, name: str) -> None:
    """Extrae `archive_path` en `destination` quitando un nivel y filtrando por `name`."""

    with tarfile.open(archive_path, mode="r:gz") as archive:
        members = list(_select_members(archive, name))
        archive.extractall(destination, members=members, filter="data")
    logger.debug("extracted %d entries into %s", len(members), destination)


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


async def retrieve_and_unpack(
    destination: Path,
    reference: RepositoryReference,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
    temp_dir: Path | None = None,
    on_attempt: Callable[[RetrievalAttempt], None] | None = None,
) -> None:
    """Descarga y extrae el template en `destination`.

    Precondición: el destino ya pasó los checks de escritura/vacío.
    No es atómico: tras un fallo puede quedar un árbol parcial en el destino,
    pero nunca quedan temporales.
    """

    settings = settings or AppSettings()
    temp_root = Path(temp_dir or settings.temp_dir or tempfile.gettempdir())
    url = build_tarball_url(
        reference.owner,
        reference.name,
        download_branch_for(reference, settings),
        settings=settings,
    )
    max_attempts = settings.download_max_attempts

    async with client_scope(client, settings) as http:
        for attempt_number in range(1, max_attempts + 1):
            temp_file = temp_artifact_path(temp_root, attempt_number)
            error: BaseException | None = None
            try:
                await asyncio.wait_for(
                    download_tar(url, temp_file, client=http),
                    timeout=settings.download_timeout_seconds,
                )
                await asyncio.to_thread(extract_tarball, temp_file, destination, name=reference.name)
            except _RETRYABLE_ERRORS as exc:
                error = exc
            finally:
                temp_file.unlink(missing_ok=True)

            if error is None:
                outcome = AttemptOutcome.SUCCESS
            elif attempt_number < max_attempts:
                outcome = AttemptOutcome.TRANSIENT_FAILURE
            else:
                outcome = AttemptOutcome.FATAL_FAILURE

            if on_attempt:
                on_attempt(
                    RetrievalAttempt(
                        temp_artifact_path=temp_file,
                        attempt_number=attempt_number,
                        outcome=outcome,
                        error=_describe(error) if error else None,
                    )
                )

            if error is None:
                return

            logger.debug("attempt %d/%d for %s failed: %s", attempt_number, max_attempts, url, _describe(error))
            if outcome is AttemptOutcome.FATAL_FAILURE:
                raise DownloadFailure(_describe(error)) from error
            await asyncio.sleep(settings.download_retry_backoff_seconds * (2 ** (attempt_number - 1)))
