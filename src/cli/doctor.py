"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil
import tempfile
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.destination import ensure_writable
from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file

app = typer.Typer(add_completion=False, help="Environment diagnostics for create-odd-app.")

_console = Console()

_BINARIES = ("node", "npm", "yarn", "pnpm", "git")


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.head(url)
        return response.status_code < 500, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


async def _check_hosts(settings: AppSettings) -> list[tuple[str, bool, str]]:
    checks = [
        ("GitHub API", f"{settings.github_api_url.rstrip('/')}/rate_limit"),
        ("GitHub codeload", settings.github_codeload_url),
    ]
    results = []
    for label, url in checks:
        ok, detail = await _check_http(url, settings)
        results.append((label, ok, detail))
    return results


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Create ODD App Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Download branch", "OK", settings.download_branch or "(resolved template branch)")
    table.add_row("Download attempts", "OK", str(settings.download_max_attempts))

    temp_dir = settings.temp_dir or Path(tempfile.gettempdir())
    temp_ok = ensure_writable(temp_dir)
    table.add_row("Temp directory", "OK" if temp_ok else "FAIL", str(temp_dir))

    # Connectivity (best-effort)
    for label, ok, detail in asyncio.run(_check_hosts(settings)):
        table.add_row(label, "OK" if ok else "FAIL", detail)

    # Toolchain
    missing = []
    for binary in _BINARIES:
        path = shutil.which(binary)
        if path is None:
            missing.append(binary)
        table.add_row(binary, "OK" if path else "MISSING", path or "-")

    _console.print(table)

    if "git" in missing:
        _console.print("\n[yellow]Note:[/yellow] Without git, the new project is created without a repository.")
    if {"npm", "yarn", "pnpm"} <= set(missing):
        _console.print("\n[yellow]Note:[/yellow] No package manager found; use --skip-install and install later.")
