"""Gestor de paquetes (npm / yarn / pnpm).

- Detección: `npm_config_user_agent` (lo fija `npx`/`yarn create`/`pnpm create`),
  si no hay, el primer binario disponible.
- Instalación: `<pm> install` en el directorio del proyecto, sin `chdir`.
"""

from __future__ import annotations

import logging
import os
import shutil
import socket
import subprocess
from pathlib import Path
from urllib.parse import urlsplit

from core.domain.choices import PackageManager
from core.errors import CommandFailed

logger = logging.getLogger(__name__)

YARN_REGISTRY_HOST = "registry.yarnpkg.com"


def detect_package_manager(environ: dict[str, str] | None = None) -> PackageManager:
    env = os.environ if environ is None else environ
    user_agent = env.get("npm_config_user_agent") or ""
    if user_agent.startswith("yarn"):
        return PackageManager.YARN
    if user_agent.startswith("pnpm"):
        return PackageManager.PNPM
    if user_agent.startswith("npm"):
        return PackageManager.NPM

    if shutil.which("npm"):
        return PackageManager.NPM
    if shutil.which("pnpm"):
        return PackageManager.PNPM
    return PackageManager.NPM


def _resolves(host: str) -> bool:
    try:
        socket.getaddrinfo(host, None)
    except OSError:
        return False
    return True


def is_online(environ: dict[str, str] | None = None) -> bool:
    """Best-effort: ¿resuelve el registry de yarn (o el proxy HTTPS configurado)?"""

    if _resolves(YARN_REGISTRY_HOST):
        return True

    env = os.environ if environ is None else environ
    proxy = env.get("https_proxy") or env.get("HTTPS_PROXY")
    if not proxy:
        return False
    host = urlsplit(proxy).hostname
    return bool(host) and _resolves(host)


def install_command(package_manager: PackageManager, *, online: bool = True) -> list[str]:
    if package_manager is PackageManager.YARN:
        # `yarn` a secas instala; sin red tira de la caché offline.
        return ["yarn"] if online else ["yarn", "--offline"]
    return [package_manager.value, "install"]


def install(root: Path, package_manager: PackageManager, *, online: bool = True) -> None:
    """Ejecuta la instalación de dependencias en `root`.

    Lanza `CommandFailed` si el comando no existe o termina con error.
    """

    args = install_command(package_manager, online=online)
    env = {
        **os.environ,
        "ADBLOCK": "1",
        "NODE_ENV": "development",
        "DISABLE_OPENCOLLECTIVE": "1",
    }
    logger.debug("running %s in %s", " ".join(args), root)
    try:
        completed = subprocess.run(args, cwd=root, env=env, check=False)
    except FileNotFoundError as exc:
        raise CommandFailed(" ".join(args)) from exc
    if completed.returncode != 0:
        raise CommandFailed(" ".join(args), completed.returncode)
