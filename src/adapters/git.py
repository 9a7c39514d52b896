"""Inicialización de git en el proyecto generado.

Best-effort: si git no está instalado, o el destino ya vive dentro de un
repositorio git/mercurial, no se hace nada. Si falla a mitad, se borra el
`.git` creado para no dejar un repo a medias.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit from Create ODD App"


def _succeeds(args: list[str], cwd: Path) -> bool:
    try:
        completed = subprocess.run(
            args,
            cwd=cwd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return completed.returncode == 0


def is_in_git_repository(root: Path) -> bool:
    return _succeeds(["git", "rev-parse", "--is-inside-work-tree"], root)


def is_in_mercurial_repository(root: Path) -> bool:
    return _succeeds(["hg", "--cwd", ".", "root"], root)


def try_git_init(root: Path) -> bool:
    """`True` si se creó el repo con el commit inicial."""

    if not _succeeds(["git", "--version"], root):
        return False
    if is_in_git_repository(root) or is_in_mercurial_repository(root):
        return False

    if not _succeeds(["git", "init"], root):
        return False

    steps = (
        ["git", "checkout", "-b", "main"],
        ["git", "add", "-A"],
        ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
    )
    for step in steps:
        if not _succeeds(step, root):
            logger.debug("%s failed, removing partial .git in %s", " ".join(step), root)
            shutil.rmtree(root / ".git", ignore_errors=True)
            return False
    return True
