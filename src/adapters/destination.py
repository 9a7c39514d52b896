"""Checks del directorio destino antes de extraer.

Por qué una allow-list:
- Re-ejecutar la herramienta sobre un directorio que ya tiene `.git`, config
  del IDE o un README no debería bloquear el scaffolding.
- Cualquier otra entrada podría ser sobrescrita por el template: se rechaza.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.domain.models import DestinationState

ALLOWED_ENTRIES: frozenset[str] = frozenset(
    {
        ".DS_Store",
        ".editorconfig",
        ".git",
        ".gitattributes",
        ".gitignore",
        ".gitlab-ci.yml",
        ".hg",
        ".hgcheck",
        ".hgignore",
        ".idea",
        ".npmignore",
        ".travis.yml",
        ".vscode",
        ".yarn",
        "LICENSE",
        "LICENSE.md",
        "README.md",
        "Thumbs.db",
        "docs",
        "mkdocs.yml",
        "npm-debug.log",
        "package-lock.json",
        "pnpm-lock.yaml",
        "yarn-debug.log",
        "yarn-error.log",
        "yarn.lock",
        "yarnrc.yml",
    }
)

# Logs con sufijo (npm-debug.log.1234, yarn-error.log-xyz...).
_ALLOWED_LOG_PREFIXES = ("npm-debug.log", "yarn-debug.log", "yarn-error.log")


def is_allowed_entry(entry_name: str) -> bool:
    if entry_name in ALLOWED_ENTRIES:
        return True
    # Ficheros de módulo de IntelliJ.
    if entry_name.endswith(".iml"):
        return True
    return entry_name.startswith(_ALLOWED_LOG_PREFIXES)


def ensure_writable(parent_dir: Path) -> bool:
    """`True` si el proceso puede escribir en `parent_dir`. No crea nada."""

    try:
        return os.access(parent_dir, os.W_OK) and Path(parent_dir).is_dir()
    except OSError:
        return False


def make_dir(root: Path) -> Path:
    """Crea `root` (recursivo). Si ya existe no hace nada."""

    root.mkdir(parents=True, exist_ok=True)
    return root


def find_conflicts(directory: Path) -> list[str]:
    """Entradas de `directory` fuera de la allow-list (vacío si no existe)."""

    if not directory.exists():
        return []
    if not directory.is_dir():
        return [directory.name]
    return sorted(entry.name for entry in directory.iterdir() if not is_allowed_entry(entry.name))


def ensure_empty(directory: Path, expected_name: str | None = None) -> bool:
    """`True` si `directory` no existe o solo contiene entradas permitidas.

    `expected_name` es el nombre del proyecto; solo se usa para mensajes.
    """

    return not find_conflicts(directory)


def inspect_destination(root: Path) -> DestinationState:
    """Snapshot fresco del destino (escritura en el padre + vacío)."""

    path = root.resolve()
    conflicts = find_conflicts(path)
    return DestinationState(
        path=path,
        writable=ensure_writable(path.parent),
        is_empty=not conflicts,
        conflicts=conflicts,
    )
