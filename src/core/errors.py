"""Errores del flujo de scaffolding.

Cada tipo corresponde a una decisión distinta del orquestador/CLI:
- `DownloadFailure` admite fallback (template por defecto).
- El resto son fatales y se muestran con un mensaje accionable.
"""

from __future__ import annotations

from collections.abc import Sequence


class ScaffoldError(Exception):
    """Base de todos los errores esperables del scaffolding."""


class InvalidReference(ScaffoldError):
    """La URL no se pudo convertir en una referencia válida de repositorio."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        super().__init__(reason or f"Invalid GitHub URL: {url}")


class RepositoryNotFound(ScaffoldError):
    """La referencia es válida pero no hay un template (package.json) en esa rama/ruta."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Could not locate the repository for {url}")


class DestinationUnusable(ScaffoldError):
    """El destino no admite escritura o no está vacío según la allow-list."""

    def __init__(self, path: str, reason: str, conflicts: Sequence[str] = ()) -> None:
        self.path = path
        self.reason = reason
        self.conflicts = list(conflicts)
        super().__init__(reason)


class DownloadFailure(ScaffoldError):
    """Se agotaron los intentos de descarga + extracción.

    El mensaje conserva el del último error subyacente (encadenado vía `__cause__`).
    """


class InvalidProjectName(ScaffoldError):
    def __init__(self, name: str, problems: Sequence[str]) -> None:
        self.name = name
        self.problems = list(problems)
        super().__init__(f"Could not create a project called '{name}' because of npm naming restrictions")


class CommandFailed(ScaffoldError):
    """Un comando externo (install, tsc...) terminó con código distinto de cero."""

    def __init__(self, command: str, returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"{command} has failed.")
