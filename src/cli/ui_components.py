"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en `create` y `doctor`.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from adapters.update_check import UPGRADE_COMMAND
from core.domain.models import AttemptOutcome, RetrievalAttempt
from core.services.scaffold_pipeline import ScaffoldResult

PINK = "#ff5274"


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos.
    """

    title = Text("Create ODD App", style=f"bold {PINK}")
    subtitle = Text("ODD SDK templates • SvelteKit • React", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style=PINK, padding=(1, 4)))


def describe_attempt(attempt: RetrievalAttempt, max_attempts: int) -> Text | None:
    """Línea para un intento de descarga fallido (los exitosos no se muestran)."""

    if attempt.outcome is AttemptOutcome.SUCCESS:
        return None
    text = Text()
    text.append(f"Download attempt {attempt.attempt_number}/{max_attempts} failed", style="yellow")
    if attempt.error:
        text.append(f": {attempt.error}", style="dim")
    return text


def build_conflicts_panel(name: str, conflicts: Sequence[str]) -> Panel:
    body = Text()
    for entry in conflicts:
        body.append(f"  {entry}\n")
    body.append("\nEither try using a new directory name, or remove the files listed above.")
    return Panel(
        body,
        title=Text(f"The directory {name} contains files that could conflict", style="bold red"),
        border_style="red",
    )


def build_next_steps_panel(result: ScaffoldResult, *, display_path: str) -> Panel:
    """Resumen final con los comandos útiles del proyecto generado."""

    pm = result.package_manager
    body = Text()
    body.append("Success! ", style="bold green")
    body.append(f"Created {result.app_name} at {result.root}\n")

    if result.has_package_json:
        body.append("\nInside that directory, you can run several commands:\n\n")
        body.append(f"  {pm.run_command('dev')}\n", style="cyan")
        body.append("    Starts the development server.\n\n")
        body.append(f"  {pm.run_command('build')}\n", style="cyan")
        body.append("    Builds the app for production.\n\n")
        body.append(f"  {pm.value} start\n", style="cyan")
        body.append("    Runs the built app in production mode.\n\n")
        body.append("We suggest that you begin by typing:\n\n")
        body.append("  cd ", style="cyan")
        body.append(f"{display_path}\n")
        if not result.installed:
            body.append(f"  {pm.value} install\n", style="cyan")
        body.append(f"  {pm.run_command('dev')}", style="cyan")

    return Panel(body, border_style="green")


def build_update_notice(latest: str) -> Text:
    text = Text()
    text.append("A new version of `create-odd-app` is available!", style="bold yellow")
    text.append(f" ({latest})\nYou can update by running: ")
    text.append(UPGRADE_COMMAND, style="cyan")
    return text
