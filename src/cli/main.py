"""CLI de create-odd-app (Typer + Rich).

Responsabilidad:
- Traducir flags/prompts a un `ScaffoldRequest`.
- Renderizar los hooks del pipeline y mapear cada error a un mensaje accionable.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.app_info import default_app_info
from adapters.package_manager import detect_package_manager
from adapters.update_check import check_for_update
from cli import prompts
from cli.ui_components import (
    build_conflicts_panel,
    build_next_steps_panel,
    build_update_notice,
    describe_attempt,
    print_banner,
)
from core.config import AppSettings
from core.domain.choices import AuthFlow, Framework, PackageManager
from core.domain.models import AppInfo, RetrievalAttempt
from core.domain.package_name import validate_npm_name
from core.errors import (
    CommandFailed,
    DestinationUnusable,
    DownloadFailure,
    InvalidProjectName,
    InvalidReference,
    RepositoryNotFound,
    ScaffoldError,
)
from core.services.scaffold_pipeline import (
    ScaffoldHooks,
    ScaffoldRequest,
    create_app_with_fallback,
)

app = typer.Typer(add_completion=False, help="Create a new ODD SDK app from a curated template.")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx/httpcore son muy verbosos en DEBUG.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.INFO if verbose else logging.WARNING)


def _pick_one(option_name: str, **flags: bool) -> str | None:
    chosen = [name for name, enabled in flags.items() if enabled]
    if len(chosen) > 1:
        flags_used = ", ".join("--use-" + name.replace("_", "-") for name in chosen)
        raise typer.BadParameter(f"choose only one of: {flags_used}", param_hint=option_name)
    return chosen[0] if chosen else None


def _print_error(exc: ScaffoldError) -> None:
    _console.print()
    if isinstance(exc, InvalidProjectName):
        _console.print(f"Could not create a project called [red]'{exc.name}'[/red] because of npm naming restrictions:")
        for problem in exc.problems:
            _console.print(f" [bold red]*[/bold red] {problem}")
    elif isinstance(exc, InvalidReference):
        _console.print(f"[red]{exc}[/red]")
    elif isinstance(exc, RepositoryNotFound):
        _console.print(
            f'Could not locate the repository for [red]"{exc.url}"[/red]. '
            "Please check that the repository exists and try again."
        )
    elif isinstance(exc, DestinationUnusable):
        if exc.conflicts:
            _console.print(build_conflicts_panel(Path(exc.path).name, exc.conflicts))
        else:
            _console.print(f"[red]{exc.reason}[/red]")
    elif isinstance(exc, DownloadFailure):
        _console.print("Aborting installation.")
        _console.print(f"  [red]Could not download the template:[/red] {exc}")
    elif isinstance(exc, CommandFailed):
        _console.print("Aborting installation.")
        _console.print(f"  [cyan]{exc.command}[/cyan] has failed.")
    else:
        _console.print(f"[red]{exc}[/red]")
    _console.print()


def _notify_update(settings: AppSettings) -> None:
    if not settings.update_check:
        return
    latest = asyncio.run(check_for_update(settings=settings))
    if latest:
        _console.print(build_update_notice(latest))


def _display_path(project_path: str, root: Path) -> str:
    """Ruta para `cd`: relativa si el proyecto cuelga del directorio actual."""

    if Path.cwd() / root.name == root:
        return root.name
    return project_path or str(root)


@app.command()
def create(
    project_directory: Optional[str] = typer.Argument(None, help="Directory to create the app in."),
    use_npm: bool = typer.Option(False, "--use-npm", help="Bootstrap the app using npm."),
    use_yarn: bool = typer.Option(False, "--use-yarn", help="Bootstrap the app using yarn."),
    use_pnpm: bool = typer.Option(False, "--use-pnpm", help="Bootstrap the app using pnpm."),
    use_sveltekit: bool = typer.Option(False, "--use-sveltekit", help="Build the app using SvelteKit."),
    use_react: bool = typer.Option(False, "--use-react", help="Build the app using React."),
    use_walletauth: bool = typer.Option(False, "--use-walletauth", help="Use the ODD SDK WalletAuth flow."),
    use_device_linking: bool = typer.Option(
        False,
        "--use-device-linking",
        "--use-webcrypto",
        help="Use the ODD SDK WebCrypto Device Linking flow.",
    ),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        help="Custom GitHub template URL: https://github.com/<owner>/<repo>, optionally followed by /tree/<branch>/<path>.",
    ),
    remove_typescript: Optional[bool] = typer.Option(
        None,
        "--remove-typescript/--keep-typescript",
        help="Convert the React template to JavaScript.",
    ),
    app_name: Optional[str] = typer.Option(None, "--app-name", help="App name (title, og:title)."),
    app_description: Optional[str] = typer.Option(None, "--app-description", help="App description (og:description)."),
    app_url: Optional[str] = typer.Option(None, "--app-url", help="App base URL."),
    skip_install: bool = typer.Option(False, "--skip-install", help="Do not install packages."),
    skip_git: bool = typer.Option(False, "--skip-git", help="Do not initialize a git repository."),
    yes: bool = typer.Option(False, "-y", "--yes", help="Use defaults instead of prompting."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging."),
) -> None:
    """Create a new ODD app in PROJECT_DIRECTORY."""

    _configure_logging(verbose)
    if not no_banner:
        print_banner(_console)

    pm_flag = _pick_one("package manager", npm=use_npm, yarn=use_yarn, pnpm=use_pnpm)
    framework_flag = _pick_one("framework", sveltekit=use_sveltekit, react=use_react)
    auth_flag = _pick_one("auth flow", walletauth=use_walletauth, device_linking=use_device_linking)

    project_path = (project_directory or "").strip()
    if not project_path:
        if yes:
            _console.print(
                "\nPlease specify the project directory:\n"
                "  [cyan]create-odd-app[/cyan] [green]<project-directory>[/green]\n"
                "For example:\n"
                f"  [cyan]create-odd-app[/cyan] [green]{prompts.DEFAULT_PROJECT_NAME}[/green]\n\n"
                "Run [cyan]create-odd-app --help[/cyan] to see all options."
            )
            raise typer.Exit(1)
        project_path = prompts.ask_project_path(_console)

    resolved = Path(project_path).resolve()
    validation = validate_npm_name(resolved.name)
    if not validation.valid:
        _print_error(InvalidProjectName(resolved.name, validation.problems))
        raise typer.Exit(1)

    if auth_flag == "walletauth":
        auth_flow = AuthFlow.WALLET_AUTH
    elif auth_flag == "device_linking":
        auth_flow = AuthFlow.DEVICE_LINKING
    else:
        auth_flow = AuthFlow.default() if yes else prompts.ask_auth_flow(_console)

    if framework_flag:
        framework = Framework(framework_flag)
    else:
        framework = Framework.default() if yes else prompts.ask_framework(_console)

    if remove_typescript is None:
        # Solo el template React admite la conversión guiada.
        remove_typescript = framework is Framework.REACT and not yes and prompts.ask_remove_typescript(_console)

    app_info: AppInfo | None = None
    if app_name or app_description or app_url:
        defaults = default_app_info(auth_flow, framework)
        app_info = AppInfo(
            app_name=app_name or defaults.app_name,
            app_description=app_description or defaults.app_description,
            app_url=app_url or defaults.app_url,
        )
    elif not yes:
        app_info = prompts.ask_app_info(_console, auth_flow, framework)

    package_manager = PackageManager(pm_flag) if pm_flag else detect_package_manager()

    settings = AppSettings()

    def on_attempt(attempt: RetrievalAttempt) -> None:
        line = describe_attempt(attempt, settings.download_max_attempts)
        if line is not None:
            _console.print(line)

    hooks = ScaffoldHooks(
        info=lambda message: _console.print(message),
        warning=lambda message: _console.print(f"[yellow]Warning:[/yellow] {message}"),
        attempt=on_attempt,
    )
    request = ScaffoldRequest(
        app_path=resolved,
        auth_flow=auth_flow,
        framework=framework,
        package_manager=package_manager,
        template_url=template,
        app_info=app_info,
        remove_typescript=bool(remove_typescript),
        install=not skip_install,
        git_init=not skip_git,
    )

    try:
        result = asyncio.run(create_app_with_fallback(settings=settings, request=request, hooks=hooks))
    except ScaffoldError as exc:
        _print_error(exc)
        _notify_update(settings)
        raise typer.Exit(1) from exc

    _console.print()
    _console.print(build_next_steps_panel(result, display_path=_display_path(project_path, result.root)))
    _notify_update(settings)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
