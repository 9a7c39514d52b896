"""Interactive prompts for the choices the user did not pass as flags."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from adapters.app_info import default_app_info
from core.domain.choices import AuthFlow, Framework
from core.domain.models import AppInfo
from core.domain.package_name import validate_npm_name

DEFAULT_PROJECT_NAME = "my-odd-app"


def ask_project_path(console: Console) -> str:
    """Ask for the project directory until its basename is a valid npm name."""

    while True:
        value = typer.prompt("What is your project named?", default=DEFAULT_PROJECT_NAME).strip()
        validation = validate_npm_name(Path(value).resolve().name)
        if validation.valid:
            return value
        console.print(f"[red]Invalid project name:[/red] {validation.problems[0]}")


def ask_auth_flow(console: Console) -> AuthFlow:
    console.print("  [bold]deviceLinking[/bold]  Learn more here: https://github.com/webnative-examples/webnative-app-template")
    console.print("  [bold]walletauth[/bold]     Learn more here: https://github.com/webnative-examples/walletauth")
    value = Prompt.ask(
        "Which ODD auth flow would you like to use?",
        choices=[flow.value for flow in AuthFlow],
        default=AuthFlow.default().value,
        console=console,
    )
    return AuthFlow(value)


def ask_framework(console: Console) -> Framework:
    console.print("  [bold]sveltekit[/bold]  Learn more here: https://kit.svelte.dev/")
    console.print("  [bold]react[/bold]      Learn more here: https://reactjs.org/")
    value = Prompt.ask(
        "Which frontend framework would you like to use?",
        choices=[framework.value for framework in Framework],
        default=Framework.REACT.value,
        console=console,
    )
    return Framework(value)


def ask_remove_typescript(console: Console) -> bool:
    return Confirm.ask("Would you like to remove TypeScript from your project?", default=False, console=console)


def ask_app_info(console: Console, auth_flow: AuthFlow, framework: Framework) -> AppInfo | None:
    """Optionally edit the template's app name, description and base URL."""

    edit = Confirm.ask(
        "Would you like to modify your app's name(title/og:title), description(og:description) or URL(base url)?",
        default=False,
        console=console,
    )
    if not edit:
        return None

    defaults = default_app_info(auth_flow, framework)
    return AppInfo(
        app_name=typer.prompt("Please enter your app name(title, og:title, etc...)", default=defaults.app_name),
        app_description=typer.prompt(
            "Please enter your app description(og:description, etc...)",
            default=defaults.app_description,
        ),
        app_url=typer.prompt("Please enter your app URL(base url)", default=defaults.app_url),
    )
