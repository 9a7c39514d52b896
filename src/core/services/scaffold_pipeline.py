"""Scaffolding orchestration.

This module owns the end-to-end flow that turns the user's choices into a
ready-to-run project: resolve the template reference, validate it, guard the
destination, retrieve the tarball, post-process the tree, install packages
and initialize git. Every stage awaits the previous one; the destination
path is passed explicitly and the process working directory is never touched.

Side-effects toward the user (printing, spinners) stay out of here: progress
is reported through `ScaffoldHooks` so the CLI decides how to render it.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx

from adapters.app_info import write_app_info
from adapters.destination import ensure_writable, inspect_destination, make_dir
from adapters.git import try_git_init
from adapters.github import has_template_manifest, is_github_url, parse_repo_url, retrieve_and_unpack
from adapters.package_manager import install, is_online
from adapters.typescript import switch_to_javascript
from core.config import AppSettings
from core.domain.choices import AuthFlow, Framework, PackageManager, is_default_choice, template_url
from core.domain.models import AppInfo, DestinationState, RepositoryReference, RetrievalAttempt
from core.domain.package_name import validate_npm_name
from core.errors import (
    DestinationUnusable,
    DownloadFailure,
    InvalidProjectName,
    InvalidReference,
    RepositoryNotFound,
)


@dataclass
class ScaffoldRequest:
    """Parameters that control a scaffold run."""

    app_path: Path
    auth_flow: AuthFlow = AuthFlow.DEVICE_LINKING
    framework: Framework = Framework.SVELTEKIT
    package_manager: PackageManager = PackageManager.NPM
    template_url: str | None = None
    app_info: AppInfo | None = None
    remove_typescript: bool = False
    install: bool = True
    git_init: bool = True


@dataclass
class ScaffoldHooks:
    """Optional callbacks for UI layers (progress, warnings, download attempts)."""

    info: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    attempt: Callable[[RetrievalAttempt], None] | None = None


@dataclass
class ScaffoldResult:
    """Output of a scaffold run."""

    root: Path
    reference: RepositoryReference
    has_package_json: bool
    package_manager: PackageManager
    installed: bool = False
    git_initialized: bool = False
    used_fallback: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def app_name(self) -> str:
        return self.root.name


def resolve_template_url(request: ScaffoldRequest) -> str:
    return request.template_url or template_url(request.auth_flow, request.framework)


async def resolve_reference(
    url: str,
    *,
    settings: AppSettings,
    client: httpx.AsyncClient | None = None,
) -> RepositoryReference:
    """Parse and validate a template URL; raises on any unusable reference."""

    if not is_github_url(url, settings=settings):
        raise InvalidReference(
            url,
            f'Invalid URL: "{url}". Only GitHub repositories are supported. '
            "Please use a GitHub URL and try again.",
        )

    reference = await parse_repo_url(url, settings=settings, client=client)
    if reference is None:
        raise InvalidReference(url, f'Found invalid GitHub URL: "{url}". Please fix the URL and try again.')

    if not await has_template_manifest(reference, settings=settings, client=client):
        raise RepositoryNotFound(url)
    return reference


def prepare_destination(app_path: Path) -> DestinationState:
    """Check writability, create the directory and confirm it is empty enough."""

    root = app_path.resolve()
    if not ensure_writable(root.parent):
        raise DestinationUnusable(
            str(root),
            "The application path is not writable, please check folder permissions and try again. "
            "It is likely you do not have write permissions for this folder.",
        )

    if root.exists() and not root.is_dir():
        raise DestinationUnusable(
            str(root),
            f"The application path {root.name} already exists and is not a directory.",
            [root.name],
        )
    try:
        make_dir(root)
    except OSError as exc:
        raise DestinationUnusable(str(root), f"Could not create {root}: {exc}") from exc

    state = inspect_destination(root)
    if not state.can_extract:
        raise DestinationUnusable(
            str(root),
            f"The directory {root.name} contains files that could conflict.",
            state.conflicts,
        )
    return state


async def create_app(
    *,
    settings: AppSettings,
    request: ScaffoldRequest,
    hooks: ScaffoldHooks | None = None,
    client: httpx.AsyncClient | None = None,
    temp_dir: Path | None = None,
) -> ScaffoldResult:
    hooks = hooks or ScaffoldHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    def info(message: str) -> None:
        if hooks.info:
            hooks.info(message)

    root = request.app_path.resolve()
    validation = validate_npm_name(root.name)
    if not validation.valid:
        raise InvalidProjectName(root.name, validation.problems)

    url = resolve_template_url(request)
    reference = await resolve_reference(url, settings=settings, client=client)

    state = prepare_destination(root)
    info(f"Creating a new ODD app in {state.path}.")

    info(f"Downloading files from repo {url}. This might take a moment.")
    await retrieve_and_unpack(
        state.path,
        reference,
        settings=settings,
        client=client,
        temp_dir=temp_dir,
        on_attempt=hooks.attempt,
    )

    if request.app_info is not None:
        try:
            written = write_app_info(
                root=state.path,
                app_info=request.app_info,
                auth_flow=request.auth_flow,
                framework=request.framework,
            )
        except OSError as exc:
            warn(f"Could not update app-info.ts: {exc}")
        else:
            if written:
                info(f"Writing to app-info.ts at {written}.")
            else:
                warn("The template has no src/lib/app-info.ts; app info left unchanged.")

    has_package_json = (state.path / "package.json").is_file()

    if request.remove_typescript:
        if not has_package_json:
            warn("The template has no package.json; TypeScript left in place.")
        else:
            try:
                await asyncio.to_thread(switch_to_javascript, root=state.path, framework=request.framework)
            except (OSError, json.JSONDecodeError) as exc:
                warn(f"Could not remove TypeScript: {exc}")
            else:
                info(f"Removing TypeScript from your project at {state.path}.")

    installed = False
    if has_package_json and request.install:
        info("Installing packages. This might take a couple of minutes.")
        online = request.package_manager is not PackageManager.YARN or await asyncio.to_thread(is_online)
        await asyncio.to_thread(install, state.path, request.package_manager, online=online)
        installed = True

    git_initialized = False
    if request.git_init:
        git_initialized = await asyncio.to_thread(try_git_init, state.path)
        if git_initialized:
            info("Initialized a git repository.")

    return ScaffoldResult(
        root=state.path,
        reference=reference,
        has_package_json=has_package_json,
        package_manager=request.package_manager,
        installed=installed,
        git_initialized=git_initialized,
        warnings=warnings,
    )


async def create_app_with_fallback(
    *,
    settings: AppSettings,
    request: ScaffoldRequest,
    hooks: ScaffoldHooks | None = None,
    client: httpx.AsyncClient | None = None,
    temp_dir: Path | None = None,
) -> ScaffoldResult:
    """Like `create_app`, but retries once with the default template on `DownloadFailure`.

    A custom `template_url` or an already-default choice has nothing to fall back to.
    """

    hooks = hooks or ScaffoldHooks()
    try:
        return await create_app(settings=settings, request=request, hooks=hooks, client=client, temp_dir=temp_dir)
    except DownloadFailure as exc:
        if request.template_url or is_default_choice(request.auth_flow, request.framework):
            raise
        message = (
            f"Could not download the {request.auth_flow.label()} + {request.framework.label()} template "
            f"({exc}). Falling back to the default template."
        )
        if hooks.warning:
            hooks.warning(message)

    fallback = dataclasses.replace(
        request,
        auth_flow=AuthFlow.default(),
        framework=Framework.default(),
    )
    result = await create_app(settings=settings, request=fallback, hooks=hooks, client=client, temp_dir=temp_dir)
    result.used_fallback = True
    result.warnings.insert(0, message)
    return result
