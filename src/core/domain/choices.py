"""Template choices for create-odd-app.

This module centralizes the auth-flow and framework options and maps every
combination to exactly one canonical template repository. Keeping the table
in the domain layer lets the CLI prompts, the pipeline fallback and the app
info defaults share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class AuthFlow(str, Enum):
    """Supported ODD SDK authentication flows."""

    DEVICE_LINKING = "deviceLinking"
    WALLET_AUTH = "walletauth"

    @classmethod
    def default(cls) -> "AuthFlow":
        return cls.DEVICE_LINKING

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "WalletAuth" if self is AuthFlow.WALLET_AUTH else "Device Linking"


class Framework(str, Enum):
    """Supported frontend frameworks."""

    SVELTEKIT = "sveltekit"
    REACT = "react"

    @classmethod
    def default(cls) -> "Framework":
        return cls.SVELTEKIT

    def label(self) -> str:
        return "React" if self is Framework.REACT else "SvelteKit"


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    def run_command(self, script: str) -> str:
        """Command line that runs a package.json script (`yarn dev`, `npm run dev`)."""

        if self is PackageManager.YARN:
            return f"yarn {script}"
        return f"{self.value} run {script}"


TEMPLATE_URLS: dict[tuple[AuthFlow, Framework], str] = {
    (AuthFlow.DEVICE_LINKING, Framework.REACT): "https://github.com/webnative-examples/webnative-app-template-react",
    (AuthFlow.DEVICE_LINKING, Framework.SVELTEKIT): "https://github.com/fission-codes/webnative-app-template",
    (AuthFlow.WALLET_AUTH, Framework.REACT): "https://github.com/webnative-examples/walletauth-react",
    (AuthFlow.WALLET_AUTH, Framework.SVELTEKIT): "https://github.com/webnative-examples/walletauth",
}


def template_url(auth_flow: AuthFlow, framework: Framework) -> str:
    """Canonical template repository URL for a choice."""

    return TEMPLATE_URLS[(auth_flow, framework)]


def is_default_choice(auth_flow: AuthFlow, framework: Framework) -> bool:
    return auth_flow is AuthFlow.default() and framework is Framework.default()
