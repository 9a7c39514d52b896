"""Reescritura de `src/lib/app-info.ts` del template.

Los templates declaran `appName`, `appDescription` y `appURL` con valores por
defecto conocidos; se sustituyen literalmente por los elegidos por el usuario.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.domain.choices import AuthFlow, Framework
from core.domain.models import AppInfo

logger = logging.getLogger(__name__)

APP_INFO_RELATIVE_PATH = Path("src") / "lib" / "app-info.ts"

_DEFAULT_APP_INFO = AppInfo(
    app_name="Awesome Webnative App",
    app_description="This is another awesome Webnative app.",
    app_url="https://webnative.netlify.app",
)

_WALLET_AUTH_APP_INFO = _DEFAULT_APP_INFO.model_copy(
    update={
        "app_name": "Awesome Webnative WalletAuth App",
        "app_url": "https://webnative-walletauth.netlify.app",
    }
)

_REACT_APP_URLS = {
    AuthFlow.DEVICE_LINKING: "https://webnative-react.netlify.app",
    AuthFlow.WALLET_AUTH: "https://webnative-walletauth-react.netlify.app",
}


def default_app_info(auth_flow: AuthFlow, framework: Framework | None = None) -> AppInfo:
    """Valores que trae el template (los de React cambian solo la URL)."""

    base = _WALLET_AUTH_APP_INFO if auth_flow is AuthFlow.WALLET_AUTH else _DEFAULT_APP_INFO
    if framework is Framework.REACT:
        return base.model_copy(update={"app_url": _REACT_APP_URLS[auth_flow]})
    return base.model_copy()


def rewrite_app_info_source(source: str, *, current: AppInfo, desired: AppInfo) -> str:
    edits = source.replace(f"appName = '{current.app_name}'", f"appName = '{desired.app_name}'")
    edits = edits.replace(
        f"appDescription = '{current.app_description}'",
        f"appDescription = '{desired.app_description}'",
    )
    return edits.replace(f"appURL = '{current.app_url}'", f"appURL = '{desired.app_url}'")


def write_app_info(
    *,
    root: Path,
    app_info: AppInfo,
    auth_flow: AuthFlow,
    framework: Framework,
) -> Path | None:
    """Aplica `app_info` al template extraído en `root`.

    Devuelve la ruta escrita, o `None` si el template no trae `app-info.ts`.
    """

    path = root / APP_INFO_RELATIVE_PATH
    if not path.is_file():
        logger.debug("no app-info.ts at %s", path)
        return None

    original = path.read_text(encoding="utf-8")
    edited = rewrite_app_info_source(
        original,
        current=default_app_info(auth_flow, framework),
        desired=app_info,
    )
    path.write_text(edited, encoding="utf-8")
    return path
