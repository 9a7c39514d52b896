"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (GitHub/filesystem) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "create-odd-app"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "create-odd-app"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "create-odd-app"
    return Path.home() / ".config" / "create-odd-app"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CREATE_ODD_APP_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request a la API de GitHub (segundos).",
    )
    user_agent: str = Field(
        default="create-odd-app/0.1 (+https://github.com/oddsdk/create-odd-app)",
        min_length=1,
        description="User-Agent para peticiones HTTP (GitHub lo exige).",
    )

    github_web_url: str = Field(
        default="https://github.com",
        min_length=8,
        description="Origen aceptado para URLs de templates.",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base de la API REST (default_branch, contents).",
    )
    github_codeload_url: str = Field(
        default="https://codeload.github.com",
        min_length=8,
        description="Base del endpoint de descarga de tarballs.",
    )

    download_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Límite de tiempo para la descarga de un intento (segundos).",
    )
    download_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Intentos totales de descarga + extracción.",
    )
    download_retry_backoff_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Espera base entre intentos (se duplica en cada reintento).",
    )
    download_branch: str = Field(
        default="main",
        description=(
            "Rama fija usada para el tarball. Vacío = usar la rama resuelta de la "
            "referencia (la misma que se valida)."
        ),
    )
    temp_dir: Path | None = Field(
        default=None,
        description="Directorio para los tarballs temporales (por defecto el del sistema).",
    )

    pypi_url: str = Field(
        default="https://pypi.org",
        min_length=8,
        description="Índice de paquetes consultado para avisar de nuevas versiones.",
    )
    update_check: bool = Field(
        default=True,
        description="Consultar (best-effort) si hay una versión más reciente publicada.",
    )
