"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Una referencia inválida (owner sin name, etc.) no llega a construirse.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RepositoryReference(BaseModel):
    """Identidad de un repositorio template en GitHub.

    Por qué existe:
    - Es el contrato entre el parser de URLs, el validador y el motor de descarga.
    - Inmutable: se construye una vez por invocación y se pasa por valor.
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(
        ...,
        min_length=1,
        description="Usuario u organización dueña del repositorio.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del repositorio.",
    )
    branch: str = Field(
        ...,
        min_length=1,
        description="Rama a usar (la default del remoto si la URL no la indica).",
    )
    sub_path: str = Field(
        default="",
        description="Ruta dentro del repo que se trata como raíz del proyecto.",
    )


class DestinationState(BaseModel):
    """Snapshot del directorio destino justo antes de extraer.

    Se calcula en fresco cada vez; nunca se cachea.
    """

    path: Path = Field(
        ...,
        description="Ruta absoluta del directorio destino.",
    )
    writable: bool = Field(
        default=False,
        description="El directorio padre admite escritura.",
    )
    is_empty: bool = Field(
        default=False,
        description="No existe o solo contiene entradas de la allow-list.",
    )
    conflicts: list[str] = Field(
        default_factory=list,
        description="Entradas presentes que no están en la allow-list.",
    )

    @property
    def can_extract(self) -> bool:
        return self.writable and self.is_empty


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    TRANSIENT_FAILURE = "transient-failure"
    FATAL_FAILURE = "fatal-failure"


class RetrievalAttempt(BaseModel):
    """Un intento de descarga + extracción.

    El artefacto temporal, si llegó a crearse, se elimina al final del intento
    sea cual sea el resultado.
    """

    temp_artifact_path: Path = Field(
        ...,
        description="Tarball temporal usado por este intento.",
    )
    attempt_number: int = Field(
        ...,
        ge=1,
        description="Número de intento (1..max).",
    )
    outcome: AttemptOutcome = Field(
        ...,
        description="Resultado del intento.",
    )
    error: str | None = Field(
        default=None,
        description="Mensaje del error subyacente si el intento falló.",
    )


class AppInfo(BaseModel):
    """Valores de `src/lib/app-info.ts` (title, og:description, base URL)."""

    app_name: str = Field(..., min_length=1)
    app_description: str = Field(..., min_length=1)
    app_url: str = Field(..., min_length=1)
