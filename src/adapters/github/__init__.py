"""Acceso a templates alojados en GitHub.

- `reference`: URL -> `RepositoryReference` (lookup de rama por defecto).
- `probe`: existencia de un recurso (solo 200 cuenta).
- `validator`: el template tiene `package.json` en esa rama/ruta.
- `tarball`: descarga + extracción con reintentos acotados.
"""

from adapters.github.probe import probe
from adapters.github.reference import fetch_default_branch, is_github_url, parse_repo_url
from adapters.github.tarball import build_tarball_url, extract_tarball, retrieve_and_unpack
from adapters.github.validator import build_manifest_url, has_template_manifest

__all__ = [
    "build_manifest_url",
    "build_tarball_url",
    "extract_tarball",
    "fetch_default_branch",
    "has_template_manifest",
    "is_github_url",
    "parse_repo_url",
    "probe",
    "retrieve_and_unpack",
]
