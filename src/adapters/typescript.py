"""Conversión del template de TypeScript a JavaScript.

Pasos:
1) quitar paquetes de tipos/TS de `package.json`
2) `npx tsc` para emitir los `.js` junto a los fuentes (sus errores de tipos se ignoran)
3) borrar `tsconfig.json` y los `*.ts` / `*.tsx` de `src/`
4) limpiar la config TS de `.eslintrc.js`
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path

from core.domain.choices import Framework

logger = logging.getLogger(__name__)

TSC_COMMAND = ["npx", "tsc", "--jsx", "preserve", "-t", "es2020", "--noEmit", "false"]

_TS_PACKAGES: dict[str, tuple[str, ...]] = {
    "dependencies": (
        "@types/jest",
        "@types/node",
        "@types/react",
        "@types/react-dom",
    ),
    "devDependencies": (
        "@types/qrcode-svg",
        "@typescript-eslint/eslint-plugin",
        "@typescript-eslint/parser",
        "typescript",
    ),
}

# Mismos paquetes en ambos templates; la tabla queda por framework por si divergen.
PACKAGES_TO_REMOVE: dict[Framework, dict[str, tuple[str, ...]]] = {
    Framework.REACT: _TS_PACKAGES,
    Framework.SVELTEKIT: _TS_PACKAGES,
}

_ESLINT_EDITS: tuple[tuple[str, str], ...] = (
    ('"plugin:@typescript-eslint/recommended",', ""),
    ('parser: "@typescript-eslint/parser",', ""),
    ('plugins: ["react", "@typescript-eslint"]', 'plugins: ["react"]'),
    ('"@typescript-eslint/no-explicit-any": "off",', ""),
)


def strip_typescript_packages(package_json: dict, framework: Framework) -> dict:
    for section, packages in PACKAGES_TO_REMOVE[framework].items():
        deps = package_json.get(section)
        if not isinstance(deps, dict):
            continue
        for pkg in packages:
            deps.pop(pkg, None)
    return package_json


def strip_typescript_eslint(source: str) -> str:
    for old, new in _ESLINT_EDITS:
        source = source.replace(old, new)
    return source


def compile_to_javascript(root: Path) -> bool:
    """Emite JS con `tsc`. Falla a menudo por imports de tipos: no interrumpe el flujo."""

    try:
        completed = subprocess.run(
            TSC_COMMAND,
            cwd=root,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        logger.debug("tsc could not run in %s: %s", root, exc)
        return False
    return completed.returncode == 0


def remove_typescript_sources(src_dir: Path) -> list[Path]:
    removed: list[Path] = []
    if not src_dir.is_dir():
        return removed
    for pattern in ("*.ts", "*.tsx"):
        for path in src_dir.rglob(pattern):
            if path.is_file():
                path.unlink()
                removed.append(path)
    return removed


def switch_to_javascript(*, root: Path, framework: Framework) -> None:
    """Convierte el proyecto en `root` a JavaScript."""

    package_json_path = root / "package.json"
    package_json = json.loads(package_json_path.read_text(encoding="utf-8"))
    strip_typescript_packages(package_json, framework)

    compile_to_javascript(root)

    (root / "tsconfig.json").unlink(missing_ok=True)
    removed = remove_typescript_sources(root / "src")
    logger.debug("removed %d TypeScript sources", len(removed))

    eslintrc = root / ".eslintrc.js"
    if eslintrc.is_file():
        eslintrc.write_text(strip_typescript_eslint(eslintrc.read_text(encoding="utf-8")), encoding="utf-8")

    package_json_path.write_text(json.dumps(package_json, indent=2) + "\n", encoding="utf-8")
