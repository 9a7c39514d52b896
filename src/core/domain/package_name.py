"""Validación de nombres de paquete npm.

El nombre del directorio del proyecto acaba en `package.json`, así que debe
cumplir las reglas que npm aplica a paquetes *nuevos* (errores + warnings).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import quote

_BLACKLIST = {"node_modules", "favicon.ico"}

# Módulos core de Node: npm los rechaza como nombre de paquete nuevo.
_NODE_BUILTINS = {
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
    "worker_threads", "zlib",
}

_SCOPED_RE = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")
_MAX_LENGTH = 214


@dataclass
class NameValidation:
    valid: bool
    problems: list[str] = field(default_factory=list)


def _encode_uri_component(value: str) -> str:
    # Mismo conjunto "unreserved" que encodeURIComponent de JS.
    return quote(value, safe="-_.!~*'()")


def validate_npm_name(name: str) -> NameValidation:
    """Valida `name` como nombre de un paquete npm nuevo."""

    errors: list[str] = []
    warnings: list[str] = []

    if not name:
        return NameValidation(valid=False, problems=["name length must be greater than zero"])

    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")
    if name.lower() in _BLACKLIST:
        errors.append(f"{name} is not a valid package name")

    if name.lower() in _NODE_BUILTINS:
        warnings.append(f"{name} is a core module name")
    if len(name) > _MAX_LENGTH:
        warnings.append(f"name can no longer contain more than {_MAX_LENGTH} characters")
    if name.lower() != name:
        warnings.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS_RE.search(name.split("/")[-1]):
        warnings.append("name can no longer contain special characters (\"~'!()*\")")

    if _encode_uri_component(name) != name:
        match = _SCOPED_RE.match(name)
        scoped_ok = False
        if match and match.group(1):
            user, pkg = match.group(1), match.group(2)
            scoped_ok = _encode_uri_component(user) == user and _encode_uri_component(pkg) == pkg
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    problems = [*errors, *warnings]
    return NameValidation(valid=not problems, problems=problems)
