from __future__ import annotations

import subprocess

import pytest

from adapters import package_manager
from adapters.package_manager import detect_package_manager, install, install_command, is_online
from core.domain.choices import PackageManager
from core.errors import CommandFailed


@pytest.mark.parametrize(
    ("user_agent", "expected"),
    [
        ("yarn/1.22.19 npm/? node/v18.12.0 linux x64", PackageManager.YARN),
        ("pnpm/8.6.0 npm/? node/v18.12.0 linux x64", PackageManager.PNPM),
        ("npm/9.5.0 node/v18.12.0 linux x64 workspaces/false", PackageManager.NPM),
    ],
)
def test_detect_from_user_agent(user_agent, expected):
    assert detect_package_manager({"npm_config_user_agent": user_agent}) is expected


def test_detect_falls_back_to_installed_binaries(monkeypatch):
    monkeypatch.setattr(package_manager.shutil, "which", lambda name: "/usr/bin/pnpm" if name == "pnpm" else None)
    assert detect_package_manager({}) is PackageManager.PNPM

    monkeypatch.setattr(package_manager.shutil, "which", lambda name: None)
    assert detect_package_manager({}) is PackageManager.NPM


def test_install_command():
    assert install_command(PackageManager.NPM) == ["npm", "install"]
    assert install_command(PackageManager.PNPM) == ["pnpm", "install"]
    assert install_command(PackageManager.YARN) == ["yarn"]
    assert install_command(PackageManager.YARN, online=False) == ["yarn", "--offline"]


def test_is_online_checks_registry_then_proxy(monkeypatch):
    resolved: list[str] = []

    def fake_resolves(host):
        resolved.append(host)
        return host == "proxy.internal"

    monkeypatch.setattr(package_manager, "_resolves", fake_resolves)
    assert is_online({"https_proxy": "http://proxy.internal:3128"})
    assert resolved == ["registry.yarnpkg.com", "proxy.internal"]
    assert not is_online({})


def test_install_runs_in_project_directory(tmp_path, monkeypatch):
    seen = {}

    def fake_run(args, *, cwd, env, check):
        seen.update(args=args, cwd=cwd, env=env)
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(package_manager.subprocess, "run", fake_run)
    install(tmp_path, PackageManager.NPM)

    assert seen["args"] == ["npm", "install"]
    assert seen["cwd"] == tmp_path
    assert seen["env"]["NODE_ENV"] == "development"


def test_install_failure_raises_command_failed(tmp_path, monkeypatch):
    monkeypatch.setattr(
        package_manager.subprocess,
        "run",
        lambda args, **kwargs: subprocess.CompletedProcess(args, 1),
    )
    with pytest.raises(CommandFailed) as excinfo:
        install(tmp_path, PackageManager.YARN, online=False)
    assert excinfo.value.command == "yarn --offline"
    assert excinfo.value.returncode == 1


def test_missing_binary_raises_command_failed(tmp_path, monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(package_manager.subprocess, "run", missing)
    with pytest.raises(CommandFailed) as excinfo:
        install(tmp_path, PackageManager.PNPM)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
