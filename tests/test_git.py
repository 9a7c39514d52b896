from __future__ import annotations

import subprocess

from adapters import git
from adapters.git import INITIAL_COMMIT_MESSAGE, try_git_init


class FakeGit:
    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.commands: list[list[str]] = []

    def __call__(self, args, **kwargs):
        self.commands.append(args)
        key = " ".join(args[:2])
        return subprocess.CompletedProcess(args, 1 if key in self.failing else 0)


def test_initializes_repository_with_initial_commit(tmp_path, monkeypatch):
    fake = FakeGit(failing={"git rev-parse", "hg --cwd"})
    monkeypatch.setattr(git.subprocess, "run", fake)

    assert try_git_init(tmp_path)
    assert ["git", "init"] in fake.commands
    assert ["git", "checkout", "-b", "main"] in fake.commands
    assert fake.commands[-1] == ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE]


def test_skips_when_already_inside_a_repository(tmp_path, monkeypatch):
    fake = FakeGit()
    monkeypatch.setattr(git.subprocess, "run", fake)

    assert not try_git_init(tmp_path)
    assert ["git", "init"] not in fake.commands


def test_skips_when_git_is_missing(tmp_path, monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(git.subprocess, "run", missing)
    assert not try_git_init(tmp_path)


def test_failed_commit_removes_partial_repository(tmp_path, monkeypatch):
    fake = FakeGit(failing={"git rev-parse", "hg --cwd", "git commit"})

    def run(args, **kwargs):
        if args[:2] == ["git", "init"]:
            (tmp_path / ".git").mkdir()
        return fake(args, **kwargs)

    monkeypatch.setattr(git.subprocess, "run", run)

    assert not try_git_init(tmp_path)
    assert not (tmp_path / ".git").exists()
