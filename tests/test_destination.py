from __future__ import annotations

from pathlib import Path

import pytest

from adapters.destination import (
    ensure_empty,
    ensure_writable,
    find_conflicts,
    inspect_destination,
    is_allowed_entry,
    make_dir,
)


@pytest.mark.parametrize(
    "entry",
    [".git", ".idea", "README.md", "LICENSE", "yarn.lock", "project.iml", "npm-debug.log.1234", "yarn-error.log-x"],
)
def test_allowed_entries(entry):
    assert is_allowed_entry(entry)


@pytest.mark.parametrize("entry", ["package.json", "src", "index.html", ".env", "readme.md"])
def test_other_entries_conflict(entry):
    assert not is_allowed_entry(entry)


def test_missing_directory_counts_as_empty(tmp_path: Path):
    assert ensure_empty(tmp_path / "nope")
    assert find_conflicts(tmp_path / "nope") == []


def test_only_allowed_entries_counts_as_empty(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    (tmp_path / "README.md").write_text("# hi\n", encoding="utf-8")
    (tmp_path / "my-app.iml").write_text("", encoding="utf-8")
    assert ensure_empty(tmp_path, "my-app")


def test_foreign_entries_are_reported_sorted(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    (tmp_path / "src").mkdir()
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    assert not ensure_empty(tmp_path)
    assert find_conflicts(tmp_path) == ["package.json", "src"]


def test_existing_file_conflicts_with_itself(tmp_path: Path):
    target = tmp_path / "my-app"
    target.write_text("x", encoding="utf-8")
    assert find_conflicts(target) == ["my-app"]


def test_make_dir_is_idempotent(tmp_path: Path):
    root = tmp_path / "a" / "b" / "my-app"
    assert make_dir(root) == root
    (root / "README.md").write_text("keep", encoding="utf-8")
    make_dir(root)
    assert root.is_dir()
    assert (root / "README.md").read_text(encoding="utf-8") == "keep"


def test_ensure_writable(tmp_path: Path):
    assert ensure_writable(tmp_path)
    assert not ensure_writable(tmp_path / "missing")
    file_path = tmp_path / "file"
    file_path.write_text("", encoding="utf-8")
    assert not ensure_writable(file_path)


def test_inspect_destination_is_fresh(tmp_path: Path):
    root = tmp_path / "my-app"
    state = inspect_destination(root)
    assert state.path == root.resolve()
    assert state.can_extract
    assert state.conflicts == []

    root.mkdir()
    (root / "index.js").write_text("", encoding="utf-8")
    state = inspect_destination(root)
    assert not state.can_extract
    assert state.writable
    assert state.conflicts == ["index.js"]
