from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest

from core.config import AppSettings


def make_tarball(entries: dict[str, bytes | None]) -> bytes:
    """Build a gzipped tarball in memory. `None` values become directories."""

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, content in entries.items():
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                archive.addfile(info)
                continue
            info.size = len(content)
            info.mode = 0o644
            archive.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest.fixture
def settings(temp_dir: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        download_retry_backoff_seconds=0,
        download_branch="main",
        temp_dir=temp_dir,
    )


@pytest.fixture
def template_tarball() -> bytes:
    return make_tarball(
        {
            "tmpl-main/": None,
            "tmpl-main/package.json": b'{"name": "tmpl"}\n',
            "tmpl-main/src/": None,
            "tmpl-main/src/index.ts": b"export const answer = 42\n",
            "tmpl-main/README.md": b"# tmpl\n",
        }
    )
