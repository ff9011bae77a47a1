# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
import tarfile
import zipfile
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest

from fulmen_bootstrap.platform import Platform

ArchiveEntries = Mapping[str, bytes]


@pytest.fixture
def linux_amd64() -> Platform:
    """Return the platform used by most strategy tests."""
    return Platform(os="linux", arch="amd64")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BOOTSTRAP_MANIFEST", "BOOTSTRAP_DOWNLOAD_TIMEOUT", "GOBIN", "GOPATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_tar_gz(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing ``.tar.gz`` archives with executable members."""

    def _factory(entries: ArchiveEntries, *, name: str = "tool.tar.gz", mode: int = 0o755) -> Path:
        archive = tmp_path / name
        with tarfile.open(archive, "w:gz") as bundle:
            for member_name, payload in entries.items():
                info = tarfile.TarInfo(member_name)
                info.size = len(payload)
                info.mode = mode
                bundle.addfile(info, io.BytesIO(payload))
        return archive

    return _factory


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing ``.zip`` archives."""

    def _factory(entries: ArchiveEntries, *, name: str = "tool.zip") -> Path:
        archive = tmp_path / name
        with zipfile.ZipFile(archive, "w") as bundle:
            for member_name, payload in entries.items():
                info = zipfile.ZipInfo(member_name)
                info.external_attr = (0o100755 << 16)
                bundle.writestr(info, payload)
        return archive

    return _factory


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing YAML text to ``.goneat/<name>`` below ``tmp_path``."""

    def _write(text: str, *, name: str = "tools.yaml") -> Path:
        path = tmp_path / ".goneat" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class FakeResponse:
    """Minimal stand-in for a streamed ``requests.Response``."""

    def __init__(self, status_code: int = 200, body: bytes = b"", reason: str = "OK") -> None:
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self._body), chunk_size):
            yield self._body[start : start + chunk_size]

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    """Return the fake response class used to stub ``requests.get``."""
    return FakeResponse
