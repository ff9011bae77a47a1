# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the ``bootstrap`` command-line interface."""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from fulmen_bootstrap.cli import app
from fulmen_bootstrap.platform import Platform
from fulmen_bootstrap.reporting import configure_logging

GIT_MANIFEST = "version: v1.0.0\ntools:\n  - id: git\n    install: { type: verify, command: git }\n"
HELLO_WORLD_SHA256 = "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _linux_host(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr("fulmen_bootstrap.installer.current_platform", lambda: Platform("linux", "amd64"))
    yield
    configure_logging(verbose=False)


def _git_available(monkeypatch: pytest.MonkeyPatch, available: bool) -> None:
    def fake_which(command: str, *args: Any, **kwargs: Any) -> str | None:
        return f"/usr/bin/{command}" if available else None

    monkeypatch.setattr(shutil, "which", fake_which)


def test_missing_action_is_a_usage_error() -> None:
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Error: must specify --install or --verify" in result.output


def test_install_and_verify_are_exclusive(write_manifest) -> None:
    result = runner.invoke(app, ["--install", "--verify", "--manifest", str(write_manifest(GIT_MANIFEST))])

    assert result.exit_code == 1
    assert "cannot specify both" in result.output


def test_verify_success_prints_nothing(write_manifest, monkeypatch: pytest.MonkeyPatch) -> None:
    _git_available(monkeypatch, True)

    result = runner.invoke(app, ["--verify", "--manifest", str(write_manifest(GIT_MANIFEST))])

    assert result.exit_code == 0
    assert result.output == ""


def test_verify_failure_prints_single_error_line(write_manifest, monkeypatch: pytest.MonkeyPatch) -> None:
    _git_available(monkeypatch, False)

    result = runner.invoke(app, ["--verify", "--manifest", str(write_manifest(GIT_MANIFEST))])

    assert result.exit_code == 1
    assert result.output.strip().splitlines() == ["Error: 1 tool(s) not available: git"]


def test_verbose_failure_prints_full_description(write_manifest, monkeypatch: pytest.MonkeyPatch) -> None:
    _git_available(monkeypatch, False)

    result = runner.invoke(
        app,
        ["--verify", "--verbose", "--no-emoji", "--manifest", str(write_manifest(GIT_MANIFEST))],
    )

    assert result.exit_code == 1
    assert "Verifying git... failed" in result.output
    assert "Error: 1 tool(s) not available: git" in result.output
    assert "git: command not found: git" in result.output
    assert "Install Git: https://git-scm.com/downloads" in result.output


def test_install_verbose_reports_progress(write_manifest, monkeypatch: pytest.MonkeyPatch) -> None:
    _git_available(monkeypatch, True)

    result = runner.invoke(app, ["--install", "--verbose", "--manifest", str(write_manifest(GIT_MANIFEST))])

    assert result.exit_code == 0
    assert "📦 git (verify)... ✅" in result.output
    assert "All tools installed successfully" in result.output


def test_manifest_path_from_environment(write_manifest, monkeypatch: pytest.MonkeyPatch) -> None:
    _git_available(monkeypatch, True)
    path = write_manifest(GIT_MANIFEST)

    result = runner.invoke(app, ["--verify"], env={"BOOTSTRAP_MANIFEST": str(path)})

    assert result.exit_code == 0


def test_default_manifest_location(write_manifest, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _git_available(monkeypatch, True)
    write_manifest(GIT_MANIFEST)
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["--verify", "--force"])

    assert result.exit_code == 0


def test_invalid_manifest_exits_non_zero(write_manifest) -> None:
    path = write_manifest("version: v1\ntools: []\n")

    result = runner.invoke(app, ["--install", "--manifest", str(path)])

    assert result.exit_code == 1
    assert result.output.startswith(f"Error: invalid manifest at {path}")
    assert "no tools defined" in result.output


def test_os_errors_exit_non_zero(write_manifest, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_install(options, **kwargs):  # noqa: ANN001
        raise PermissionError("permission denied: bin")

    monkeypatch.setattr("fulmen_bootstrap.cli.app.install_tools", failing_install)

    result = runner.invoke(app, ["--install", "--manifest", str(write_manifest(GIT_MANIFEST))])

    assert result.exit_code == 1
    assert "Error: permission denied: bin" in result.output


def test_compute_checksum_prints_digest(tmp_path: Path) -> None:
    target = tmp_path / "hello.txt"
    target.write_bytes(b"hello world")

    result = runner.invoke(app, ["--compute-checksum", str(target)])

    assert result.exit_code == 0
    assert result.output.strip() == f"{HELLO_WORLD_SHA256}  {target}"


def test_compute_checksum_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--compute-checksum", str(tmp_path / "absent")])

    assert result.exit_code == 1
    assert "Error: failed to read" in result.output


def test_help_lists_options() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for option in ("--install", "--verify", "--manifest", "--force", "--verbose"):
        assert option in result.output
