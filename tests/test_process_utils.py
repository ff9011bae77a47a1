# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess wrapper."""

from __future__ import annotations

import subprocess
from subprocess import CompletedProcess
from typing import Any

import pytest

from fulmen_bootstrap.process_utils import SubprocessExecutionError, run_command


def test_run_command_resolves_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}

    def fake_run(args, **kwargs):  # noqa: ANN001
        seen["args"] = args
        seen.update(kwargs)
        return CompletedProcess(args=args, returncode=0, stdout="", stderr="")

    monkeypatch.setattr("fulmen_bootstrap.process_utils.shutil.which", lambda name: f"/opt/bin/{name}")
    monkeypatch.setattr(subprocess, "run", fake_run)

    run_command(["go", "install", "example.com/x@v1"])

    assert seen["args"] == ["/opt/bin/go", "install", "example.com/x@v1"]
    assert seen["check"] is False
    assert "capture_output" not in seen
    assert seen["timeout"] is None


def test_run_command_raises_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("fulmen_bootstrap.process_utils.shutil.which", lambda name: f"/opt/bin/{name}")
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda args, **kwargs: CompletedProcess(args=args, returncode=1, stdout="", stderr="no such module"),
    )

    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command(["go", "install", "example.com/missing@v1"])

    assert excinfo.value.returncode == 1
    assert excinfo.value.command == ("go", "install", "example.com/missing@v1")


def test_run_command_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(args, **kwargs):  # noqa: ANN001
        raise subprocess.TimeoutExpired(args, kwargs["timeout"])

    monkeypatch.setattr("fulmen_bootstrap.process_utils.shutil.which", lambda name: f"/opt/bin/{name}")
    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(SubprocessExecutionError, match="timed out after 1.5s") as excinfo:
        run_command(["go", "version"], timeout=1.5)

    assert excinfo.value.returncode == 124


def test_run_command_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("fulmen_bootstrap.process_utils.shutil.which", lambda name: None)

    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-installed"])
