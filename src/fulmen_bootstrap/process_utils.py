# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; toolchain commands are passed as
# argument lists and never through a shell.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import BootstrapError

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404


class SubprocessExecutionError(BootstrapError):
    """Raised when a subprocess exits with a non-zero status or times out."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stderr: str | None = None,
    ) -> None:
        rendered = " ".join(command)
        message = f"'{rendered}' exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, timeout: float | None = None) -> _CompletedProcess[str]:
    """Execute *args* after resolving the executable on ``PATH``.

    Output is inherited from the parent process.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        SubprocessExecutionError: If the command exits non-zero or exceeds
            *timeout*.
    """

    normalized = _normalize_args(args)
    try:
        # Bandit: arguments come from the validated manifest; no shell expansion.
        completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            check=False,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise SubprocessExecutionError(
            args,
            124,
            f"command timed out after {timeout:.1f}s" if timeout is not None else "command timed out",
        ) from exc

    if completed.returncode != 0:
        raise SubprocessExecutionError(args, completed.returncode)

    return completed


__all__ = ["SubprocessExecutionError", "run_command"]
