# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strategy abstraction shared by the install kinds."""

from __future__ import annotations

import os
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..config import DESTINATION_MODE
from ..errors import CommandNotFoundError, StrategyError
from ..manifest import Tool
from ..platform import Platform

INSTALL_HINT: Final[str] = "Run 'bootstrap --install' to install it"


@dataclass(frozen=True, slots=True)
class StrategyContext:
    """Read-only inputs handed to a strategy for a single tool."""

    platform: Platform
    destination: Path

    def binary_path(self, bin_name: str) -> Path:
        """Return the installed location of *bin_name*."""

        return self.destination / bin_name


class InstallStrategy(ABC):
    """Install or verify one kind of manifest entry.

    ``install`` must leave the binary present and executable; ``verify``
    only checks that it is. Both raise a :class:`BootstrapError` subclass on
    failure and never mutate shared state.
    """

    kind: str = ""

    @abstractmethod
    def install(self, tool: Tool, context: StrategyContext) -> None:
        raise NotImplementedError

    @abstractmethod
    def verify(self, tool: Tool, context: StrategyContext) -> None:
        raise NotImplementedError


def require_command(command: str, suggestion: str) -> Path:
    """Return the resolved path of *command* or raise :class:`CommandNotFoundError`."""

    resolved = shutil.which(command)
    if resolved is None:
        raise CommandNotFoundError(command, suggestion)
    return Path(resolved)


def ensure_directory(path: Path) -> Path:
    """Create *path* (mode ``0755``) when absent and return it."""

    try:
        path.mkdir(mode=DESTINATION_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise StrategyError(f"failed to create destination directory {path}: {exc}") from exc
    return path


def verify_installed_binary(path: Path, platform: Platform) -> None:
    """Check that *path* exists and is executable on *platform*."""

    if not path.exists():
        raise CommandNotFoundError(str(path), INSTALL_HINT)
    if not path.is_file():
        raise StrategyError(f"binary at {path} is not a regular file")
    if not platform.is_windows and not os.access(path, os.X_OK):
        raise StrategyError(f"binary at {path} is not executable")


__all__ = [
    "INSTALL_HINT",
    "InstallStrategy",
    "StrategyContext",
    "ensure_directory",
    "require_command",
    "verify_installed_binary",
]
