# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strategy that symlinks a locally built binary into the destination."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import cast

from ..errors import StrategyError
from ..manifest import LinkInstall, Tool
from .base import InstallStrategy, StrategyContext, ensure_directory, verify_installed_binary

LOGGER = logging.getLogger(__name__)


class LinkStrategy(InstallStrategy):
    """Point ``destination/binName`` at ``source`` with an absolute symlink."""

    kind = "link"

    def install(self, tool: Tool, context: StrategyContext) -> None:
        install = cast(LinkInstall, tool.install)
        source = Path(install.source)
        try:
            source.stat()
        except FileNotFoundError as exc:
            raise StrategyError(f"source file not found: {source}") from exc
        except OSError as exc:
            raise StrategyError(f"failed to access source {source}: {exc}") from exc
        if not source.is_file():
            raise StrategyError(f"source {source} is not a regular file")
        if not context.platform.is_windows and not os.access(source, os.X_OK):
            raise StrategyError(f"source {source} is not executable")

        ensure_directory(context.destination)
        target = context.binary_path(install.bin_name)
        _remove_existing(target)

        absolute = Path(os.path.abspath(source))
        try:
            target.symlink_to(absolute)
        except OSError as exc:
            raise StrategyError(f"failed to link {target} -> {absolute}: {exc}") from exc
        LOGGER.debug("linked %s -> %s", target, absolute)

    def verify(self, tool: Tool, context: StrategyContext) -> None:
        install = cast(LinkInstall, tool.install)
        verify_installed_binary(context.binary_path(install.bin_name), context.platform)


def _remove_existing(target: Path) -> None:
    if not target.is_symlink() and not target.exists():
        return
    if target.is_dir() and not target.is_symlink():
        raise StrategyError(f"cannot replace directory {target} with a link")
    try:
        target.unlink()
    except OSError as exc:
        raise StrategyError(f"failed to remove existing {target}: {exc}") from exc


__all__ = ["LinkStrategy"]
