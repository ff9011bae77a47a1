# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strategy that installs Go modules with the Go toolchain."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Final, cast

from ..errors import StrategyError
from ..manifest import GoInstall, Tool
from ..platform import Platform
from ..process_utils import run_command
from .base import InstallStrategy, StrategyContext, require_command
from .verify import suggestion_for

LOGGER = logging.getLogger(__name__)

GO_COMMAND: Final[str] = "go"
GO_SUGGESTION: Final[str] = "Install Go from https://go.dev/dl/"


def go_bin_directories() -> list[Path]:
    """Return directories where ``go install`` may place binaries, in lookup order.

    ``$GOBIN`` first, then ``bin`` under the first ``$GOPATH`` entry, falling
    back to ``~/go/bin`` when ``GOPATH`` is unset.
    """

    directories: list[Path] = []
    gobin = os.environ.get("GOBIN", "").strip()
    if gobin:
        directories.append(Path(gobin))
    gopath = os.environ.get("GOPATH", "").strip()
    if gopath:
        first = gopath.split(os.pathsep)[0]
        if first:
            directories.append(Path(first) / "bin")
    else:
        try:
            directories.append(Path.home() / "go" / "bin")
        except RuntimeError:
            LOGGER.debug("home directory is unavailable; skipping ~/go/bin")
    return directories


def locate_go_binary(bin_name: str, platform: Platform) -> Path | None:
    """Return where *bin_name* was installed, or ``None`` when it cannot be found."""

    filename = f"{bin_name}.exe" if platform.is_windows else bin_name
    for directory in go_bin_directories():
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    resolved = shutil.which(bin_name)
    return Path(resolved) if resolved else None


class GoStrategy(InstallStrategy):
    """Run ``go install module@version`` and confirm the binary is reachable."""

    kind = "go"

    def install(self, tool: Tool, context: StrategyContext) -> None:
        install = cast(GoInstall, tool.install)
        require_command(GO_COMMAND, GO_SUGGESTION)

        requirement = f"{install.module}@{install.version}"
        LOGGER.debug("running go install %s", requirement)
        run_command([GO_COMMAND, "install", requirement])

        location = locate_go_binary(install.bin_name, context.platform)
        if location is None:
            raise StrategyError(
                f"installed {install.bin_name} but cannot find in PATH - ensure GOPATH/bin or GOBIN is in your PATH",
            )
        LOGGER.debug("%s installed at %s", install.bin_name, location)

    def verify(self, tool: Tool, context: StrategyContext) -> None:
        del context
        bin_name = cast(GoInstall, tool.install).bin_name
        require_command(bin_name, suggestion_for(bin_name))


__all__ = ["GO_SUGGESTION", "GoStrategy", "go_bin_directories", "locate_go_binary"]
