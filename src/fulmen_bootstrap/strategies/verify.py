# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strategy for commands that are managed outside the manifest."""

from __future__ import annotations

from typing import Final, cast

from ..manifest import Tool, VerifyInstall
from .base import InstallStrategy, StrategyContext, require_command

INSTALL_SUGGESTIONS: Final[dict[str, str]] = {
    "git": "Install Git: https://git-scm.com/downloads",
    "curl": "Install curl via your package manager (apt, brew, etc.)",
    "wget": "Install wget via your package manager (apt, brew, etc.)",
}


def suggestion_for(command: str) -> str:
    """Return a human-readable install hint for *command*."""

    return INSTALL_SUGGESTIONS.get(command, f"Install {command} and ensure it's in your PATH")


class VerifyStrategy(InstallStrategy):
    """Probe ``PATH`` for the configured command; installing is the same check."""

    kind = "verify"

    def install(self, tool: Tool, context: StrategyContext) -> None:
        self.verify(tool, context)

    def verify(self, tool: Tool, context: StrategyContext) -> None:
        del context
        command = cast(VerifyInstall, tool.install).command
        require_command(command, suggestion_for(command))


__all__ = ["INSTALL_SUGGESTIONS", "VerifyStrategy", "suggestion_for"]
