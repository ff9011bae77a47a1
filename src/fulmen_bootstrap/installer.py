# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drive install and verify runs across every tool in a manifest."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Literal

from .config import Options
from .errors import BootstrapError, BootstrapFailedError, ToolError, UnsupportedPlatformError
from .manifest import Manifest, Tool, read_manifest, resolve_manifest_path
from .platform import Platform, current_platform, is_supported
from .reporting import Reporter
from .strategies import InstallStrategy, StrategyContext, strategy_for

LOGGER = logging.getLogger(__name__)

Action = Literal["install", "verify"]

INSTALL_ACTION: Final[Action] = "install"
VERIFY_ACTION: Final[Action] = "verify"


@dataclass(slots=True)
class RunSummary:
    """Outcome of a successful run."""

    action: Action
    platform: Platform
    manifest_path: Path
    completed: list[str] = field(default_factory=list)


def install_tools(options: Options, *, reporter: Reporter | None = None) -> RunSummary:
    """Install every tool in the manifest named by *options*.

    Raises:
        ManifestError: If the manifest cannot be loaded.
        UnsupportedPlatformError: If the host platform is not supported.
        BootstrapFailedError: If one or more tools failed to install.
    """

    return _run(INSTALL_ACTION, options, reporter)


def verify_tools(options: Options, *, reporter: Reporter | None = None) -> RunSummary:
    """Verify every tool in the manifest named by *options* without installing."""

    return _run(VERIFY_ACTION, options, reporter)


def _run(action: Action, options: Options, reporter: Reporter | None) -> RunSummary:
    reporter = reporter or Reporter(verbose=options.verbose, emoji=options.emoji)
    if options.force:
        LOGGER.debug("--force has no effect; tools are always reinstalled")

    manifest_path = resolve_manifest_path(options.manifest_path)
    reporter.info(f"Loading manifest: {manifest_path}")
    manifest = read_manifest(manifest_path)

    platform = current_platform()
    supported, advisory = is_supported(platform)
    if not supported:
        raise UnsupportedPlatformError(platform, advisory)
    if advisory:
        reporter.warn(advisory)
    reporter.info(f"Platform: {platform}")

    summary = RunSummary(action=action, platform=platform, manifest_path=manifest_path)
    errors = _process_tools(action, manifest, platform, reporter, summary.completed)
    if errors:
        raise BootstrapFailedError(action, errors)

    done = "installed" if action == INSTALL_ACTION else "verified"
    reporter.ok(f"All tools {done} successfully")
    return summary


def _process_tools(
    action: Action,
    manifest: Manifest,
    platform: Platform,
    reporter: Reporter,
    completed: list[str],
) -> list[ToolError]:
    errors: list[ToolError] = []
    for tool in manifest.tools:
        strategy = strategy_for(tool.install)
        context = StrategyContext(platform=platform, destination=manifest.destination_for(tool))
        reporter.begin(_progress_label(action, tool, strategy, reporter))
        try:
            _operation(action, strategy)(tool, context)
        except (BootstrapError, OSError) as exc:
            reporter.failed()
            error = ToolError(tool.id, exc)
            errors.append(error)
            LOGGER.debug("%s failed for %s", action, tool.id, exc_info=exc)
            if tool.required:
                LOGGER.debug("stopping after required tool %s failed", tool.id)
                break
            continue
        reporter.passed()
        completed.append(tool.id)
    return errors


def _operation(action: Action, strategy: InstallStrategy) -> Callable[[Tool, StrategyContext], None]:
    return strategy.install if action == INSTALL_ACTION else strategy.verify


def _progress_label(action: Action, tool: Tool, strategy: InstallStrategy, reporter: Reporter) -> str:
    if action == INSTALL_ACTION:
        glyph = "📦 " if reporter.use_emoji else ""
        return f"{glyph}{tool.id} ({strategy.kind})"
    glyph = "🔍 " if reporter.use_emoji else ""
    return f"{glyph}Verifying {tool.id}"


__all__ = ["RunSummary", "install_tools", "verify_tools"]
