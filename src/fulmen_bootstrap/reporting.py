# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console output with optional colour and emoji support."""

from __future__ import annotations

import logging
import sys
from typing import Final, Literal, TextIO

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER: Final[str] = "fulmen_bootstrap"
_HANDLER_MARKER: Final[str] = "_fulmen_bootstrap_handler"


def detect_tty(stream: TextIO) -> bool:
    """Return ``True`` when *stream* appears to be backed by a terminal."""

    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def build_console(*, stderr: bool, color: bool) -> Console:
    """Return a Rich console bound lazily to stdout or stderr.

    Markup and highlighting are disabled so tool output and error text are
    printed verbatim.
    """

    tty = detect_tty(sys.stderr if stderr else sys.stdout)
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        stderr=stderr,
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


class Reporter:
    """Emit progress on stdout and failures on stderr for one CLI run.

    Progress, summaries, and advisories are printed only in verbose mode;
    :meth:`error` always prints.
    """

    def __init__(self, *, verbose: bool, emoji: bool = True, color: bool = True) -> None:
        self.verbose = verbose
        self.use_emoji = emoji
        self._out = build_console(stderr=False, color=color)
        self._err = build_console(stderr=True, color=color)

    def _glyph(self, symbol: str) -> str:
        return f"{symbol} " if self.use_emoji else ""

    def info(self, message: str) -> None:
        """Print an informational line."""

        if self.verbose:
            self._out.print(message)

    def begin(self, message: str) -> None:
        """Start a progress line that :meth:`passed` or :meth:`failed` completes."""

        if self.verbose:
            self._out.print(f"{message}...", end="")

    def passed(self) -> None:
        """Complete the current progress line as successful."""

        if self.verbose:
            self._out.print(" ✅" if self.use_emoji else " ok")

    def failed(self) -> None:
        """Complete the current progress line as failed."""

        if self.verbose:
            self._out.print(" ❌" if self.use_emoji else " failed")

    def ok(self, message: str) -> None:
        """Print a success summary."""

        if self.verbose:
            self._out.print(f"{self._glyph('✅')}{message}")

    def warn(self, message: str) -> None:
        """Print an advisory on stderr."""

        if self.verbose:
            self._err.print(f"{self._glyph('⚠️ ')}{message}")

    def error(self, message: str) -> None:
        """Print an error on stderr regardless of verbosity."""

        self._err.print(message)

    def out(self, message: str) -> None:
        """Print *message* on stdout regardless of verbosity."""

        self._out.print(message)


def configure_logging(*, verbose: bool) -> None:
    """Route package log records to stderr through Rich when *verbose* is set.

    Handlers installed by earlier calls are replaced so repeated CLI
    invocations in one process do not duplicate output.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
    if not verbose:
        logger.setLevel(logging.NOTSET)
        return
    handler = RichHandler(
        console=build_console(stderr=True, color=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


__all__ = ["PACKAGE_LOGGER", "Reporter", "build_console", "configure_logging", "detect_tty"]
