# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed exceptions raised by the bootstrap installer.

Every error exposes its structured fields as attributes so library callers
can branch on them. ``str()`` yields a concise one-line summary suitable for
non-verbose CLI output while :meth:`BootstrapError.describe` returns the
full operator-facing text.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .platform import Platform


class BootstrapError(RuntimeError):
    """Base class for all bootstrap failures."""

    def describe(self) -> str:
        """Return a detailed, possibly multi-line description of the failure."""

        return str(self)


class ManifestError(BootstrapError):
    """Raised when a manifest cannot be read, parsed, or validated."""

    def __init__(
        self,
        path: Path | str,
        cause: BaseException | str,
        *,
        detail: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.cause = cause
        self.detail = detail if detail is not None else str(cause)
        super().__init__(f"invalid manifest at {self.path}: {_first_line(self.detail)}")

    def describe(self) -> str:
        return f"invalid manifest at {self.path}:\n   {_indent(self.detail)}"


class UnsupportedPlatformError(BootstrapError):
    """Raised when the host platform falls outside the supported set."""

    def __init__(self, platform: Platform, reason: str) -> None:
        self.platform = platform
        self.reason = reason
        super().__init__(f"unsupported platform: {platform} - {reason}")


class DownloadError(BootstrapError):
    """Raised when an artifact cannot be fetched."""

    def __init__(
        self,
        url: str,
        reason: str,
        *,
        platform: Platform | None = None,
        status: int | None = None,
    ) -> None:
        self.url = url
        self.reason = reason
        self.platform = platform
        self.status = status
        super().__init__(f"failed to download {url}: {reason}")

    def describe(self) -> str:
        platform = str(self.platform) if self.platform is not None else "unknown"
        return (
            "failed to download:\n"
            f"   Platform: {platform}\n"
            f"   URL: {self.url}\n"
            f"   Error: {self.reason}\n"
            "\n"
            "   Possible solutions:\n"
            f"   - Check if the release exists for {platform}\n"
            "   - Verify the URL pattern in the manifest"
        )


class ChecksumMismatchError(BootstrapError):
    """Raised when a file digest differs from the expected SHA-256."""

    def __init__(self, path: Path | str, expected: str, actual: str) -> None:
        self.path = Path(path)
        self.expected = expected
        self.actual = actual
        super().__init__(f"checksum verification failed for {self.path.name}: expected {expected}, got {actual}")

    def describe(self) -> str:
        return (
            "checksum verification failed:\n"
            f"   File: {self.path}\n"
            f"   Expected: {self.expected}\n"
            f"   Actual:   {self.actual}\n"
            "\n"
            "   This could indicate:\n"
            "   - File was corrupted during download\n"
            "   - File has been tampered with\n"
            "   - Wrong checksum in manifest"
        )


class ChecksumMissingError(BootstrapError):
    """Raised when a download tool has no checksum for the current platform."""

    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        super().__init__(f"no checksum found for platform {platform}")


class ExtractionError(BootstrapError):
    """Raised when an archive cannot be extracted safely."""

    def __init__(self, archive: Path | str, reason: str) -> None:
        self.archive = Path(archive)
        self.reason = reason
        super().__init__(f"failed to extract archive {self.archive}: {reason}")


class UnsafePathError(ExtractionError):
    """Raised when an archive entry would escape the extraction root."""

    def __init__(self, archive: Path | str, path: str) -> None:
        self.path = path
        super().__init__(archive, f"unsafe path in archive: {path} (contains '..' or is absolute)")


class CommandNotFoundError(BootstrapError):
    """Raised when an executable cannot be found on ``PATH``."""

    def __init__(self, command: str, suggestion: str = "") -> None:
        self.command = command
        self.suggestion = suggestion
        super().__init__(f"command not found: {command}")

    def describe(self) -> str:
        if not self.suggestion:
            return str(self)
        return f"{self}\n\n   {self.suggestion}"


class BinaryLocatorError(BootstrapError):
    """Raised when an extracted archive does not contain the requested binary."""

    def __init__(self, bin_name: str, directory: Path | str) -> None:
        self.bin_name = bin_name
        self.directory = Path(directory)
        super().__init__(f"binary {bin_name} not found in extracted archive")


class StrategyError(BootstrapError):
    """Raised for strategy failures that carry no further structure."""


class ToolError(BootstrapError):
    """Annotate a strategy failure with the identifier of the failing tool."""

    def __init__(self, tool_id: str, cause: BaseException) -> None:
        self.tool_id = tool_id
        self.cause = cause
        super().__init__(f"{tool_id}: {_first_line(cause)}")

    def describe(self) -> str:
        detail = self.cause.describe() if isinstance(self.cause, BootstrapError) else str(self.cause)
        return f"{self.tool_id}: {detail}"


class BootstrapFailedError(BootstrapError):
    """Aggregate raised when one or more tools failed during a run."""

    def __init__(self, action: str, errors: Sequence[ToolError]) -> None:
        self.action = action
        self.errors = tuple(errors)
        count = len(self.errors)
        if action == "verify":
            summary = f"{count} tool(s) not available"
        else:
            summary = f"failed to {action} {count} tool(s)"
        failed = ", ".join(error.tool_id for error in self.errors)
        super().__init__(f"{summary}: {failed}" if failed else summary)

    @property
    def tool_ids(self) -> tuple[str, ...]:
        """Return identifiers of the failed tools in run order."""

        return tuple(error.tool_id for error in self.errors)

    def describe(self) -> str:
        return "\n\n".join(error.describe() for error in self.errors)


def _first_line(value: BaseException | str) -> str:
    text = str(value).strip()
    return text.splitlines()[0] if text else type(value).__name__


def _indent(text: str) -> str:
    return text.replace("\n", "\n   ")


__all__ = [
    "BinaryLocatorError",
    "BootstrapError",
    "BootstrapFailedError",
    "ChecksumMismatchError",
    "ChecksumMissingError",
    "CommandNotFoundError",
    "DownloadError",
    "ExtractionError",
    "ManifestError",
    "StrategyError",
    "ToolError",
    "UnsafePathError",
    "UnsupportedPlatformError",
]
