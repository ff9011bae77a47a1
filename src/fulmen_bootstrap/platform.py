# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host platform detection and download URL templating."""

from __future__ import annotations

import platform as _host
import re
from dataclasses import dataclass
from typing import Final

OS_TOKEN: Final[str] = "{{os}}"
ARCH_TOKEN: Final[str] = "{{arch}}"
_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{(?:os|arch)\}\}")

WINDOWS_ADVISORY: Final[str] = "Windows support requires tar and gzip to be installed manually (e.g., via scoop)"

_OS_ALIASES: Final[dict[str, str]] = {
    "darwin": "darwin",
    "macos": "darwin",
    "linux": "linux",
    "windows": "windows",
}

_ARCH_ALIASES: Final[dict[str, str]] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv8": "arm64",
}


@dataclass(frozen=True, slots=True)
class Platform:
    """Operating system and architecture pair in canonical form."""

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"

    @property
    def is_windows(self) -> bool:
        """Return ``True`` when the platform targets Windows."""

        return self.os == "windows"


def normalize_os(system: str) -> str:
    """Return the canonical OS name for *system*, or the raw value lower-cased."""

    normalized = system.strip().lower()
    return _OS_ALIASES.get(normalized, normalized)


def normalize_arch(machine: str) -> str:
    """Return the canonical architecture for *machine*, or the raw value lower-cased."""

    normalized = machine.strip().lower()
    return _ARCH_ALIASES.get(normalized, normalized)


def current_platform() -> Platform:
    """Return the platform of the running interpreter."""

    return Platform(os=normalize_os(_host.system()), arch=normalize_arch(_host.machine()))


def is_supported(platform: Platform) -> tuple[bool, str]:
    """Report whether downloads are supported on *platform*.

    Returns:
        tuple[bool, str]: Support flag and an advisory or reason. Darwin and
        Linux return an empty advisory, Windows is supported with an
        advisory, and everything else is unsupported.
    """

    if platform.os in {"darwin", "linux"}:
        return True, ""
    if platform.os == "windows":
        return True, WINDOWS_ADVISORY
    return False, f"Unsupported platform: {platform.os}"


def interpolate_url(template: str, platform: Platform) -> str:
    """Replace ``{{os}}`` and ``{{arch}}`` tokens in *template*.

    Example:
        >>> interpolate_url("https://example.com/tool_{{os}}_{{arch}}.tar.gz", Platform("darwin", "arm64"))
        'https://example.com/tool_darwin_arm64.tar.gz'
    """

    values = {OS_TOKEN: platform.os, ARCH_TOKEN: platform.arch}
    return _TOKEN_PATTERN.sub(lambda match: values[match.group(0)], template)


__all__ = [
    "ARCH_TOKEN",
    "OS_TOKEN",
    "Platform",
    "current_platform",
    "interpolate_url",
    "is_supported",
    "normalize_arch",
    "normalize_os",
]
