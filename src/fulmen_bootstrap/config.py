# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Constants and environment-driven settings for the bootstrap installer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_MANIFEST_PATH: Final[Path] = Path(".goneat") / "tools.yaml"
DEFAULT_BIN_DIR: Final[Path] = Path("bin")
LOCAL_OVERRIDE_SUFFIX: Final[str] = ".local"

MAX_EXTRACTION_SIZE: Final[int] = 1024 * 1024 * 1024
COPY_CHUNK_SIZE: Final[int] = 64 * 1024

DEFAULT_DOWNLOAD_TIMEOUT: Final[float] = 60.0
DOWNLOAD_TIMEOUT_ENV: Final[str] = "BOOTSTRAP_DOWNLOAD_TIMEOUT"
MANIFEST_ENV: Final[str] = "BOOTSTRAP_MANIFEST"

SCRATCH_PREFIX: Final[str] = "bootstrap-"
EXTRACT_SUBDIR: Final[str] = "extract"
DESTINATION_MODE: Final[int] = 0o755
BINARY_MODE: Final[int] = 0o755


def download_timeout() -> float:
    """Return the per-request download timeout in seconds.

    ``BOOTSTRAP_DOWNLOAD_TIMEOUT`` overrides the default when it holds a
    positive number; any other value is ignored.
    """

    raw = os.environ.get(DOWNLOAD_TIMEOUT_ENV, "").strip()
    if not raw:
        return DEFAULT_DOWNLOAD_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_DOWNLOAD_TIMEOUT
    return value if value > 0 else DEFAULT_DOWNLOAD_TIMEOUT


@dataclass(frozen=True, slots=True)
class Options:
    """Options controlling an install or verify run.

    Attributes:
        manifest_path: Declared manifest path; a ``.local`` sibling wins when present.
        force: Reserved for forced reinstalls; currently has no effect.
        verbose: Emit progress and advisories while running.
        emoji: Decorate progress lines with emoji glyphs.
    """

    manifest_path: Path = DEFAULT_MANIFEST_PATH
    force: bool = False
    verbose: bool = False
    emoji: bool = True


__all__ = [
    "BINARY_MODE",
    "COPY_CHUNK_SIZE",
    "DEFAULT_BIN_DIR",
    "DEFAULT_DOWNLOAD_TIMEOUT",
    "DEFAULT_MANIFEST_PATH",
    "DESTINATION_MODE",
    "DOWNLOAD_TIMEOUT_ENV",
    "EXTRACT_SUBDIR",
    "LOCAL_OVERRIDE_SUFFIX",
    "MANIFEST_ENV",
    "MAX_EXTRACTION_SIZE",
    "Options",
    "SCRATCH_PREFIX",
    "download_timeout",
]
