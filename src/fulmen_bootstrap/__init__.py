# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install, verify, and link the external tools a repository depends on."""

from __future__ import annotations

from importlib import metadata

from .config import Options
from .errors import BootstrapError, BootstrapFailedError
from .installer import RunSummary, install_tools, verify_tools
from .manifest import Manifest, load_manifest
from .platform import Platform, current_platform

__all__ = [
    "BootstrapError",
    "BootstrapFailedError",
    "Manifest",
    "Options",
    "Platform",
    "RunSummary",
    "__version__",
    "current_platform",
    "install_tools",
    "load_manifest",
    "verify_tools",
]

try:
    __version__ = metadata.version("fulmen-bootstrap")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
