# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strategy that downloads, verifies, and unpacks release archives."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import cast

from ..checksum import verify_sha256
from ..config import BINARY_MODE, EXTRACT_SUBDIR, SCRATCH_PREFIX
from ..downloader import download_file, filename_from_url, is_https
from ..errors import BinaryLocatorError, ChecksumMissingError, DownloadError, StrategyError
from ..extract import DIRECTORY_MODE, extract_archive
from ..manifest import DownloadInstall, Tool
from ..platform import Platform, interpolate_url
from .base import InstallStrategy, StrategyContext, ensure_directory, verify_installed_binary

LOGGER = logging.getLogger(__name__)


def find_binary(root: Path, bin_name: str) -> Path:
    """Return the first regular file named *bin_name* below *root*.

    Directories are walked in sorted order so the match is deterministic
    when an archive ships the same name more than once.

    Raises:
        BinaryLocatorError: If no such file exists.
    """

    for current, directories, files in os.walk(root):
        directories.sort()
        if bin_name in files:
            candidate = Path(current) / bin_name
            if candidate.is_file() and not candidate.is_symlink():
                return candidate
    raise BinaryLocatorError(bin_name, root)


def install_binary(source: Path, directory: Path, bin_name: str, *, platform: Platform) -> Path:
    """Copy *source* to ``directory/bin_name`` without exposing a partial file.

    The copy is staged next to the target, marked executable, and then moved
    into place with :func:`os.replace`.
    """

    ensure_directory(directory)
    target = directory / bin_name
    descriptor, staged_name = tempfile.mkstemp(prefix=f".{bin_name}.", dir=directory)
    staged = Path(staged_name)
    try:
        with os.fdopen(descriptor, "wb") as sink, source.open("rb") as stream:
            shutil.copyfileobj(stream, sink)
        if not platform.is_windows:
            staged.chmod(BINARY_MODE)
        os.replace(staged, target)
    except OSError as exc:
        staged.unlink(missing_ok=True)
        raise StrategyError(f"failed to install {bin_name} into {directory}: {exc}") from exc
    return target


class DownloadStrategy(InstallStrategy):
    """Fetch an archive over HTTPS, check its SHA-256, and install the binary."""

    kind = "download"

    def install(self, tool: Tool, context: StrategyContext) -> None:
        install = cast(DownloadInstall, tool.install)
        platform = context.platform

        url = interpolate_url(install.url, platform)
        if not is_https(url):
            raise DownloadError(url, f"only HTTPS URLs are allowed, got: {url}", platform=platform)

        expected = install.checksum.get(str(platform))
        if not expected:
            raise ChecksumMissingError(platform)

        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as scratch_name:
            scratch = Path(scratch_name)
            archive = scratch / filename_from_url(url)
            try:
                download_file(url, archive)
            except DownloadError as exc:
                raise DownloadError(exc.url, exc.reason, platform=platform, status=exc.status) from exc

            verify_sha256(archive, expected)
            LOGGER.debug("checksum verified for %s", archive.name)

            extract_root = scratch / EXTRACT_SUBDIR
            extract_root.mkdir(mode=DIRECTORY_MODE)
            extract_archive(archive, extract_root)

            binary = find_binary(extract_root, install.bin_name)
            target = install_binary(binary, context.destination, install.bin_name, platform=platform)
        LOGGER.debug("installed %s at %s", install.bin_name, target)

    def verify(self, tool: Tool, context: StrategyContext) -> None:
        install = cast(DownloadInstall, tool.install)
        verify_installed_binary(context.binary_path(install.bin_name), context.platform)


__all__ = ["DownloadStrategy", "find_binary", "install_binary"]
