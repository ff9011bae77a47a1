# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe extraction of ``.tar.gz`` and ``.zip`` archives.

Every entry is validated before anything is written: links are skipped,
entries that would land outside the destination abort the extraction with
:class:`UnsafePathError`, and the cumulative uncompressed size of regular
files is capped at :data:`MAX_EXTRACTION_SIZE`. Tar and zip keep separate
code paths and only share these checks.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tarfile
import zipfile
import zlib
from pathlib import Path
from typing import IO, Final

from .config import COPY_CHUNK_SIZE, MAX_EXTRACTION_SIZE
from .errors import ExtractionError, UnsafePathError

LOGGER = logging.getLogger(__name__)

TAR_GZ_SUFFIX: Final[str] = ".tar.gz"
ZIP_SUFFIX: Final[str] = ".zip"
DIRECTORY_MODE: Final[int] = 0o750
DEFAULT_FILE_MODE: Final[int] = 0o644
PERMISSION_MASK: Final[int] = 0o777

_OPEN_FLAGS: Final[int] = os.O_CREAT | os.O_TRUNC | os.O_RDWR | getattr(os, "O_BINARY", 0)


def extract_archive(archive: Path, destination: Path) -> None:
    """Extract *archive* into *destination* according to its filename suffix.

    Args:
        archive: Path to a ``.tar.gz`` or ``.zip`` file.
        destination: Existing directory that receives the archive contents.

    Raises:
        UnsafePathError: If an entry would escape *destination*.
        ExtractionError: If the format is unsupported, the archive is
            corrupt or truncated, the size cap is exceeded, or writing fails.
    """

    archive = Path(archive)
    name = archive.name.lower()
    if name.endswith(TAR_GZ_SUFFIX):
        _extract_tar_gz(archive, Path(destination))
        return
    if name.endswith(ZIP_SUFFIX):
        _extract_zip(archive, Path(destination))
        return
    raise ExtractionError(
        archive,
        f"unsupported archive format: {archive.suffix or archive.name} (supported: .tar.gz, .zip)",
    )


def validate_extracted_path(archive: Path, destination: Path, entry_name: str) -> Path:
    """Return the path *entry_name* extracts to, rejecting escapes from *destination*.

    Raises:
        UnsafePathError: If the entry is absolute or normalises outside *destination*.
    """

    if _is_absolute_entry(entry_name):
        raise UnsafePathError(archive, entry_name)
    root = os.path.normpath(os.path.abspath(destination))
    target = os.path.normpath(os.path.join(root, entry_name))
    try:
        relative = os.path.relpath(target, root)
    except ValueError as exc:
        raise UnsafePathError(archive, entry_name) from exc
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise UnsafePathError(archive, entry_name)
    return Path(target)


def _is_absolute_entry(entry_name: str) -> bool:
    if entry_name.startswith(("/", "\\")) or os.path.isabs(entry_name):
        return True
    drive, _ = os.path.splitdrive(entry_name)
    return bool(drive)


def _size_exceeded(archive: Path) -> ExtractionError:
    return ExtractionError(archive, f"extraction size exceeds limit ({MAX_EXTRACTION_SIZE} bytes)")


def _extract_tar_gz(archive: Path, destination: Path) -> None:
    try:
        with tarfile.open(archive, "r:gz") as bundle:
            plan = _plan_tar(archive, destination, bundle.getmembers())
            for member, target in plan:
                if member.isdir():
                    target.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
                    continue
                source = bundle.extractfile(member)
                if source is None:
                    raise ExtractionError(archive, f"cannot read entry {member.name}")
                with source:
                    _write_entry(source, target, member.mode & PERMISSION_MASK)
    except (tarfile.TarError, EOFError, zlib.error, OSError) as exc:
        raise ExtractionError(archive, str(exc) or type(exc).__name__) from exc


def _plan_tar(
    archive: Path,
    destination: Path,
    members: list[tarfile.TarInfo],
) -> list[tuple[tarfile.TarInfo, Path]]:
    plan: list[tuple[tarfile.TarInfo, Path]] = []
    total = 0
    for member in members:
        if member.issym() or member.islnk():
            LOGGER.debug("skipping link entry %s in %s", member.name, archive.name)
            continue
        target = validate_extracted_path(archive, destination, member.name)
        if member.isdir():
            plan.append((member, target))
            continue
        if not member.isreg():
            continue
        total += member.size
        if total > MAX_EXTRACTION_SIZE:
            raise _size_exceeded(archive)
        plan.append((member, target))
    return plan


def _extract_zip(archive: Path, destination: Path) -> None:
    try:
        with zipfile.ZipFile(archive) as bundle:
            plan = _plan_zip(archive, destination, bundle.infolist())
            for info, target in plan:
                if info.is_dir():
                    target.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
                    continue
                with bundle.open(info) as source:
                    _write_entry(source, target, _zip_file_mode(info))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, EOFError, zlib.error, OSError) as exc:
        raise ExtractionError(archive, str(exc) or type(exc).__name__) from exc


def _plan_zip(
    archive: Path,
    destination: Path,
    entries: list[zipfile.ZipInfo],
) -> list[tuple[zipfile.ZipInfo, Path]]:
    plan: list[tuple[zipfile.ZipInfo, Path]] = []
    total = 0
    for info in entries:
        if stat.S_ISLNK(_zip_unix_mode(info)):
            LOGGER.debug("skipping link entry %s in %s", info.filename, archive.name)
            continue
        target = validate_extracted_path(archive, destination, info.filename)
        if info.is_dir():
            plan.append((info, target))
            continue
        # The central directory size is untrusted; range-check it before accounting.
        if info.file_size < 0 or info.file_size > MAX_EXTRACTION_SIZE:
            raise ExtractionError(archive, f"invalid file size for {info.filename}: {info.file_size}")
        total += info.file_size
        if total > MAX_EXTRACTION_SIZE:
            raise _size_exceeded(archive)
        plan.append((info, target))
    return plan


def _zip_unix_mode(info: zipfile.ZipInfo) -> int:
    return (info.external_attr >> 16) & 0xFFFF


def _zip_file_mode(info: zipfile.ZipInfo) -> int:
    mode = _zip_unix_mode(info) & PERMISSION_MASK
    return mode or DEFAULT_FILE_MODE


def _write_entry(source: IO[bytes], target: Path, mode: int) -> None:
    target.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    descriptor = os.open(target, _OPEN_FLAGS, mode)
    with os.fdopen(descriptor, "wb") as sink:
        shutil.copyfileobj(source, sink, COPY_CHUNK_SIZE)


__all__ = [
    "DIRECTORY_MODE",
    "TAR_GZ_SUFFIX",
    "ZIP_SUFFIX",
    "extract_archive",
    "validate_extracted_path",
]
