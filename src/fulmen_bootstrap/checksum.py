# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""SHA-256 helpers for verifying downloaded artifacts."""

from __future__ import annotations

import hashlib
from pathlib import Path

from .config import COPY_CHUNK_SIZE
from .errors import ChecksumMismatchError


def compute_sha256(path: Path) -> str:
    """Return the lower-case hex SHA-256 digest of the file at *path*."""

    hasher = hashlib.sha256()
    with Path(path).open("rb") as stream:
        for chunk in iter(lambda: stream.read(COPY_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def verify_sha256(path: Path, expected: str) -> None:
    """Raise :class:`ChecksumMismatchError` unless *path* hashes to *expected*.

    The whole file is always digested; the comparison is an exact match
    against the lower-case hex digest.

    Raises:
        ChecksumMismatchError: If the digests differ.
        OSError: If the file cannot be read.
    """

    actual = compute_sha256(path)
    if actual != expected:
        raise ChecksumMismatchError(path, expected=expected, actual=actual)


__all__ = ["compute_sha256", "verify_sha256"]
