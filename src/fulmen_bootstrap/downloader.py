# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTPS downloads streamed straight to disk."""

from __future__ import annotations

import logging
from http import HTTPStatus
from pathlib import Path, PurePosixPath
from typing import Final
from urllib.parse import urlsplit

import requests

from .config import COPY_CHUNK_SIZE, download_timeout
from .errors import DownloadError

LOGGER = logging.getLogger(__name__)

HTTPS_SCHEME: Final[str] = "https"
FALLBACK_FILENAME: Final[str] = "download"


def is_https(url: str) -> bool:
    """Return ``True`` when *url* uses exactly the ``https`` scheme."""

    return urlsplit(url).scheme == HTTPS_SCHEME


def filename_from_url(url: str) -> str:
    """Return the final path component of *url*, ignoring query and fragment."""

    name = PurePosixPath(urlsplit(url).path).name
    return name or FALLBACK_FILENAME


def download_file(url: str, destination: Path, *, timeout: float | None = None) -> Path:
    """Fetch *url* with a single GET and stream the body into *destination*.

    Args:
        url: Artifact URL; only ``https`` is accepted.
        destination: File path to create, normally inside a scratch directory.
        timeout: Per-request timeout in seconds; defaults to :func:`download_timeout`.

    Returns:
        Path: The written *destination*.

    Raises:
        DownloadError: If the scheme is not ``https``, the server answers with
            anything but ``200``, or the transfer fails.
    """

    if not is_https(url):
        raise DownloadError(url, f"only HTTPS URLs are allowed, got: {url}")

    effective_timeout = download_timeout() if timeout is None else timeout
    destination = Path(destination)
    LOGGER.debug("downloading %s to %s", url, destination)
    try:
        with requests.get(url, stream=True, timeout=effective_timeout) as response:
            if response.status_code != HTTPStatus.OK:
                reason = response.reason or "unexpected status"
                raise DownloadError(url, f"HTTP {response.status_code}: {reason}", status=response.status_code)
            with destination.open("wb") as sink:
                for chunk in response.iter_content(chunk_size=COPY_CHUNK_SIZE):
                    if chunk:
                        sink.write(chunk)
    except requests.RequestException as exc:
        raise DownloadError(url, str(exc) or type(exc).__name__) from exc
    except OSError as exc:
        raise DownloadError(url, f"failed to write {destination}: {exc}") from exc
    return destination


__all__ = ["download_file", "filename_from_url", "is_https"]
