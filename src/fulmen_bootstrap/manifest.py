# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool manifest models and the loader that reads them from YAML."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
    model_validator,
)

from .config import DEFAULT_BIN_DIR, LOCAL_OVERRIDE_SUFFIX
from .errors import ManifestError

LOGGER = logging.getLogger(__name__)

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _scalar_to_str(value: Any) -> Any:
    """Accept YAML numbers (``version: 1.2``) where a string is expected."""

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


VersionStr = Annotated[NonEmptyStr, BeforeValidator(_scalar_to_str)]


class _InstallModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class VerifyInstall(_InstallModel):
    """Probe ``PATH`` for an externally managed command."""

    type: Literal["verify"] = "verify"
    command: NonEmptyStr


class GoInstall(_InstallModel):
    """Install a Go module with ``go install module@version``."""

    type: Literal["go"] = "go"
    module: NonEmptyStr
    version: VersionStr

    @property
    def bin_name(self) -> str:
        """Return the command name produced by ``go install`` (last module path segment)."""

        return self.module.rstrip("/").rsplit("/", 1)[-1]


class DownloadInstall(_InstallModel):
    """Download, verify, and unpack a release archive."""

    type: Literal["download"] = "download"
    url: NonEmptyStr
    bin_name: NonEmptyStr = Field(alias="binName")
    destination: str | None = None
    checksum: dict[str, str] = Field(default_factory=dict)


class LinkInstall(_InstallModel):
    """Link a developer-local binary into the destination directory."""

    type: Literal["link"] = "link"
    source: NonEmptyStr
    bin_name: NonEmptyStr = Field(alias="binName")
    destination: str | None = None


Install = Annotated[
    VerifyInstall | GoInstall | DownloadInstall | LinkInstall,
    Field(discriminator="type"),
]


class Tool(BaseModel):
    """Single manifest entry describing how one tool is provisioned."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonEmptyStr
    description: str = ""
    required: bool = False
    install: Install


class Manifest(BaseModel):
    """Validated tool manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    version: VersionStr
    bin_dir: str | None = Field(default=None, alias="binDir")
    tools: tuple[Tool, ...] = Field(min_length=1)

    @field_validator("tools", mode="before")
    @classmethod
    def _require_tools(cls, value: Any) -> Any:
        if value is None or (isinstance(value, Sequence) and not isinstance(value, str) and not value):
            raise ValueError("no tools defined")
        return value

    @model_validator(mode="after")
    def _reject_duplicate_ids(self) -> Manifest:
        seen: set[str] = set()
        for tool in self.tools:
            if tool.id in seen:
                raise ValueError(f"duplicate tool id: {tool.id}")
            seen.add(tool.id)
        return self

    def destination_for(self, tool: Tool) -> Path:
        """Return the directory that receives *tool*'s binary.

        ``install.destination`` wins, then the manifest ``binDir``, then ``./bin``.
        """

        explicit = getattr(tool.install, "destination", None)
        if explicit:
            return Path(explicit)
        if self.bin_dir:
            return Path(self.bin_dir)
        return DEFAULT_BIN_DIR


def resolve_manifest_path(path: Path | str) -> Path:
    """Return the ``<stem>.local<ext>`` sibling of *path* when it exists, else *path*."""

    declared = Path(path)
    local = declared.with_name(f"{declared.stem}{LOCAL_OVERRIDE_SUFFIX}{declared.suffix}")
    if local.is_file():
        LOGGER.debug("using local manifest override %s", local)
        return local
    return declared


def load_manifest(path: Path | str) -> Manifest:
    """Resolve the manifest declared at *path*, then read and validate it.

    Raises:
        ManifestError: If the file cannot be read, is not valid YAML, or
            violates the manifest rules.
    """

    return read_manifest(resolve_manifest_path(path))


def read_manifest(path: Path | str) -> Manifest:
    """Read, parse, and validate the manifest at exactly *path*.

    No ``.local`` override lookup is performed.
    """

    resolved = Path(path)
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(resolved, exc) from exc

    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(resolved, exc, detail=f"invalid YAML: {exc}") from exc

    if payload is None:
        raise ManifestError(resolved, "manifest is empty")
    if not isinstance(payload, Mapping):
        raise ManifestError(resolved, "manifest root must be a mapping")

    try:
        manifest = Manifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(resolved, exc, detail=_format_validation_error(exc, payload)) from exc

    _warn_on_shared_binaries(manifest)
    return manifest


def _format_validation_error(exc: ValidationError, payload: Mapping[str, Any]) -> str:
    lines: list[str] = []
    for error in exc.errors():
        location = _render_location(error.get("loc", ()), payload)
        message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
        lines.append(f"{location}: {message}" if location else message)
    return "\n".join(lines)


def _render_location(loc: Sequence[Any], payload: Mapping[str, Any]) -> str:
    parts: list[str] = []
    index = 0
    while index < len(loc):
        part = loc[index]
        if part == "tools" and index + 1 < len(loc) and isinstance(loc[index + 1], int):
            position = loc[index + 1]
            parts.append(f"tool[{position}]{_tool_label(payload, position)}")
            index += 2
            continue
        parts.append(str(part))
        index += 1
    return ".".join(parts)


def _tool_label(payload: Mapping[str, Any], position: int) -> str:
    tools = payload.get("tools")
    if isinstance(tools, Sequence) and not isinstance(tools, str) and 0 <= position < len(tools):
        entry = tools[position]
        if isinstance(entry, Mapping) and entry.get("id"):
            return f" ({entry['id']})"
    return ""


def _warn_on_shared_binaries(manifest: Manifest) -> None:
    owners: dict[tuple[str, str], str] = {}
    for tool in manifest.tools:
        if not isinstance(tool.install, (DownloadInstall, LinkInstall)):
            continue
        key = (os.path.normpath(manifest.destination_for(tool)), tool.install.bin_name)
        previous = owners.setdefault(key, tool.id)
        if previous != tool.id:
            LOGGER.warning(
                "tools %s and %s both install %s into %s",
                previous,
                tool.id,
                tool.install.bin_name,
                key[0],
            )


__all__ = [
    "DownloadInstall",
    "GoInstall",
    "Install",
    "LinkInstall",
    "Manifest",
    "Tool",
    "VerifyInstall",
    "load_manifest",
    "read_manifest",
    "resolve_manifest_path",
]
