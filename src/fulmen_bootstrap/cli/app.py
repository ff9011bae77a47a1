# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing ``bootstrap --install`` and ``bootstrap --verify``."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..checksum import compute_sha256
from ..config import DEFAULT_MANIFEST_PATH, MANIFEST_ENV, Options
from ..errors import BootstrapError, BootstrapFailedError
from ..installer import install_tools, verify_tools
from ..reporting import Reporter, configure_logging

INSTALL_OPTION = Annotated[
    bool,
    typer.Option("--install", help="Install every tool in the manifest."),
]
VERIFY_OPTION = Annotated[
    bool,
    typer.Option("--verify", help="Check that every tool is available without installing."),
]
MANIFEST_OPTION = Annotated[
    Path,
    typer.Option(
        "--manifest",
        envvar=MANIFEST_ENV,
        help="Path to the tools manifest; a '.local' sibling takes precedence.",
    ),
]
FORCE_OPTION = Annotated[
    bool,
    typer.Option("--force", help="Force reinstallation (reserved)."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Print progress and detailed errors."),
]
CHECKSUM_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--compute-checksum",
        metavar="FILE",
        dir_okay=False,
        help="Print the SHA-256 digest of FILE and exit.",
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]

app = typer.Typer(
    name="bootstrap",
    help="Install and verify the external tools a repository depends on.",
    add_completion=False,
    no_args_is_help=False,
    pretty_exceptions_enable=False,
)


@app.command()
def bootstrap(
    install: INSTALL_OPTION = False,
    verify: VERIFY_OPTION = False,
    manifest: MANIFEST_OPTION = DEFAULT_MANIFEST_PATH,
    force: FORCE_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    compute_checksum: CHECKSUM_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Install or verify the tools declared in the manifest."""

    configure_logging(verbose=verbose)
    reporter = Reporter(verbose=verbose, emoji=emoji)

    if compute_checksum is not None:
        _emit_checksum(compute_checksum, reporter)
        return

    if install == verify:
        message = "cannot specify both --install and --verify" if install else "must specify --install or --verify"
        reporter.error(f"Error: {message}")
        raise typer.Exit(code=1)

    options = Options(manifest_path=manifest, force=force, verbose=verbose, emoji=emoji)
    runner = install_tools if install else verify_tools
    try:
        runner(options, reporter=reporter)
    except BootstrapError as exc:
        reporter.error(_render_error(exc, verbose=verbose))
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        reporter.error(f"Error: {exc}")
        raise typer.Exit(code=1) from exc


def _render_error(exc: BootstrapError, *, verbose: bool) -> str:
    if not verbose:
        return f"Error: {exc}"
    if isinstance(exc, BootstrapFailedError):
        return f"Error: {exc}\n\n{exc.describe()}"
    return f"Error: {exc.describe()}"


def _emit_checksum(path: Path, reporter: Reporter) -> None:
    try:
        digest = compute_sha256(path)
    except OSError as exc:
        reporter.error(f"Error: failed to read {path}: {exc}")
        raise typer.Exit(code=1) from exc
    reporter.out(f"{digest}  {path}")


def main() -> None:
    """Console script entry point."""

    app(prog_name="bootstrap")


__all__ = ["app", "bootstrap", "main"]
