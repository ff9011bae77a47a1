# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install strategies keyed by manifest install type."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from ..errors import StrategyError
from ..manifest import DownloadInstall, GoInstall, LinkInstall, VerifyInstall
from .base import InstallStrategy, StrategyContext
from .download import DownloadStrategy
from .go import GoStrategy
from .link import LinkStrategy
from .verify import VerifyStrategy

STRATEGIES: Final[Mapping[type, InstallStrategy]] = MappingProxyType(
    {
        VerifyInstall: VerifyStrategy(),
        GoInstall: GoStrategy(),
        DownloadInstall: DownloadStrategy(),
        LinkInstall: LinkStrategy(),
    },
)


def strategy_for(install: object) -> InstallStrategy:
    """Return the strategy that handles *install*."""

    try:
        return STRATEGIES[type(install)]
    except KeyError as exc:
        raise StrategyError(f"no install strategy registered for {type(install).__name__}") from exc


__all__ = [
    "DownloadStrategy",
    "GoStrategy",
    "InstallStrategy",
    "LinkStrategy",
    "STRATEGIES",
    "StrategyContext",
    "VerifyStrategy",
    "strategy_for",
]
