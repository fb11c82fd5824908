# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import sys

from ..core.errors import UnsupportedPlatform
from .base import (
    INTEGRATED_STRATEGY,
    TWO_STAGE_STRATEGY,
    Backend,
    IntegratedBackend,
    ToolPaths,
    TwoStageBackend,
)
from .openssl import OpenSSLCipher
from .process import ToolRunner
from .sevenzip import SevenZipArchiver
from .tar import TarPackager

_UNIX_PLATFORM_PREFIXES = ("linux", "darwin", "freebsd", "openbsd", "netbsd")
_INTEGRATED_PLATFORMS = ("win32",)


def strategy_for_platform(platform: str) -> str:
    if platform.startswith(_UNIX_PLATFORM_PREFIXES):
        return TWO_STAGE_STRATEGY
    if platform in _INTEGRATED_PLATFORMS:
        return INTEGRATED_STRATEGY
    raise UnsupportedPlatform(f"Unsupported operating system: {platform}")


def select_backend(
    platform: str | None = None,
    *,
    tools: ToolPaths | None = None,
    runner: ToolRunner | None = None,
) -> Backend:
    platform = sys.platform if platform is None else platform
    tools = tools or ToolPaths()
    runner = runner or ToolRunner()
    strategy = strategy_for_platform(platform)
    if strategy == TWO_STAGE_STRATEGY:
        return TwoStageBackend(
            packager=TarPackager(tools.tar, runner=runner),
            cipher=OpenSSLCipher(tools.openssl, runner=runner),
        )
    return IntegratedBackend(archiver=SevenZipArchiver(tools.sevenzip, runner=runner))
