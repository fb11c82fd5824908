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

"""External packaging and cipher tools behind one strategy per platform."""

from .base import (
    INTEGRATED_STRATEGY,
    TWO_STAGE_STRATEGY,
    Backend,
    CipherBackend,
    IntegratedArchiver,
    IntegratedBackend,
    Packager,
    Step,
    ToolPaths,
    TwoStageBackend,
    check_archive_root,
)
from .openssl import OpenSSLCipher
from .process import ToolOutput, ToolRunner, format_command
from .selector import select_backend, strategy_for_platform
from .sevenzip import SevenZipArchiver
from .tar import TarPackager

__all__ = [
    "Backend",
    "CipherBackend",
    "INTEGRATED_STRATEGY",
    "IntegratedArchiver",
    "IntegratedBackend",
    "OpenSSLCipher",
    "Packager",
    "SevenZipArchiver",
    "Step",
    "TWO_STAGE_STRATEGY",
    "TarPackager",
    "ToolOutput",
    "ToolPaths",
    "ToolRunner",
    "TwoStageBackend",
    "check_archive_root",
    "format_command",
    "select_backend",
    "strategy_for_platform",
]
