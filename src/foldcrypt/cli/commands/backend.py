#!/usr/bin/env python3
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

import typer

from ...backends import TWO_STAGE_STRATEGY, strategy_for_platform
from ...backends.process import which
from ...config import load_app_config
from ..core.common import _ctx_value, _run_cli
from ..ui import build_kv_table, console


def register(app: typer.Typer) -> None:
    app.command(help="Show which packaging and cipher tools this platform uses.")(backend)


def backend(ctx: typer.Context) -> None:
    config_value = _ctx_value(ctx, "config")
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> int:
        config = load_app_config(config_value)
        strategy = strategy_for_platform(sys.platform)
        if strategy == TWO_STAGE_STRATEGY:
            tools = [("packager", config.tools.tar), ("cipher", config.tools.openssl)]
        else:
            tools = [("archiver", config.tools.sevenzip)]
        rows = [("platform", sys.platform), ("strategy", strategy)]
        missing = False
        for role, tool in tools:
            resolved = which(tool)
            missing = missing or resolved is None
            rows.append((role, f"{tool} -> {resolved or 'not found'}"))
        rows.append(("config", str(config.path)))
        console.print(build_kv_table(rows, title="Backend"))
        return 1 if missing else 0

    _run_cli(_run, debug=debug_value)


