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

import functools

import typer

from ...core import Mode
from ..core.common import _ctx_value, _run_cli
from ..core.types import JobArgs
from ..flows.job import run_job_command


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Decrypt <name>.aes back into the folder <name> next to it.\n\n"
            "Examples:\n"
            "  foldcrypt decrypt ./project.aes\n"
            "  printf '%s\\n' \"$PASSWORD\" | foldcrypt decrypt ./project.aes --password-stdin\n"
        )
    )(decrypt)


def decrypt(
    ctx: typer.Context,
    archive: str = typer.Argument(..., help="Encrypted archive to decrypt."),
    password_stdin: bool = typer.Option(
        False,
        "--password-stdin",
        help="Read the password from the first line of stdin instead of prompting.",
        rich_help_panel="Keys",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Behavior",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))
    args = JobArgs(
        path=archive,
        config=_ctx_value(ctx, "config"),
        password_stdin=password_stdin,
        quiet=quiet or bool(_ctx_value(ctx, "quiet")),
        debug=debug_value,
    )
    _run_cli(functools.partial(run_job_command, args, mode=Mode.DECRYPT), debug=debug_value)
