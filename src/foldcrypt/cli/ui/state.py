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
from dataclasses import dataclass, field

from rich.console import Console
from rich.theme import Theme


def isatty(stream, fallback) -> bool:
    if stream is not None:
        try:
            return bool(stream.isatty())
        except (OSError, ValueError, AttributeError):
            return False
    return bool(getattr(fallback, "isatty", lambda: False)())


def stdin_is_interactive() -> bool:
    """False when the password is being piped in, e.g. under ``CliRunner`` or cron."""
    return isatty(sys.stdin, None)


THEME = Theme(
    {
        "stage": "dim",
        "path": "bold cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "hint": "dim italic",
    }
)


@dataclass
class UIContext:
    console: Console
    console_err: Console
    theme: Theme = field(default=THEME)
    animations_enabled: bool = True
    debug: bool = False


def _build_console(*, stderr: bool) -> Console:
    # Check the real process streams; test runners swap sys.stdout for a buffer.
    raw = sys.__stderr__ if stderr else sys.__stdout__
    fallback = sys.stderr if stderr else sys.stdout
    return Console(stderr=stderr, theme=THEME, force_terminal=isatty(raw, fallback))


DEFAULT_CONTEXT = UIContext(
    console=_build_console(stderr=False),
    console_err=_build_console(stderr=True),
)


def get_context() -> UIContext:
    return DEFAULT_CONTEXT
