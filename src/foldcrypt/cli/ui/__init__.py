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

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from rich import box
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from .prompts import prompt_password, read_password_stdin
from .state import THEME, UIContext, get_context, isatty, stdin_is_interactive

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err

StatusUpdate = Callable[[str], None]


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(
    *,
    no_color: bool,
    no_animations: bool,
    debug: bool = False,
    context: UIContext | None = None,
) -> None:
    context = _resolve_context(context)
    context.animations_enabled = not no_animations
    context.debug = debug
    context.console.no_color = no_color
    context.console_err.no_color = no_color


def _noop_update(_message: str) -> None:
    return None


@contextmanager
def status(
    message: str, *, quiet: bool, context: UIContext | None = None
) -> Iterator[StatusUpdate]:
    context = _resolve_context(context)
    if quiet:
        yield _noop_update
        return
    if not context.animations_enabled:
        context.console.print(f"[stage]{message}[/stage]")

        def _print_update(text: str) -> None:
            context.console.print(f"[stage]{text}[/stage]")

        yield _print_update
        return
    spinner = Spinner("dots", text=Text(message, style="stage"))
    with Live(spinner, console=context.console, transient=True, refresh_per_second=12) as live:

        def _spin_update(text: str) -> None:
            live.update(Spinner("dots", text=Text(text, style="stage")), refresh=True)

        yield _spin_update


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def panel(title: str, renderable, *, style: str = "path") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(1, 2),
    )


def print_completion_panel(title: str, message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console.print(panel(title, Text(message), style="success"))


__all__ = [
    "THEME",
    "UIContext",
    "build_kv_table",
    "configure_ui",
    "console",
    "console_err",
    "get_context",
    "isatty",
    "panel",
    "print_completion_panel",
    "prompt_password",
    "read_password_stdin",
    "status",
    "stdin_is_interactive",
]
