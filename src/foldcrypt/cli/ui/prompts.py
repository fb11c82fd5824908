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

import questionary

from .state import UIContext, get_context

QUESTIONARY_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("answer", "bold"),
        ("instruction", "fg:ansibrightblack"),
    ]
)


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or get_context()


def _ask_secret(prompt: str) -> str:
    value = questionary.password(prompt, qmark="", style=QUESTIONARY_STYLE).ask()
    if value is None:
        raise KeyboardInterrupt
    return value


def prompt_password(
    prompt: str = "Password:",
    *,
    confirm: bool = False,
    allow_empty: bool = False,
    context: UIContext | None = None,
) -> str:
    context = _resolve_context(context)
    while True:
        value = _ask_secret(prompt)
        if not value and not allow_empty:
            context.console_err.print("[error]Password cannot be empty.[/error]")
            continue
        if confirm and _ask_secret("Confirm password:") != value:
            context.console_err.print("[error]Passwords do not match.[/error]")
            continue
        return value


def read_password_stdin() -> str:
    line = sys.stdin.readline()
    return line.rstrip("\r\n")
