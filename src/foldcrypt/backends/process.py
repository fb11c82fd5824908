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

import shlex
import shutil
import subprocess
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

CommandObserver = Callable[[str], None]

_REDACTED = "***"


@dataclass(frozen=True)
class ToolOutput:
    cmd: Sequence[str]
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")

    @property
    def diagnostics(self) -> str:
        """stderr, falling back to stdout for tools that report errors there."""
        text = self.stderr_text.strip()
        if text:
            return text
        return self.stdout_text.strip()


def format_command(cmd: Sequence[str], *, redact: Iterable[str] = ()) -> str:
    hidden = set(redact)
    # Masks are emitted unquoted; everything else is shell-quoted.
    return " ".join(_redact_arg(arg) if arg in hidden else shlex.quote(arg) for arg in cmd)


def _redact_arg(arg: str) -> str:
    if arg.startswith("-") and len(arg) > 2:
        return arg[:2] + _REDACTED
    return _REDACTED


def which(tool: str) -> str | None:
    return shutil.which(tool)


class ToolRunner:
    """Runs one external tool to completion with piped standard streams.

    A secret, when given, is written to the child's stdin after spawn and stdin is
    then closed; stdout and stderr are drained while waiting so a chatty tool can't
    block on a full pipe.
    """

    def __init__(self, *, on_command: CommandObserver | None = None) -> None:
        self._on_command = on_command

    def run(
        self,
        cmd: Sequence[str],
        *,
        secret: str | None = None,
        redact: Iterable[str] = (),
    ) -> ToolOutput:
        cmd = list(cmd)
        if self._on_command is not None:
            self._on_command(format_command(cmd, redact=redact))
        payload = secret.encode("utf-8") if secret is not None else None
        stdin = subprocess.PIPE if payload is not None else subprocess.DEVNULL
        with subprocess.Popen(
            cmd,
            stdin=stdin,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        ) as proc:
            stdout, stderr = proc.communicate(input=payload)
            returncode = proc.wait()
        return ToolOutput(cmd=cmd, returncode=returncode, stdout=stdout, stderr=stderr)
