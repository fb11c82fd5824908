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
import time

from rich.markup import escape

from ...backends import INTEGRATED_STRATEGY, Backend, ToolRunner, select_backend
from ...config import load_app_config
from ...core import Job, JobResult, Mode, PipelineError, Stage, WrongPassword
from ...worker import JobRunner
from ..core.log import _debug, _warn
from ..core.types import JobArgs
from ..ui import (
    configure_ui,
    console_err,
    get_context,
    print_completion_panel,
    prompt_password,
    read_password_stdin,
    status,
    stdin_is_interactive,
)

_POLL_INTERVAL_SEC = 0.1
_TITLES = {Mode.ENCRYPT: "Encrypted", Mode.DECRYPT: "Decrypted"}


def run_job_command(args: JobArgs, *, mode: Mode) -> int:
    config = load_app_config(args.config)
    quiet = args.quiet or config.ui.quiet
    _apply_ui_defaults(config.ui.no_color, config.ui.no_animations, debug=args.debug)
    runner = ToolRunner(on_command=functools.partial(_log_command, enabled=args.debug))
    try:
        backend = select_backend(tools=config.tools, runner=runner)
    except PipelineError as exc:
        _print_error(exc, debug=args.debug)
        return 2
    _debug(f"backend: {backend.strategy} ({', '.join(backend.tools)})", enabled=args.debug)

    password = _read_password(args, mode=mode, backend=backend)
    if mode is Mode.ENCRYPT:
        job = Job.encrypt(args.path, password)
    else:
        job = Job.decrypt(args.path, password)

    result = _run_in_background(job, backend, quiet=quiet, debug=args.debug)
    return _report(result, quiet=quiet, debug=args.debug)


def _apply_ui_defaults(no_color: bool, no_animations: bool, *, debug: bool) -> None:
    context = get_context()
    configure_ui(
        no_color=bool(context.console.no_color) or no_color,
        no_animations=not context.animations_enabled or no_animations,
        debug=debug,
    )


def _read_password(args: JobArgs, *, mode: Mode, backend: Backend) -> str:
    if args.password_stdin or not stdin_is_interactive():
        return read_password_stdin()
    return prompt_password(
        confirm=mode is Mode.ENCRYPT,
        allow_empty=backend.strategy == INTEGRATED_STRATEGY,
    )


def _run_in_background(job: Job, backend: Backend, *, quiet: bool, debug: bool) -> JobResult:
    worker = JobRunner(
        job, backend=backend, on_stage=functools.partial(_log_stage, enabled=debug)
    ).start()
    label = "Encrypting" if job.mode is Mode.ENCRYPT else "Decrypting"
    with status(f"{label} {job.source.name}...", quiet=quiet) as update:
        shown: Stage | None = None
        while True:
            result = worker.poll()
            if result is not None:
                return result
            stage = worker.stage
            if stage is not None and stage is not shown:
                shown = stage
                update(f"{stage.label}...")
            time.sleep(_POLL_INTERVAL_SEC)


def _report(result: JobResult, *, quiet: bool, debug: bool) -> int:
    if result.cleanup_error is not None:
        _warn(str(result.cleanup_error), quiet=quiet)
    if result.ok:
        print_completion_panel(_TITLES[result.mode], result.message, quiet=quiet)
        return 0
    if result.error is not None:
        _print_error(result.error, debug=debug)
    return 2


def _print_error(error: PipelineError, *, debug: bool) -> None:
    console_err.print(f"[red]Error:[/red] {escape(str(error))}")
    if isinstance(error, WrongPassword):
        console_err.print("[hint]Check the password and try again.[/hint]")
    if error.stage is not None:
        _debug(f"failed while {error.stage.value}", enabled=debug)
    if isinstance(error, WrongPassword) and error.detail.strip():
        _debug(f"tool output: {error.detail.strip()}", enabled=debug)


def _log_stage(stage: Stage, *, enabled: bool) -> None:
    _debug(f"stage: {stage.value}", enabled=enabled)


def _log_command(command: str, *, enabled: bool) -> None:
    _debug(f"$ {command}", enabled=enabled)
