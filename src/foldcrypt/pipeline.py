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

"""Sequences a job's backend steps and owns its temporary archive.

Encrypt runs ``validating -> packing -> enciphering -> cleanup``, decrypt runs
``validating -> deciphering -> unpacking -> cleanup``; a backend with a built-in
cipher collapses packing into the cipher step. Any failing step ends the job: the
temporary archive and any output the job itself created are removed, and the result
carries the first error annotated with its stage. Nothing is retried.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Sequence
from pathlib import Path

from .backends.base import Backend, Step
from .backends.selector import select_backend
from .core.errors import (
    CleanupFailed,
    InvalidSource,
    PipelineError,
    SourceNotFound,
    UnsupportedPlatform,
)
from .core.models import Job, Mode, Stage
from .core.results import JobResult

StageCallback = Callable[[Stage], None]


def encrypt_folder(
    source_folder: str | Path,
    password: str,
    *,
    backend: Backend | None = None,
    platform: str | None = None,
    on_stage: StageCallback | None = None,
) -> JobResult:
    return _run_new_job(Mode.ENCRYPT, source_folder, password, backend, platform, on_stage)


def decrypt_archive(
    source_archive: str | Path,
    password: str,
    *,
    backend: Backend | None = None,
    platform: str | None = None,
    on_stage: StageCallback | None = None,
) -> JobResult:
    return _run_new_job(Mode.DECRYPT, source_archive, password, backend, platform, on_stage)


def _run_new_job(
    mode: Mode,
    source: str | Path,
    password: str,
    backend: Backend | None,
    platform: str | None,
    on_stage: StageCallback | None,
) -> JobResult:
    # Pick the backend before anything looks at the filesystem.
    if backend is None:
        try:
            backend = select_backend(platform)
        except UnsupportedPlatform as exc:
            return JobResult.failure(mode, exc.at_stage(Stage.VALIDATING))
    if mode is Mode.ENCRYPT:
        job = Job.encrypt(source, password)
    else:
        job = Job.decrypt(source, password)
    return run_job(job, backend=backend, on_stage=on_stage)


def run_job(
    job: Job,
    *,
    backend: Backend | None = None,
    on_stage: StageCallback | None = None,
) -> JobResult:
    notify = on_stage or _ignore_stage
    if backend is None:
        try:
            backend = select_backend()
        except UnsupportedPlatform as exc:
            return JobResult.failure(job.mode, exc.at_stage(Stage.VALIDATING))

    notify(Stage.VALIDATING)
    try:
        validate_job(job, backend)
    except PipelineError as exc:
        notify(Stage.DONE)
        return JobResult.failure(job.mode, exc.at_stage(Stage.VALIDATING))

    temp_archive = backend.temp_archive(job)
    output_existed = job.output.exists()
    cleanup_error: CleanupFailed | None = None
    try:
        error = _run_steps(backend.steps(job), notify)
    finally:
        notify(Stage.CLEANUP)
        cleanup_error = remove_temp_archive(temp_archive)

    if error is not None:
        if not output_existed:
            discard_error = discard_partial_output(job.output)
            cleanup_error = cleanup_error or discard_error
        notify(Stage.DONE)
        return JobResult.failure(job.mode, error, cleanup_error=cleanup_error)
    notify(Stage.DONE)
    return JobResult.success(job.mode, job.output, cleanup_error=cleanup_error)


def validate_job(job: Job, backend: Backend) -> None:
    source = job.source
    if job.mode is Mode.ENCRYPT:
        if not source.exists():
            raise SourceNotFound(f"Folder '{source}' does not exist")
        if not source.is_dir():
            raise InvalidSource(f"'{source}' is not a folder")
        if not source.name:
            raise InvalidSource(f"Cannot get folder name from '{source}'")
        if job.output.exists():
            raise InvalidSource(f"'{job.output}' already exists")
    else:
        if not source.exists():
            raise SourceNotFound(f"Encrypted file '{source}' does not exist")
        if not source.is_file():
            raise InvalidSource(f"'{source}' is not a file")
        if job.output == source:
            raise InvalidSource(f"Cannot derive an output folder name from '{source}'")
        if job.output.exists() and not job.output.is_dir():
            raise InvalidSource(f"'{job.output}' exists and is not a folder")

    temp_archive = backend.temp_archive(job)
    if temp_archive is not None:
        if temp_archive == source:
            raise InvalidSource(f"'{source}' would be overwritten by the temporary archive")
        if temp_archive.exists() or temp_archive.is_symlink():
            raise InvalidSource(
                f"Temporary archive '{temp_archive}' already exists; remove it and retry"
            )
    backend.check_password(job.password)


def remove_temp_archive(path: Path | None) -> CleanupFailed | None:
    if path is None:
        return None
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        return CleanupFailed(
            f"Failed to delete temporary file '{path}'",
            detail=str(exc),
            stage=Stage.CLEANUP,
        )
    return None


def discard_partial_output(path: Path) -> CleanupFailed | None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
    except OSError as exc:
        return CleanupFailed(
            f"Failed to remove incomplete output '{path}'",
            detail=str(exc),
            stage=Stage.CLEANUP,
        )
    return None


def _run_steps(steps: Sequence[Step], notify: StageCallback) -> PipelineError | None:
    for step in steps:
        notify(step.stage)
        try:
            step.run()
        except PipelineError as exc:
            return exc.at_stage(step.stage)
    return None


def _ignore_stage(_stage: Stage) -> None:
    return None
