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

import threading
from typing import Generic, TypeVar

from .backends.base import Backend
from .core.models import Job, Stage
from .core.results import JobResult
from .pipeline import StageCallback, run_job

_T = TypeVar("_T")


class ResultSlot(Generic[_T]):
    """Single hand-off cell: written once by the worker, taken once by the consumer."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._filled = threading.Event()
        self._value: _T | None = None
        self._error: BaseException | None = None
        self._written = False
        self._taken = False

    @property
    def ready(self) -> bool:
        return self._filled.is_set()

    def put(self, value: _T) -> None:
        self._store(value=value)

    def put_error(self, error: BaseException) -> None:
        self._store(error=error)

    def take(self, timeout: float | None = None) -> _T:
        if not self._filled.wait(timeout):
            raise TimeoutError("result is not ready")
        with self._lock:
            if self._taken:
                raise RuntimeError("result was already taken")
            self._taken = True
            value, error = self._value, self._error
            self._value = None
            self._error = None
        if error is not None:
            raise error
        return value  # type: ignore[return-value]

    def _store(self, *, value: _T | None = None, error: BaseException | None = None) -> None:
        with self._lock:
            if self._written:
                raise RuntimeError("result was already delivered")
            self._written = True
            self._value = value
            self._error = error
        self._filled.set()


class JobRunner:
    """Runs one job end-to-end on its own thread.

    The caller keeps its own loop responsive and polls ``poll()`` (or blocks in
    ``wait()``); the outcome is delivered exactly once.
    """

    def __init__(
        self,
        job: Job,
        *,
        backend: Backend | None = None,
        on_stage: StageCallback | None = None,
    ) -> None:
        self.job = job
        self._backend = backend
        self._on_stage = on_stage
        self._slot: ResultSlot[JobResult] = ResultSlot()
        self._thread: threading.Thread | None = None
        self.stage: Stage | None = None

    def start(self) -> JobRunner:
        if self._thread is not None:
            raise RuntimeError("job was already started")
        self._thread = threading.Thread(
            target=self._run,
            name=f"foldcrypt-{self.job.mode.value}",
            daemon=True,
        )
        self._thread.start()
        return self

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll(self) -> JobResult | None:
        if not self._slot.ready:
            return None
        return self._slot.take()

    def wait(self, timeout: float | None = None) -> JobResult:
        if self._thread is None:
            raise RuntimeError("job was not started")
        return self._slot.take(timeout)

    def _track_stage(self, stage: Stage) -> None:
        self.stage = stage
        if self._on_stage is not None:
            self._on_stage(stage)

    def _run(self) -> None:
        try:
            result = run_job(self.job, backend=self._backend, on_stage=self._track_stage)
        except BaseException as exc:
            self._slot.put_error(exc)
            return
        self._slot.put(result)
