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

from dataclasses import dataclass
from pathlib import Path

from .errors import CleanupFailed, PipelineError, WrongPassword
from .models import Mode


@dataclass(frozen=True)
class JobResult:
    mode: Mode
    ok: bool
    message: str
    output: Path | None = None
    error: PipelineError | None = None
    cleanup_error: CleanupFailed | None = None

    @classmethod
    def success(
        cls,
        mode: Mode,
        output: Path,
        *,
        cleanup_error: CleanupFailed | None = None,
    ) -> JobResult:
        if mode is Mode.ENCRYPT:
            message = f"Folder has been encrypted to: {output}"
        else:
            message = f"File has been decrypted to: {output}"
        return cls(mode=mode, ok=True, message=message, output=output, cleanup_error=cleanup_error)

    @classmethod
    def failure(
        cls,
        mode: Mode,
        error: PipelineError,
        *,
        cleanup_error: CleanupFailed | None = None,
    ) -> JobResult:
        return cls(
            mode=mode, ok=False, message=str(error), error=error, cleanup_error=cleanup_error
        )

    @property
    def wrong_password(self) -> bool:
        return isinstance(self.error, WrongPassword)

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.message
