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

from dataclasses import dataclass

from .models import Stage


@dataclass(eq=False)
class PipelineError(RuntimeError):
    message: str
    detail: str = ""
    stage: Stage | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        detail = self.detail.strip()
        if detail:
            return f"{self.message}: {detail}"
        return self.message

    def at_stage(self, stage: Stage) -> PipelineError:
        if self.stage is None:
            self.stage = stage
        return self


class InvalidSource(PipelineError):
    pass


class SourceNotFound(InvalidSource):
    pass


class InvalidPassword(PipelineError):
    pass


class UnsupportedPlatform(PipelineError):
    pass


class PackagingFailed(PipelineError):
    pass


class CipherToolUnavailable(PipelineError):
    pass


class EncryptionFailed(PipelineError):
    pass


class DecryptionFailed(PipelineError):
    pass


class WrongPassword(DecryptionFailed):
    def __str__(self) -> str:
        return self.message


class CleanupFailed(PipelineError):
    pass


class IOFailure(PipelineError):
    pass


def wrong_password(detail: str = "") -> WrongPassword:
    return WrongPassword("Decryption failed: incorrect password", detail=detail)
