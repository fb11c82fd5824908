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

"""Job model, result type and error taxonomy."""

from .errors import (
    CipherToolUnavailable,
    CleanupFailed,
    DecryptionFailed,
    EncryptionFailed,
    InvalidPassword,
    InvalidSource,
    IOFailure,
    PackagingFailed,
    PipelineError,
    SourceNotFound,
    UnsupportedPlatform,
    WrongPassword,
)
from .models import ARCHIVE_EXTENSION, Job, Mode, Stage, derive_output_path, temp_archive_path
from .results import JobResult

__all__ = [
    "ARCHIVE_EXTENSION",
    "CipherToolUnavailable",
    "CleanupFailed",
    "DecryptionFailed",
    "EncryptionFailed",
    "IOFailure",
    "InvalidPassword",
    "InvalidSource",
    "Job",
    "JobResult",
    "Mode",
    "PackagingFailed",
    "PipelineError",
    "SourceNotFound",
    "Stage",
    "UnsupportedPlatform",
    "WrongPassword",
    "derive_output_path",
    "temp_archive_path",
]
