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

"""Encrypt a folder into one password-protected archive and back, using the
packaging and cipher tools native to the host platform."""

from .core import (
    ARCHIVE_EXTENSION,
    CipherToolUnavailable,
    CleanupFailed,
    DecryptionFailed,
    EncryptionFailed,
    InvalidPassword,
    InvalidSource,
    IOFailure,
    Job,
    JobResult,
    Mode,
    PackagingFailed,
    PipelineError,
    SourceNotFound,
    Stage,
    UnsupportedPlatform,
    WrongPassword,
)
from .pipeline import decrypt_archive, encrypt_folder, run_job
from .worker import JobRunner, ResultSlot

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
    "JobRunner",
    "Mode",
    "PackagingFailed",
    "PipelineError",
    "ResultSlot",
    "SourceNotFound",
    "Stage",
    "UnsupportedPlatform",
    "WrongPassword",
    "decrypt_archive",
    "encrypt_folder",
    "run_job",
]
