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

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

ARCHIVE_EXTENSION = ".aes"
TEMP_ARCHIVE_EXTENSION = ".tar"


class Mode(str, Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class Stage(str, Enum):
    VALIDATING = "validating"
    PACKING = "packing"
    ENCIPHERING = "enciphering"
    DECIPHERING = "deciphering"
    UNPACKING = "unpacking"
    CLEANUP = "cleanup"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


_STAGE_LABELS = {
    Stage.VALIDATING: "Checking input",
    Stage.PACKING: "Packing folder",
    Stage.ENCIPHERING: "Encrypting archive",
    Stage.DECIPHERING: "Decrypting archive",
    Stage.UNPACKING: "Unpacking folder",
    Stage.CLEANUP: "Removing temporary files",
    Stage.DONE: "Done",
}


def normalize_source(path: str | Path) -> Path:
    """Absolute, symlink-free path of a job source.

    A symlinked folder is packed by its target, so its archive is named after the
    target and lands beside it; tar would otherwise archive only the link itself.
    """
    return Path(path).expanduser().resolve()


def item_name(mode: Mode, source: Path) -> str:
    """Name of the folder a job produces or consumes, e.g. ``project`` for both
    ``project/`` and ``project.aes``."""
    if mode is Mode.ENCRYPT:
        return source.name
    return source.stem


def derive_output_path(mode: Mode, source: Path) -> Path:
    name = item_name(mode, source)
    if mode is Mode.ENCRYPT:
        return source.parent / f"{name}{ARCHIVE_EXTENSION}"
    return source.parent / name


def temp_archive_path(mode: Mode, source: Path) -> Path:
    return source.parent / f"{item_name(mode, source)}{TEMP_ARCHIVE_EXTENSION}"


@dataclass(frozen=True)
class Job:
    mode: Mode
    source: Path
    password: str = field(repr=False)

    @classmethod
    def encrypt(cls, source: str | Path, password: str) -> Job:
        return cls(mode=Mode.ENCRYPT, source=normalize_source(source), password=password)

    @classmethod
    def decrypt(cls, source: str | Path, password: str) -> Job:
        return cls(mode=Mode.DECRYPT, source=normalize_source(source), password=password)

    @property
    def output(self) -> Path:
        return derive_output_path(self.mode, self.source)

    @property
    def temp_archive(self) -> Path:
        return temp_archive_path(self.mode, self.source)

    @property
    def destination_dir(self) -> Path:
        return self.source.parent
