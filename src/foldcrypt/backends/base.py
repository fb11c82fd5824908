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

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..core.errors import DecryptionFailed, PackagingFailed, wrong_password
from ..core.models import Job, Mode, Stage

TWO_STAGE_STRATEGY = "tar+external-cipher"
INTEGRATED_STRATEGY = "archiver-with-built-in-cipher"


@dataclass(frozen=True)
class ToolPaths:
    tar: str = "tar"
    openssl: str = "openssl"
    sevenzip: str = "7z"


class Packager(Protocol):
    name: str

    def pack(self, folder: Path, archive: Path) -> None: ...

    def list_members(self, archive: Path) -> list[str]: ...

    def unpack(self, archive: Path, destination: Path) -> None: ...

    def rejects_input(self, diagnostics: str) -> bool: ...


class CipherBackend(Protocol):
    name: str

    def check_password(self, password: str) -> None: ...

    def encrypt(self, source: Path, target: Path, password: str) -> None: ...

    def decrypt(self, source: Path, target: Path, password: str) -> None: ...


class IntegratedArchiver(Protocol):
    name: str

    def check_password(self, password: str) -> None: ...

    def encrypt_folder(self, folder: Path, target: Path, password: str) -> None: ...

    def list_members(self, archive: Path, password: str) -> list[str]: ...

    def decrypt_archive(self, archive: Path, destination: Path, password: str) -> None: ...


def check_archive_root(members: Iterable[str], root: str, *, separators: str = "/") -> None:
    """Refuse an archive unless every member unpacks inside ``root``.

    The output folder is named after the encrypted file, so a renamed archive would
    otherwise unpack somewhere else and could overwrite an unrelated folder.
    """
    members = list(members)
    if not members:
        raise DecryptionFailed(f"Archive does not contain a '{root}' folder")
    strays = [member for member in members if _member_root(member, separators) != root]
    if strays:
        raise DecryptionFailed(
            f"Archive does not unpack into '{root}'",
            detail="\n".join(strays[:5]),
        )


def _member_root(member: str, separators: str) -> str | None:
    if member[:1] in separators:
        return None
    pieces = re.split(f"[{re.escape(separators)}]", member)
    parts = [part for part in pieces if part not in ("", ".")]
    if not parts or ".." in parts:
        return None
    return parts[0]


@dataclass(frozen=True)
class Step:
    stage: Stage
    run: Callable[[], None]


class Backend(Protocol):
    strategy: str

    @property
    def tools(self) -> tuple[str, ...]: ...

    def check_password(self, password: str) -> None: ...

    def temp_archive(self, job: Job) -> Path | None: ...

    def steps(self, job: Job) -> list[Step]: ...


@dataclass(frozen=True)
class TwoStageBackend:
    """Separate packaging and cipher tools joined by a temporary archive."""

    packager: Packager
    cipher: CipherBackend
    strategy: str = TWO_STAGE_STRATEGY

    @property
    def tools(self) -> tuple[str, ...]:
        return (self.packager.name, self.cipher.name)

    def check_password(self, password: str) -> None:
        self.cipher.check_password(password)

    def temp_archive(self, job: Job) -> Path | None:
        return job.temp_archive

    def steps(self, job: Job) -> list[Step]:
        temp = job.temp_archive
        if job.mode is Mode.ENCRYPT:
            return [
                Step(Stage.PACKING, lambda: self.packager.pack(job.source, temp)),
                Step(
                    Stage.ENCIPHERING,
                    lambda: self.cipher.encrypt(temp, job.output, job.password),
                ),
            ]
        return [
            Step(
                Stage.DECIPHERING,
                lambda: self.cipher.decrypt(job.source, temp, job.password),
            ),
            Step(Stage.UNPACKING, lambda: self._unpack_deciphered(temp, job)),
        ]

    def _unpack_deciphered(self, archive: Path, job: Job) -> None:
        try:
            check_archive_root(self.packager.list_members(archive), job.output.name)
            self.packager.unpack(archive, job.destination_dir)
        except PackagingFailed as exc:
            # The cipher let a wrong password through and produced noise.
            if self.packager.rejects_input(exc.detail):
                raise wrong_password(exc.detail) from exc
            raise


@dataclass(frozen=True)
class IntegratedBackend:
    """One archiver that packs and ciphers in a single invocation."""

    archiver: IntegratedArchiver
    strategy: str = INTEGRATED_STRATEGY

    @property
    def tools(self) -> tuple[str, ...]:
        return (self.archiver.name,)

    def check_password(self, password: str) -> None:
        self.archiver.check_password(password)

    def temp_archive(self, job: Job) -> Path | None:
        return None

    def steps(self, job: Job) -> list[Step]:
        if job.mode is Mode.ENCRYPT:
            return [
                Step(
                    Stage.ENCIPHERING,
                    lambda: self.archiver.encrypt_folder(job.source, job.output, job.password),
                )
            ]
        return [Step(Stage.DECIPHERING, lambda: self._extract_checked(job))]

    def _extract_checked(self, job: Job) -> None:
        members = self.archiver.list_members(job.source, job.password)
        # 7-Zip lists Windows paths with backslashes.
        check_archive_root(members, job.output.name, separators="/\\")
        self.archiver.decrypt_archive(job.source, job.destination_dir, job.password)
