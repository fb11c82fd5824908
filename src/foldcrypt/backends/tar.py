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

from collections.abc import Sequence
from pathlib import Path

from ..core.errors import IOFailure, PackagingFailed, SourceNotFound
from .process import ToolOutput, ToolRunner

# GNU tar, then bsdtar (macOS), when fed bytes that are not an archive.
_FOREIGN_INPUT_SIGNATURES = (
    "does not look like a tar archive",
    "unrecognized archive format",
    "damaged tar archive",
)


class TarPackager:
    name = "tar"

    def __init__(self, tar_path: str = "tar", *, runner: ToolRunner | None = None) -> None:
        self.tar_path = tar_path
        self._runner = runner or ToolRunner()

    def pack_command(self, folder: Path, archive: Path) -> list[str]:
        # Archive paths stay rooted at the folder name, never absolute.
        return [self.tar_path, "-cf", str(archive), "-C", str(folder.parent), folder.name]

    def unpack_command(self, archive: Path, destination: Path) -> list[str]:
        return [self.tar_path, "-xf", str(archive), "-C", str(destination)]

    def list_command(self, archive: Path) -> list[str]:
        return [self.tar_path, "-tf", str(archive)]

    def pack(self, folder: Path, archive: Path) -> None:
        if not folder.is_dir():
            raise SourceNotFound(f"Folder '{folder}' does not exist")
        output = self._run(self.pack_command(folder, archive))
        if not output.ok:
            raise PackagingFailed("Failed to package folder", detail=output.diagnostics)

    def list_members(self, archive: Path) -> list[str]:
        if not archive.is_file():
            raise SourceNotFound(f"Archive '{archive}' does not exist")
        output = self._run(self.list_command(archive))
        if not output.ok:
            raise PackagingFailed("Failed to read archive", detail=output.diagnostics)
        return [line for line in output.stdout_text.splitlines() if line]

    def unpack(self, archive: Path, destination: Path) -> None:
        if not archive.is_file():
            raise SourceNotFound(f"Archive '{archive}' does not exist")
        output = self._run(self.unpack_command(archive, destination))
        if not output.ok:
            raise PackagingFailed("Failed to extract archive", detail=output.diagnostics)

    def rejects_input(self, diagnostics: str) -> bool:
        lowered = diagnostics.lower()
        return any(signature in lowered for signature in _FOREIGN_INPUT_SIGNATURES)

    def _run(self, cmd: Sequence[str]) -> ToolOutput:
        try:
            return self._runner.run(cmd)
        except FileNotFoundError as exc:
            raise PackagingFailed(
                f"Failed to execute {self.tar_path}: packaging tool not found",
                detail=str(exc),
            ) from exc
        except OSError as exc:
            raise IOFailure(f"Failed to execute {self.tar_path}", detail=str(exc)) from exc
