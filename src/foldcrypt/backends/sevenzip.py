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

from ..core.errors import (
    CipherToolUnavailable,
    DecryptionFailed,
    EncryptionFailed,
    IOFailure,
    wrong_password,
)
from .process import ToolOutput, ToolRunner

WRONG_PASSWORD_SIGNATURE = "wrong password"


def classify_extract_failure(diagnostics: str) -> DecryptionFailed:
    if WRONG_PASSWORD_SIGNATURE in diagnostics.lower():
        return wrong_password(diagnostics)
    return DecryptionFailed("Failed to decrypt folder", detail=diagnostics)


class SevenZipArchiver:
    """7-Zip packs and encrypts in one step; the password travels as ``-p<password>``.

    An empty password means no encryption: the flag is left out entirely.
    """

    name = "7z"

    def __init__(self, sevenzip_path: str = "7z", *, runner: ToolRunner | None = None) -> None:
        self.sevenzip_path = sevenzip_path
        self._runner = runner or ToolRunner()

    def check_password(self, password: str) -> None:
        return None

    def encrypt_command(self, folder: Path, target: Path, password: str) -> list[str]:
        cmd = [self.sevenzip_path, "a", "-t7z", "-mhe=on"]
        cmd.extend(_password_args(password))
        cmd.extend([str(target), str(folder)])
        return cmd

    def decrypt_command(self, archive: Path, destination: Path, password: str) -> list[str]:
        cmd = [self.sevenzip_path, "x"]
        cmd.extend(_password_args(password))
        cmd.extend([str(archive), f"-o{destination}", "-y"])
        return cmd

    def list_command(self, archive: Path, password: str) -> list[str]:
        cmd = [self.sevenzip_path, "l", "-slt"]
        cmd.extend(_password_args(password))
        cmd.append(str(archive))
        return cmd

    def encrypt_folder(self, folder: Path, target: Path, password: str) -> None:
        output = self._run(self.encrypt_command(folder, target, password), password)
        if not output.ok:
            raise EncryptionFailed("Failed to encrypt folder", detail=_diagnostics(output))

    def decrypt_archive(self, archive: Path, destination: Path, password: str) -> None:
        output = self._run(self.decrypt_command(archive, destination, password), password)
        if not output.ok:
            raise classify_extract_failure(_diagnostics(output))

    def list_members(self, archive: Path, password: str) -> list[str]:
        output = self._run(self.list_command(archive, password), password)
        if not output.ok:
            raise classify_extract_failure(_diagnostics(output))
        return parse_technical_listing(output.stdout_text)

    def _run(self, cmd: Sequence[str], password: str) -> ToolOutput:
        try:
            return self._runner.run(cmd, redact=_password_args(password))
        except FileNotFoundError as exc:
            raise CipherToolUnavailable(
                f"Failed to execute {self.sevenzip_path}: archiver not found",
                detail=str(exc),
            ) from exc
        except OSError as exc:
            raise IOFailure(f"Failed to execute {self.sevenzip_path}", detail=str(exc)) from exc


def parse_technical_listing(text: str) -> list[str]:
    """Member paths from ``7z l -slt``; the block before the dashes describes the archive."""
    members: list[str] = []
    in_entries = False
    for line in text.splitlines():
        if line.strip() == "----------":
            in_entries = True
        elif in_entries and line.startswith("Path = "):
            members.append(line[len("Path = ") :])
    return members


def _password_args(password: str) -> list[str]:
    if not password:
        return []
    return [f"-p{password}"]


def _diagnostics(output: ToolOutput) -> str:
    # 7-Zip splits its report between both streams depending on version.
    parts = [output.stderr_text.strip(), output.stdout_text.strip()]
    return "\n".join(part for part in parts if part)
