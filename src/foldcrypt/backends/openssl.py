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
    InvalidPassword,
    IOFailure,
    wrong_password,
)
from .process import ToolOutput, ToolRunner

CIPHER_NAME = "aes-256-cbc"
BAD_DECRYPT_SIGNATURE = "bad decrypt"


def classify_decrypt_failure(diagnostics: str) -> DecryptionFailed:
    if BAD_DECRYPT_SIGNATURE in diagnostics.lower():
        return wrong_password(diagnostics)
    return DecryptionFailed("Failed to decrypt file", detail=diagnostics)


class OpenSSLCipher:
    """AES-256-CBC with a salted PBKDF2 key, password fed over stdin."""

    name = "openssl"

    def __init__(self, openssl_path: str = "openssl", *, runner: ToolRunner | None = None) -> None:
        self.openssl_path = openssl_path
        self._runner = runner or ToolRunner()

    def command(self, source: Path, target: Path, *, decrypt: bool) -> list[str]:
        cmd = [self.openssl_path, "enc", f"-{CIPHER_NAME}"]
        if decrypt:
            cmd.append("-d")
        cmd.extend(
            [
                "-salt",
                "-pbkdf2",
                "-pass",
                "stdin",
                "-in",
                str(source),
                "-out",
                str(target),
            ]
        )
        return cmd

    def check_password(self, password: str) -> None:
        if not password:
            raise InvalidPassword("Password must not be empty")
        # openssl reads a single line from stdin.
        if "\n" in password or "\r" in password:
            raise InvalidPassword("Password must not contain line breaks")

    def encrypt(self, source: Path, target: Path, password: str) -> None:
        output = self._run(self.command(source, target, decrypt=False), password)
        if not output.ok:
            raise EncryptionFailed("Failed to encrypt file", detail=output.diagnostics)

    def decrypt(self, source: Path, target: Path, password: str) -> None:
        output = self._run(self.command(source, target, decrypt=True), password)
        if not output.ok:
            raise classify_decrypt_failure(output.diagnostics)

    def _run(self, cmd: Sequence[str], password: str) -> ToolOutput:
        try:
            return self._runner.run(cmd, secret=password)
        except FileNotFoundError as exc:
            raise CipherToolUnavailable(
                f"Failed to start {self.openssl_path}: cipher tool not found",
                detail=str(exc),
            ) from exc
        except OSError as exc:
            raise IOFailure(f"Failed to run {self.openssl_path}", detail=str(exc)) from exc
