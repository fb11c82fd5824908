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

import unittest
from pathlib import Path

from foldcrypt.backends import SevenZipArchiver
from foldcrypt.backends.sevenzip import classify_extract_failure, parse_technical_listing
from foldcrypt.core import CipherToolUnavailable, DecryptionFailed, EncryptionFailed, WrongPassword
from tests.test_support import RecordingRunner


class TestSevenZipArchiver(unittest.TestCase):
    def test_encrypt_passes_password_flag(self) -> None:
        runner = RecordingRunner((0, b"Everything is Ok", b""))
        archiver = SevenZipArchiver("7z", runner=runner)
        archiver.encrypt_folder(Path("C:/data/project"), Path("C:/data/project.aes"), "pw")
        call = runner.calls[0]
        self.assertEqual(
            call["cmd"],
            ["7z", "a", "-t7z", "-mhe=on", "-ppw", "C:/data/project.aes", "C:/data/project"],
        )
        self.assertEqual(call["redact"], ["-ppw"])
        self.assertIsNone(call["secret"])

    def test_empty_password_skips_encryption(self) -> None:
        runner = RecordingRunner((0, b"", b""))
        archiver = SevenZipArchiver(runner=runner)
        archiver.check_password("")
        archiver.encrypt_folder(Path("/d/project"), Path("/d/project.aes"), "")
        cmd = runner.calls[0]["cmd"]
        self.assertFalse(any(arg.startswith("-p") for arg in cmd))

    def test_decrypt_extracts_into_parent(self) -> None:
        runner = RecordingRunner((0, b"", b""))
        SevenZipArchiver(runner=runner).decrypt_archive(
            Path("/d/project.aes"), Path("/d"), "pw"
        )
        self.assertEqual(
            runner.calls[0]["cmd"],
            ["7z", "x", "-ppw", "/d/project.aes", "-o/d", "-y"],
        )

    def test_list_command_and_parsing(self) -> None:
        listing = (
            b"Listing archive: C:\\data\\project.aes\n\n--\nPath = C:\\data\\project.aes\n"
            b"Type = 7z\n\n----------\nPath = project\nFolder = +\n\n"
            b"Path = project\\a.txt\nSize = 5\n"
        )
        runner = RecordingRunner((0, listing, b""))
        archiver = SevenZipArchiver(runner=runner)
        members = archiver.list_members(Path("C:/data/project.aes"), "pw")
        self.assertEqual(runner.calls[0]["cmd"], ["7z", "l", "-slt", "-ppw", "C:/data/project.aes"])
        self.assertEqual(runner.calls[0]["redact"], ["-ppw"])
        self.assertEqual(members, ["project", "project\\a.txt"])

    def test_listing_without_entries(self) -> None:
        self.assertEqual(parse_technical_listing("Path = x.7z\nType = 7z\n"), [])

    def test_list_with_wrong_password(self) -> None:
        runner = RecordingRunner(
            (2, b"", b"ERROR: C:\\d\\p.aes : Can not open encrypted archive. Wrong password?\n")
        )
        with self.assertRaises(WrongPassword):
            SevenZipArchiver(runner=runner).list_members(Path("C:/d/p.aes"), "x")

    def test_wrong_password_reported_on_stdout(self) -> None:
        runner = RecordingRunner(
            (2, b"ERROR: Wrong password : project/a.txt\n", b"")
        )
        with self.assertRaises(WrongPassword):
            SevenZipArchiver(runner=runner).decrypt_archive(Path("/d/p.aes"), Path("/d"), "x")

    def test_other_extract_failure_is_generic(self) -> None:
        error = classify_extract_failure("ERROR: Can not open the file as archive")
        self.assertIsInstance(error, DecryptionFailed)
        self.assertNotIsInstance(error, WrongPassword)

    def test_encrypt_failure(self) -> None:
        runner = RecordingRunner((2, b"", b"System ERROR: access denied"))
        with self.assertRaises(EncryptionFailed) as ctx:
            SevenZipArchiver(runner=runner).encrypt_folder(Path("/a"), Path("/a.aes"), "pw")
        self.assertIn("access denied", str(ctx.exception))

    def test_missing_archiver(self) -> None:
        runner = RecordingRunner(error=FileNotFoundError(2, "No such file", "7z"))
        with self.assertRaises(CipherToolUnavailable):
            SevenZipArchiver(runner=runner).encrypt_folder(Path("/a"), Path("/a.aes"), "pw")


if __name__ == "__main__":
    unittest.main()
