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

from foldcrypt.backends import OpenSSLCipher, ToolRunner
from foldcrypt.backends.openssl import classify_decrypt_failure
from foldcrypt.core import (
    CipherToolUnavailable,
    DecryptionFailed,
    EncryptionFailed,
    InvalidPassword,
    IOFailure,
    WrongPassword,
)
from tests.test_support import (
    ARGV_LOG_ENV,
    STDIN_LOG_ENV,
    TEST_PASSWORD,
    WRONG_PASSWORD,
    RecordingRunner,
    temp_directory,
    temp_env,
    write_fake_openssl_script,
)


class TestOpenSSLCommand(unittest.TestCase):
    def test_encrypt_command(self) -> None:
        cipher = OpenSSLCipher("openssl")
        cmd = cipher.command(Path("/d/p.tar"), Path("/d/p.aes"), decrypt=False)
        self.assertEqual(
            cmd,
            [
                "openssl",
                "enc",
                "-aes-256-cbc",
                "-salt",
                "-pbkdf2",
                "-pass",
                "stdin",
                "-in",
                "/d/p.tar",
                "-out",
                "/d/p.aes",
            ],
        )

    def test_decrypt_command_adds_flag(self) -> None:
        cmd = OpenSSLCipher().command(Path("/d/p.aes"), Path("/d/p.tar"), decrypt=True)
        self.assertEqual(cmd[:4], ["openssl", "enc", "-aes-256-cbc", "-d"])
        self.assertIn("-pbkdf2", cmd)

    def test_password_is_sent_as_secret(self) -> None:
        runner = RecordingRunner((0, b"", b""))
        OpenSSLCipher(runner=runner).encrypt(Path("/d/p.tar"), Path("/d/p.aes"), "pw 1")
        call = runner.calls[0]
        self.assertEqual(call["secret"], "pw 1")
        self.assertNotIn("pw 1", call["cmd"])

    def test_check_password(self) -> None:
        cipher = OpenSSLCipher()
        cipher.check_password("ok password")
        for bad in ("", "two\nlines", "carriage\rreturn"):
            with self.subTest(password=bad):
                with self.assertRaises(InvalidPassword):
                    cipher.check_password(bad)


class TestOpenSSLFailures(unittest.TestCase):
    def test_bad_decrypt_is_wrong_password(self) -> None:
        error = classify_decrypt_failure("error:1C800064:Provider routines::BAD DECRYPT")
        self.assertIsInstance(error, WrongPassword)

    def test_other_failure_is_generic(self) -> None:
        error = classify_decrypt_failure("bad magic number")
        self.assertIsInstance(error, DecryptionFailed)
        self.assertNotIsInstance(error, WrongPassword)
        self.assertIn("bad magic number", str(error))

    def test_encrypt_failure_carries_stderr(self) -> None:
        runner = RecordingRunner((1, b"", b"Can't open input file\n"))
        with self.assertRaises(EncryptionFailed) as ctx:
            OpenSSLCipher(runner=runner).encrypt(Path("/x"), Path("/y"), "pw")
        self.assertIn("Can't open input file", ctx.exception.detail)

    def test_missing_binary_is_tool_unavailable(self) -> None:
        runner = RecordingRunner(error=FileNotFoundError(2, "No such file", "openssl"))
        with self.assertRaises(CipherToolUnavailable):
            OpenSSLCipher(runner=runner).decrypt(Path("/x"), Path("/y"), "pw")

    def test_other_os_error_is_io_failure(self) -> None:
        runner = RecordingRunner(error=PermissionError(13, "Permission denied"))
        with self.assertRaises(IOFailure):
            OpenSSLCipher(runner=runner).encrypt(Path("/x"), Path("/y"), "pw")


class TestOpenSSLWithFakeTool(unittest.TestCase):
    def test_round_trip_and_wrong_password(self) -> None:
        with temp_directory() as tmp:
            openssl = write_fake_openssl_script(tmp)
            plain = tmp / "p.tar"
            plain.write_bytes(b"archive bytes")
            sealed = tmp / "p.aes"
            restored = tmp / "restored.tar"
            env = {ARGV_LOG_ENV: str(tmp / "argv.log"), STDIN_LOG_ENV: str(tmp / "stdin.log")}
            cipher = OpenSSLCipher(str(openssl), runner=ToolRunner())
            with temp_env(env):
                cipher.encrypt(plain, sealed, TEST_PASSWORD)
                cipher.decrypt(sealed, restored, TEST_PASSWORD)
                with self.assertRaises(WrongPassword) as ctx:
                    cipher.decrypt(sealed, tmp / "other.tar", WRONG_PASSWORD)
            self.assertEqual(restored.read_bytes(), b"archive bytes")
            self.assertNotEqual(sealed.read_bytes(), b"archive bytes")
            self.assertNotIn(TEST_PASSWORD, (tmp / "argv.log").read_text(encoding="utf-8"))
            self.assertEqual(
                (tmp / "stdin.log").read_bytes(),
                (TEST_PASSWORD + TEST_PASSWORD + WRONG_PASSWORD).encode("utf-8"),
            )
        self.assertIn("bad decrypt", ctx.exception.detail)

    def test_unrecognized_failure_stays_generic(self) -> None:
        with temp_directory() as tmp:
            openssl = write_fake_openssl_script(tmp)
            source = tmp / "p.aes"
            source.write_bytes(b"not produced by openssl")
            cipher = OpenSSLCipher(str(openssl))
            with self.assertRaises(DecryptionFailed) as ctx:
                cipher.decrypt(source, tmp / "p.tar", TEST_PASSWORD)
        self.assertNotIsInstance(ctx.exception, WrongPassword)
        self.assertIn("bad magic number", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
