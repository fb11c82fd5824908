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

import importlib
import os
import shutil
import sys
import unittest
from unittest import mock

from typer.testing import CliRunner

from foldcrypt.cli import app
from foldcrypt.cli.flows.job import _report
from foldcrypt.config import OPENSSL_PATH_ENV, TAR_PATH_ENV
from foldcrypt.core import InvalidSource, JobResult, Mode
from tests.test_support import (
    STDIN_LOG_ENV,
    TEST_PASSWORD,
    WRONG_PASSWORD,
    make_tree,
    snapshot_tree,
    temp_directory,
    temp_env,
    write_fake_openssl_script,
)

# The package re-exports the Typer object as `app`, hiding the module of that name.
_APP_MODULE = importlib.import_module("foldcrypt.cli.app")
_HAS_UNIX_TOOLS = os.name == "posix" and sys.platform != "cygwin" and shutil.which("tar")


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        patcher = mock.patch.object(_APP_MODULE, "run_startup", return_value=False)
        self.run_startup = patcher.start()
        self.addCleanup(patcher.stop)

    def invoke(self, args: list[str], **kwargs):
        return self.runner.invoke(app, ["--no-color", "--no-animations", *args], **kwargs)


def _flat(output: str) -> str:
    return " ".join(output.split())


class TestCliBasics(CliTestCase):
    def test_help_lists_commands(self) -> None:
        result = self.runner.invoke(app, ["--help"])
        self.assertEqual(result.exit_code, 0)
        for command in ("encrypt", "decrypt", "backend"):
            self.assertIn(command, result.output)

    def test_version(self) -> None:
        result = self.runner.invoke(app, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("foldcrypt", _flat(result.output))

    def test_no_subcommand_is_an_error(self) -> None:
        result = self.invoke([])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("foldcrypt --help", _flat(result.output))

    def test_init_config_exits_after_startup(self) -> None:
        self.run_startup.return_value = True
        result = self.invoke(["--init-config"])
        self.assertEqual(result.exit_code, 0)
        self.assertTrue(self.run_startup.call_args.kwargs["init_config"])

    def test_missing_config_file(self) -> None:
        with temp_directory() as tmp:
            result = self.invoke(
                ["--config", str(tmp / "nope.toml"), "encrypt", str(tmp)], input="pw\n"
            )
        self.assertEqual(result.exit_code, 2)
        self.assertIn("config file not found", _flat(result.output))


class TestReport(unittest.TestCase):
    def test_failure_without_error_still_exits_nonzero(self) -> None:
        result = JobResult(mode=Mode.DECRYPT, ok=False, message="interrupted")
        self.assertEqual(_report(result, quiet=True, debug=False), 2)

    def test_failure_with_error(self) -> None:
        result = JobResult.failure(Mode.ENCRYPT, InvalidSource("Folder 'x' does not exist"))
        self.assertEqual(_report(result, quiet=True, debug=False), 2)


@unittest.skipUnless(_HAS_UNIX_TOOLS, "requires a Unix host with tar")
class TestCliJobs(CliTestCase):
    def _env(self, tmp) -> dict[str, str]:
        bin_dir = tmp / "bin"
        bin_dir.mkdir()
        return {
            "XDG_CONFIG_HOME": str(tmp / "config"),
            OPENSSL_PATH_ENV: str(write_fake_openssl_script(bin_dir)),
            TAR_PATH_ENV: "",
            STDIN_LOG_ENV: str(tmp / "stdin.log"),
        }

    def test_encrypt_then_decrypt(self) -> None:
        with temp_directory() as tmp:
            work = tmp / "work"
            make_tree(
                work / "project", {"a.txt": "hello", "sub/b.bin": b"\x00\x01"}, dirs=["empty"]
            )
            before = snapshot_tree(work / "project")
            with temp_env(self._env(tmp)):
                encrypted = self.invoke(
                    ["encrypt", str(work / "project")], input=TEST_PASSWORD + "\n"
                )
                self.assertEqual(encrypted.exit_code, 0, encrypted.output)
                self.assertTrue((work / "project.aes").is_file())
                self.assertFalse((work / "project.tar").exists())
                shutil.rmtree(work / "project")

                decrypted = self.invoke(
                    ["decrypt", str(work / "project.aes"), "--password-stdin"],
                    input=TEST_PASSWORD + "\n",
                )
                self.assertEqual(decrypted.exit_code, 0, decrypted.output)
            self.assertEqual(snapshot_tree(work / "project"), before)
            self.assertFalse((work / "project.tar").exists())
            self.assertEqual((tmp / "stdin.log").read_bytes(), (TEST_PASSWORD * 2).encode("utf-8"))
        self.assertIn("Encrypted", encrypted.output)
        self.assertIn("Decrypted", decrypted.output)

    def test_wrong_password_exit_code_and_hint(self) -> None:
        with temp_directory() as tmp:
            work = tmp / "work"
            make_tree(work / "project", {"a.txt": "hello"})
            with temp_env(self._env(tmp)):
                self.invoke(["encrypt", str(work / "project")], input=TEST_PASSWORD + "\n")
                shutil.rmtree(work / "project")
                result = self.invoke(
                    ["decrypt", str(work / "project.aes")], input=WRONG_PASSWORD + "\n"
                )
            self.assertFalse((work / "project").exists())
            self.assertFalse((work / "project.tar").exists())
        self.assertEqual(result.exit_code, 2)
        self.assertIn("incorrect password", _flat(result.output))
        self.assertIn("Check the password", _flat(result.output))
        self.assertNotIn(WRONG_PASSWORD + "\n", result.output)

    def test_debug_logs_commands_without_password(self) -> None:
        with temp_directory() as tmp:
            make_tree(tmp / "work" / "project", {"a.txt": "hello"})
            with temp_env(self._env(tmp)):
                result = self.invoke(
                    ["--debug", "encrypt", str(tmp / "work" / "project")],
                    input="hunter2-secret\n",
                )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("-pbkdf2", _flat(result.output))
        self.assertIn("stage: enciphering", _flat(result.output))
        self.assertNotIn("hunter2-secret", result.output)

    def test_missing_folder(self) -> None:
        with temp_directory() as tmp:
            with temp_env(self._env(tmp)):
                result = self.invoke(["encrypt", str(tmp / "nope")], input="pw\n")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("does not exist", _flat(result.output))

    def test_backend_reports_missing_tool(self) -> None:
        with temp_directory() as tmp:
            env = self._env(tmp)
            env[TAR_PATH_ENV] = "definitely-not-a-tar-binary"
            with temp_env(env):
                result = self.invoke(["backend"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("not found", _flat(result.output))
        self.assertIn("tar+external-cipher", _flat(result.output))


if __name__ == "__main__":
    unittest.main()
