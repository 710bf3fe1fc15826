"""Tests for sshhooks.cli."""

from __future__ import annotations

import io
import shutil
import stat
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sshhooks.cli import main, sshh_main

_REAL_RUN = subprocess.run


class TestMain(unittest.TestCase):
    """Tests for the main() pipeline."""

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir)
        self.base = Path(self.tmp_dir) / ".ssh"
        self.environ = {"HOME": self.tmp_dir}
        self.calls = []

        def _fake_run(cmd, **kwargs):
            self.calls.append((cmd, kwargs))
            return mock.Mock(returncode=self.exit_code)

        self.exit_code = 0
        # runner and hooks share one subprocess module: patch it once.
        patcher_run = mock.patch("subprocess.run", side_effect=_fake_run)
        patcher_run.start()
        self.addCleanup(patcher_run.stop)
        patcher_stderr = mock.patch("sys.stderr", new_callable=io.StringIO)
        self.stderr = patcher_stderr.start()
        self.addCleanup(patcher_stderr.stop)

    def _hook(self, phase: str, target: str) -> str:
        path = self.base / f"{phase}.d" / target
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n")
        path.chmod(stat.S_IRWXU)
        return str(path)

    def _password(self, target: str, secret: bytes) -> None:
        path = self.base / "sshpass" / target
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(secret)

    def _commands(self):
        return [cmd for cmd, _ in self.calls]

    def test_plain_ssh(self):
        code = main(["-l", "root", "10.0.0.1"], self.environ)
        self.assertEqual(code, 0)
        self.assertEqual(self._commands(), ["ssh -l root 10.0.0.1"])

    def test_pre_and_post_hooks_wrap_ssh(self):
        pre = self._hook("pre", "host2")
        post = self._hook("post", "host2")
        main(["host2"], self.environ)
        self.assertEqual(self._commands(), [[pre], "ssh host2", [post]])

    def test_only_pre_hook(self):
        pre = self._hook("pre", "host2")
        main(["host2"], self.environ)
        self.assertEqual(self._commands(), [[pre], "ssh host2"])

    def test_hooks_run_for_target_not_value(self):
        self._hook("pre", "2222")
        pre = self._hook("pre", "host1")
        main(["-v", "-p", "2222", "host1", "ls"], self.environ)
        self.assertEqual(self._commands(), [[pre], "ssh -v -p 2222 host1 ls"])

    def test_stored_password(self):
        self._password("db1", b"s3cret")
        main(["db1"], self.environ)
        cmd, kwargs = self.calls[0]
        self.assertEqual(cmd, "sshpass -e ssh db1")
        self.assertEqual(kwargs["env"]["SSHPASS"], "s3cret")

    def test_no_target_skips_hooks_and_password(self):
        self._password("-V", b"x")
        self._hook("pre", "-V")
        main(["-V"], self.environ)
        self.assertEqual(self._commands(), ["ssh -V"])
        self.assertNotIn("SSHPASS", self.calls[0][1]["env"])

    def test_empty_args(self):
        main([], self.environ)
        self.assertEqual(self._commands(), ["ssh"])

    def test_ssh_failure_still_runs_post_hook(self):
        post = self._hook("post", "h")
        self.exit_code = 255
        code = main(["h"], self.environ)
        self.assertEqual(code, 255)
        self.assertEqual(self._commands(), ["ssh h", [post]])

    def test_missing_home(self):
        code = main(["host"], {})
        self.assertEqual(code, 1)
        self.assertEqual(self.calls, [])
        self.assertIn("sshh: error: HOME is not set", self.stderr.getvalue())

    def test_quiet_without_verbose(self):
        self._hook("pre", "h")
        main(["h"], self.environ)
        self.assertEqual(self.stderr.getvalue(), "")

    def test_verbose_reports_hook(self):
        self._hook("pre", "h")
        main(["-v", "h"], self.environ)
        self.assertIn("running pre hook", self.stderr.getvalue())

    def test_base_dir_override(self):
        self.base = Path(self.tmp_dir) / "elsewhere"
        pre = self._hook("pre", "h")
        environ = dict(self.environ, SSHH_BASE_DIR=str(self.base))
        main(["h"], environ)
        self.assertEqual(self._commands(), [[pre], "ssh h"])

    def test_sshh_main_exits_with_status(self):
        with mock.patch("sshhooks.cli.main", return_value=3):
            with self.assertRaises(SystemExit) as cm:
                sshh_main()
        self.assertEqual(cm.exception.code, 3)

    def test_nul_password_ignored_and_post_hook_runs(self):
        post = self._hook("post", "db1")
        self._password("db1", b"pw\x00x")
        code = main(["-v", "db1"], self.environ)
        self.assertEqual(code, 0)
        self.assertEqual(self._commands(), ["ssh -v db1", [post]])
        self.assertIn("NUL byte", self.stderr.getvalue())

    def test_absolute_target_stays_under_base(self):
        main(["/bin/true"], self.environ)
        self.assertEqual(self._commands(), ["ssh /bin/true"])

    def test_children_get_given_environment(self):
        pre = self._hook("pre", "db1")
        self._password("db1", b"pw")
        environ = dict(self.environ, ONLY_HERE="1")
        main(["db1"], environ)
        hook_env = self.calls[0][1]["env"]
        ssh_env = self.calls[1][1]["env"]
        self.assertEqual(self.calls[0][0], [pre])
        self.assertEqual(hook_env, environ)
        self.assertEqual(ssh_env, dict(environ, SSHPASS="pw"))
        self.assertNotIn("SSHPASS", environ)

    def test_subprocess_restored_after_cleanup(self):
        self.assertIsNot(subprocess.run, _REAL_RUN)
        self.doCleanups()
        self.assertIs(subprocess.run, _REAL_RUN)


if __name__ == "__main__":
    unittest.main()
