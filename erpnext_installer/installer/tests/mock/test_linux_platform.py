#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Linux installer primitives with process execution patched out."""

import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

import requests

from mock_framework import ScriptedUI

from erpnext_installer.erpnext_constants import DOCKER_CONVENIENCE_SCRIPT_URL
from erpnext_installer.installer.platforms.linux import LinuxInstaller
from erpnext_installer.installer.utils.logger_utils import InstallerLogger


class TestLinuxDistribution(unittest.TestCase):

    @patch("erpnext_installer.installer.platforms.linux.distro.id", return_value="debian")
    def test_distribution_detected(self, mock_id):
        self.assertEqual(LinuxInstaller(ScriptedUI()).distro, "debian")

    @patch("erpnext_installer.installer.platforms.linux.distro.id", return_value="")
    def test_unknown_distribution(self, mock_id):
        self.assertIsNone(LinuxInstaller(ScriptedUI()).distro)


class TestLinuxAccounts(unittest.TestCase):

    def setUp(self):
        self.installer = LinuxInstaller(ScriptedUI())

    def test_create_user_command(self):
        with patch.object(self.installer, "run_process", return_value=(0, [])) as mock_run:
            self.assertTrue(self.installer.create_user("erpnext", "$6$salt$hash"))
        mock_run.assert_called_once_with(
            ["useradd", "--create-home", "--shell", "/bin/bash", "--password", "$6$salt$hash", "erpnext"],
            sensitive=True,
        )

    def test_create_user_failure(self):
        with patch.object(self.installer, "run_process", return_value=(9, ["useradd: user exists"])):
            self.assertFalse(self.installer.create_user("erpnext", "$6$salt$hash"))

    def test_group_commands(self):
        with patch.object(self.installer, "run_process", return_value=(0, [])) as mock_run:
            self.assertTrue(self.installer.create_group("docker"))
            self.assertTrue(self.installer.add_user_to_group("erpnext", "docker"))
        self.assertEqual(mock_run.call_args_list[0][0][0], ["groupadd", "docker"])
        self.assertEqual(mock_run.call_args_list[1][0][0], ["usermod", "-a", "-G", "docker", "erpnext"])

    def test_hash_password_uses_stdin(self):
        with patch.object(self.installer, "run_process", return_value=(0, ["$6$abc$def"])) as mock_run:
            self.assertEqual(self.installer.hash_password("pw"), "$6$abc$def")
        self.assertEqual(mock_run.call_args[0][0], ["openssl", "passwd", "-6", "-stdin"])
        self.assertEqual(mock_run.call_args[1]["stdin"], "pw")

    def test_hash_password_failure(self):
        with patch.object(self.installer, "run_process", return_value=(127, ["not found"])):
            self.assertIsNone(self.installer.hash_password("pw"))


class TestLinuxDockerInstall(unittest.TestCase):

    def setUp(self):
        self.installer = LinuxInstaller(ScriptedUI())

    @patch("erpnext_installer.installer.platforms.linux.which", return_value=True)
    @patch("erpnext_installer.installer.platforms.linux.DownloadToFile", return_value=True)
    def test_convenience_script_then_service(self, mock_download, mock_which):
        with patch.object(self.installer, "is_docker_installed", return_value=False), patch.object(
            self.installer, "run_process", return_value=(0, [])
        ) as mock_run:
            self.assertTrue(self.installer.install_docker())

        self.assertEqual(mock_download.call_args[0][0], DOCKER_CONVENIENCE_SCRIPT_URL)
        commands = [c[0][0] for c in mock_run.call_args_list]
        self.assertTrue(commands[0][0].endswith(".sh"))
        self.assertEqual(commands[1], ["systemctl", "start", "docker"])
        self.assertEqual(commands[2], ["systemctl", "enable", "docker"])
        self.assertEqual(commands[3], ["docker", "info"])

    @patch("erpnext_installer.installer.platforms.linux.DownloadToFile", side_effect=requests.ConnectionError("offline"))
    def test_download_failure(self, mock_download):
        with patch.object(self.installer, "is_docker_installed", return_value=False), patch.object(
            self.installer, "run_process", return_value=(0, [])
        ) as mock_run:
            self.assertFalse(self.installer.install_docker())
        mock_run.assert_not_called()

    def test_already_installed(self):
        with patch.object(self.installer, "is_docker_installed", return_value=True), patch(
            "erpnext_installer.installer.platforms.linux.DownloadToFile"
        ) as mock_download:
            self.assertTrue(self.installer.install_docker())
        mock_download.assert_not_called()


class TestProcessExecution(unittest.TestCase):

    def setUp(self):
        self.installer = LinuxInstaller(ScriptedUI())

    def test_exit_code_and_output(self):
        err, out = self.installer.run_process(["sh", "-c", "echo out; echo err >&2; exit 3"])
        self.assertEqual(err, 3)
        self.assertEqual(out, ["out", "err"])

    def test_stderr_can_be_dropped(self):
        err, out = self.installer.run_process(["sh", "-c", "echo out; echo err >&2"], stderr=False)
        self.assertEqual(err, 0)
        self.assertEqual(out, ["out"])

    def test_stdin_is_passed(self):
        err, out = self.installer.run_process(["cat"], stdin="hello\n")
        self.assertEqual((err, out), (0, ["hello"]))

    def test_missing_command(self):
        err, out = self.installer.run_process(["definitely-not-a-real-command-erpnext"])
        self.assertEqual(err, 127)

    def test_compose_discovery_order(self):
        results = {
            "docker compose version": (1, []),
            "docker-compose version": (0, ["docker-compose version 1.29"]),
        }
        with patch.object(self.installer, "run_process", side_effect=lambda cmd, **kw: results[" ".join(cmd)]):
            self.assertEqual(self.installer.discover_compose_command("docker"), ["docker-compose"])


class TestSecretsStayOutOfLog(unittest.TestCase):

    def setUp(self):
        self.installer = LinuxInstaller(ScriptedUI())
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = os.path.join(self.temp_dir, "install.log")
        InstallerLogger.set_debug_enabled(True)
        InstallerLogger.set_log_file(self.log_file)

    def tearDown(self):
        InstallerLogger.set_log_file(None)
        InstallerLogger.set_debug_enabled(False)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _log_text(self):
        if not os.path.isfile(self.log_file):
            return ""
        with open(self.log_file) as f:
            return f.read()

    def test_sensitive_command_output_not_logged(self):
        err, out = self.installer.run_process(["sh", "-c", "echo '$6$salt$hashvalue'", "--secret-arg"], sensitive=True)
        self.assertEqual(err, 0)
        self.assertEqual(out, ["$6$salt$hashvalue"])
        log_text = self._log_text()
        self.assertIn("Command sh returned 0", log_text)
        self.assertNotIn("hashvalue", log_text)
        self.assertNotIn("--secret-arg", log_text)

    def test_sensitive_missing_command_hides_arguments(self):
        err, out = self.installer.run_process(["definitely-not-a-real-command-erpnext", "$6$salt$hash"], sensitive=True)
        self.assertEqual(err, 127)
        self.assertNotIn("$6$salt$hash", " ".join(out))
        self.assertNotIn("$6$salt$hash", self._log_text())

    def test_ordinary_commands_are_logged(self):
        self.installer.run_process(["sh", "-c", "echo visible-output"])
        self.assertIn("visible-output", self._log_text())

    def test_password_hashing_and_account_creation_are_sensitive(self):
        with patch.object(self.installer, "run_process", return_value=(0, ["$6$abc$def"])) as mock_run:
            self.installer.hash_password("pw")
            self.installer.create_user("erpnext", "$6$abc$def")
        for call in mock_run.call_args_list:
            self.assertTrue(call[1].get("sensitive"))


class TestStreamingExecution(unittest.TestCase):

    def setUp(self):
        self.installer = LinuxInstaller(ScriptedUI())

    def test_exit_code_returned(self):
        self.assertEqual(self.installer.run_process_streaming(["sh", "-c", "exit 4"]), 4)

    def test_runs_in_requested_directory(self):
        temp_dir = os.path.realpath(tempfile.mkdtemp())
        try:
            cmd = ["sh", "-c", '[ "$(pwd -P)" = "$1" ]', "sh", temp_dir]
            self.assertEqual(self.installer.run_process_streaming(cmd, cwd=temp_dir), 0)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    def test_missing_command(self):
        self.assertEqual(self.installer.run_process_streaming(["definitely-not-a-real-command-erpnext"]), 127)


if __name__ == "__main__":
    unittest.main()
