#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Test doubles for the ERPNext installer: a scripted UI and a simulated platform."""

import os
import shutil
import sys
import tempfile
import unittest
from collections import deque
from typing import Dict, List, Optional, Tuple

# Add the project root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", "..")))

from erpnext_installer.erpnext_common import UserInterfaceMode
from erpnext_installer.erpnext_constants import (
    FRAPPE_DOCKER_REPO_URL,
    LETSENCRYPT_PROXY_REPO_URL,
    LETSENCRYPT_PROXY_SAMPLE_ENV,
)
from erpnext_installer.installer.configs.constants.enums import ComposeFragment
from erpnext_installer.installer.platforms.base import BaseInstaller
from erpnext_installer.installer.ui.shared.installer_ui import InstallerUI
from erpnext_installer.installer.utils.logger_utils import InstallerLogger

# tests assert behavior, not log output
InstallerLogger.set_console_output(False)

MOCK_PASSWORD_HASH = "$6$mocksalt$mockhash"

FRAGMENT_CONTENTS = {
    ComposeFragment.CORE: "version: '3'\nservices:\n  frappe-nginx:\n    image: frappe/frappe-nginx\n  redis-cache:\n    image: redis:latest\n",
    ComposeFragment.APP: "version: '3'\nservices:\n  erpnext-nginx:\n    image: frappe/erpnext-nginx\n  erpnext-python:\n    image: frappe/erpnext-worker\n",
    ComposeFragment.COMMON: "version: '3'\nservices:\n  mariadb:\n    image: mariadb:10.3\n",
    ComposeFragment.NETWORKING: "version: '3'\nnetworks:\n  default:\n    external:\n      name: webproxy\n",
}


class ScriptExhausted(AssertionError):
    """Raised when the code under test asks for more input than the test scripted."""

    pass


class ScriptedUI(InstallerUI):
    """InstallerUI double answering prompts from per-kind queues and recording every prompt.

    ask_string returns the default for a scripted empty answer, as the terminal
    prompt does. choose_one takes 1-based menu numbers and, like the real menu,
    silently re-prompts for numbers outside the list. show_configuration_summary
    takes the literal confirmation reply: empty accepts, anything else rejects.
    """

    def __init__(
        self,
        yes_no=(),
        strings=(),
        passwords=(),
        choices=(),
        confirmations=(),
    ):
        super().__init__(UserInterfaceMode.InteractionInput)
        self.yes_no = deque(yes_no)
        self.strings = deque(strings)
        self.passwords = deque(passwords)
        self.choices = deque(choices)
        self.confirmations = deque(confirmations)
        self.prompts: List[Tuple[str, str]] = []
        self.summaries = []
        self.messages: List[str] = []
        self.errors: List[str] = []

    def _next(self, queue_name: str, prompt: str):
        queue = getattr(self, queue_name)
        if not queue:
            raise ScriptExhausted(f"no scripted {queue_name} answer left for: {prompt}")
        return queue.popleft()

    def prompts_of(self, kind: str) -> List[str]:
        return [prompt for prompt_kind, prompt in self.prompts if prompt_kind == kind]

    def ask_yes_no(self, message: str, default: Optional[bool] = None) -> bool:
        self.prompts.append(("yes_no", message))
        return bool(self._next("yes_no", message))

    def ask_string(self, prompt: str, default: str = "") -> str:
        self.prompts.append(("string", prompt))
        reply = self._next("strings", prompt)
        return reply if reply else default

    def ask_password(self, prompt: str) -> str:
        self.prompts.append(("password", prompt))
        return self._next("passwords", prompt)

    def choose_one(self, prompt: str, choices, default: Optional[str] = None) -> str:
        self.prompts.append(("choice", prompt))
        while True:
            selection = self._next("choices", prompt)
            if isinstance(selection, int) and 1 <= selection <= len(choices):
                return choices[selection - 1][0]

    def display_message(self, message: str) -> None:
        self.messages.append(message)

    def display_error(self, message: str) -> None:
        self.errors.append(message)

    def show_configuration_summary(self, configuration) -> bool:
        self.prompts.append(("summary", configuration.sites))
        self.summaries.append(configuration)
        return self._next("confirmations", "configuration summary") == ""


class MockPlatform(BaseInstaller):
    """Simulated host: records commands and keeps accounts and groups in memory."""

    def __init__(self, ui: Optional[InstallerUI] = None, debug: bool = False):
        super().__init__(ui or ScriptedUI(), debug)
        self.platform = "linux"

        # command execution tracking
        self.executed_commands: List[Dict] = []
        self.command_results: Dict[str, Tuple[int, List[str]]] = {}

        # simulated host state
        self.privileged = True
        self.tools = {"git", "docker", "openssl", "systemctl"}
        self.docker_installed = True
        self.docker_install_succeeds = True
        self.docker_install_attempts = 0
        self.compose_commands = {"docker compose"}
        self.users = set()
        self.groups: Dict[str, set] = {"docker": set()}
        self.created_users: List[Tuple[str, str]] = []
        self.created_groups: List[str] = []
        self.fail_create_user = False
        self.fail_create_group = False

    def set_command_result(self, command_prefix: str, retcode: int, output: Optional[List[str]] = None):
        """Force the result of any command starting with command_prefix."""
        self.command_results[command_prefix] = (retcode, output or [])

    def commands(self) -> List[str]:
        return [entry["command"] for entry in self.executed_commands]

    def commands_starting_with(self, prefix: str) -> List[Dict]:
        return [entry for entry in self.executed_commands if entry["command"].startswith(prefix)]

    def run_process(
        self,
        command,
        privileged=False,
        stdin=None,
        retry=0,
        retry_sleep_sec=5,
        stderr=True,
        cwd=None,
        sensitive=False,
    ):
        cmd_str = " ".join(command) if isinstance(command, list) else command
        self.executed_commands.append(
            {
                "command": cmd_str,
                "stdin": stdin,
                "cwd": cwd,
                "privileged": privileged,
                "sensitive": sensitive,
                "streamed": False,
            }
        )
        return self._simulate(command, cmd_str)

    def run_process_streaming(self, command, cwd=None):
        cmd_str = " ".join(command) if isinstance(command, list) else command
        self.executed_commands.append(
            {"command": cmd_str, "stdin": None, "cwd": cwd, "privileged": False, "sensitive": False, "streamed": True}
        )
        retcode, _ = self._simulate(command, cmd_str)
        return retcode

    def _simulate(self, command, cmd_str):
        for prefix, result in self.command_results.items():
            if cmd_str.startswith(prefix):
                return result

        if cmd_str == "docker info":
            return (0, ["Server: Docker Engine"]) if self.docker_installed else (1, ["Cannot connect to Docker"])
        if cmd_str.endswith(" version") and cmd_str[: -len(" version")] in ("docker compose", "docker-compose"):
            return (0, ["Docker Compose version v2"]) if cmd_str[: -len(" version")] in self.compose_commands else (1, [])
        if cmd_str.startswith("openssl passwd"):
            return 0, [MOCK_PASSWORD_HASH]
        if cmd_str.startswith("git clone"):
            _, _, url, destination = command
            self.simulate_checkout(url, destination)
            return 0, [f"Cloning into '{destination}'..."]
        return 0, []

    @staticmethod
    def simulate_checkout(url: str, destination: str):
        os.makedirs(os.path.join(destination, ".git"), exist_ok=True)
        if url == FRAPPE_DOCKER_REPO_URL:
            for fragment, contents in FRAGMENT_CONTENTS.items():
                fragment_path = os.path.join(destination, fragment.value)
                os.makedirs(os.path.dirname(fragment_path), exist_ok=True)
                with open(fragment_path, "w") as f:
                    f.write(contents)
        elif url == LETSENCRYPT_PROXY_REPO_URL:
            with open(os.path.join(destination, LETSENCRYPT_PROXY_SAMPLE_ENV), "w") as f:
                f.write("NGINX_WEB=nginx-web\nDOCKER_GEN=nginx-gen\n")

    def is_privileged(self) -> bool:
        return self.privileged

    def which(self, tool: str) -> bool:
        if tool == "docker":
            return self.docker_installed
        return tool in self.tools

    def install_docker(self) -> bool:
        self.docker_install_attempts += 1
        if self.docker_install_succeeds:
            self.docker_installed = True
        return self.docker_install_succeeds

    def user_exists(self, username: str) -> bool:
        return username in self.users

    def group_exists(self, group: str) -> bool:
        return group in self.groups

    def user_in_group(self, username: str, group: str) -> bool:
        return username in self.groups.get(group, set())

    def create_user(self, username: str, password_hash: str) -> bool:
        if self.fail_create_user:
            return False
        self.created_users.append((username, password_hash))
        self.users.add(username)
        return True

    def create_group(self, group: str) -> bool:
        if self.fail_create_group:
            return False
        self.created_groups.append(group)
        self.groups[group] = set()
        return True

    def add_user_to_group(self, username: str, group: str) -> bool:
        if group not in self.groups:
            return False
        self.groups[group].add(username)
        return True


class TempDirTestCase(unittest.TestCase):
    """Provides self.temp_dir, removed after each test."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.temp_dir, ignore_errors=True)

    def write_file(self, name: str, contents: str) -> str:
        path = os.path.join(self.temp_dir, name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            f.write(contents)
        return path

    def read_file(self, name: str) -> str:
        with open(os.path.join(self.temp_dir, name)) as f:
            return f.read()
