#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Base installer class for platform-specific ERPNext installers."""

import abc
import grp
import platform
import pwd
import subprocess
import time
from typing import List, Optional, Tuple

from erpnext_installer.erpnext_utils import (
    flatten,
    get_iterable,
    is_privileged,
    which,
)

from erpnext_installer.installer.actions import deployment, prerequisites, system_user
from erpnext_installer.installer.configs.constants.constants import (
    STAGE_CONFIGURATION,
    STAGE_CONTAINER_RUNTIME,
    STAGE_ENVIRONMENT_FILE,
    STAGE_LETSENCRYPT_PROXY,
    STAGE_PRIMARY_STACK,
    STAGE_PRIVILEGES,
    STAGE_SITE_INITIALIZATION,
    STAGE_SYSTEM_ACCOUNT,
    STAGE_VERSION_CONTROL,
)
from erpnext_installer.installer.configs.constants.enums import InstallerResult
from erpnext_installer.installer.core.install_context import InstallContext, InstallState
from erpnext_installer.installer.core.pipeline import InstallStage, run_stages
from erpnext_installer.installer.core.wizard import ConfigurationWizard
from erpnext_installer.installer.utils.logger_utils import InstallerLogger


class BaseInstaller(abc.ABC):
    """Abstract base class for platform-specific ERPNext installers.

    Subclasses provide the operating-system specific primitives (container
    runtime installation, account and group management); this class owns
    process execution, the collaborator checks shared by all platforms and
    the ordered stage list.
    """

    def __init__(self, ui, debug: bool = False):
        """Initialize the base installer.

        Args:
            ui: User interface implementation for user interactions
            debug: Enable debug output
        """
        self.ui = ui
        self.debug = debug
        self.platform = platform.system().lower()
        # distribution id (e.g. "ubuntu"); set by platforms that have one
        self.distro = None

    @abc.abstractmethod
    def install_docker(self) -> bool:
        """Install Docker/container runtime on this platform

        Returns:
            True if successful, False otherwise
        """
        pass

    @abc.abstractmethod
    def create_user(self, username: str, password_hash: str) -> bool:
        """Create a login account with the given pre-hashed password."""
        pass

    @abc.abstractmethod
    def create_group(self, group: str) -> bool:
        pass

    @abc.abstractmethod
    def add_user_to_group(self, username: str, group: str) -> bool:
        """Grant supplementary group membership; granting twice must be harmless."""
        pass

    def run_process(
        self,
        command: List[str],
        privileged: bool = False,
        stdin: str = None,
        retry: int = 0,
        retry_sleep_sec: int = 5,
        stderr: bool = True,
        cwd: Optional[str] = None,
        sensitive: bool = False,
    ) -> Tuple[int, List[str]]:
        """Run a system process with optional privilege escalation.

        With sensitive=True the arguments and output are kept out of the log
        and out of error messages; only the program name and exit code appear.
        """
        if privileged and not is_privileged():
            command = ["sudo"] + list(command)

        retcode = -1
        output = []
        flat_command = list(flatten(get_iterable(command)))
        display_command = flat_command[0] if sensitive and flat_command else " ".join(flat_command)

        for i in range(retry + 1):
            try:
                process = subprocess.run(
                    flat_command,
                    input=stdin if stdin else None,
                    capture_output=True,
                    check=False,
                    text=True,
                    errors="ignore",
                    cwd=cwd,
                )
                retcode = process.returncode
                output = []
                if process.stdout:
                    output.extend(process.stdout.splitlines())
                if stderr and process.stderr:
                    output.extend(process.stderr.splitlines())
                if retcode == 0:
                    break
            except FileNotFoundError:
                output = [f"Command {display_command} not found or unable to execute"]
                retcode = 127
                break
            except OSError as e:
                output = [f"Error executing command {display_command}: {e}"]
                retcode = 1

            if i < retry:
                InstallerLogger.warning(
                    f"Command failed (attempt {i+1}/{retry+1}). Retrying in {retry_sleep_sec} seconds..."
                )
                time.sleep(retry_sleep_sec)

        if sensitive:
            InstallerLogger.debug(f"Command {display_command} returned {retcode} (arguments and output not logged)")
        else:
            InstallerLogger.debug(f"Command {display_command} returned {retcode}: {output}")

        return retcode, output

    def run_process_streaming(self, command: List[str], cwd: Optional[str] = None) -> int:
        """Run a system process with its output going straight to the terminal."""
        flat_command = list(flatten(get_iterable(command)))

        InstallerLogger.debug(f"Running streaming command: {' '.join(flat_command)}")

        try:
            result = subprocess.run(flat_command, check=False, text=True, cwd=cwd)
            return result.returncode
        except FileNotFoundError:
            InstallerLogger.error(f"Command not found: {' '.join(flat_command)}")
            return 127
        except OSError as e:
            InstallerLogger.error(f"Error executing command {' '.join(flat_command)}: {e}")
            return 1

    def is_privileged(self) -> bool:
        return is_privileged()

    def which(self, tool: str) -> bool:
        return which(tool, debug=self.debug)

    def is_docker_installed(self) -> bool:
        """Return True if Docker CLI and daemon are accessible.

        A zero return code from "docker info" is treated as a working
        installation.
        """
        if not self.which("docker"):
            return False
        err, _ = self.run_process(["docker", "info"], stderr=False)
        return err == 0

    def discover_compose_command(self, runtime_bin: str = "docker") -> Optional[List[str]]:
        """Return a working compose invocation list for the given runtime."""
        candidates = [[runtime_bin, "compose"], [f"{runtime_bin}-compose"]]
        for cmd in candidates:
            rc, _ = self.run_process(cmd + ["version"], stderr=False)
            if rc == 0:
                return cmd
        return None

    def git_clone(self, url: str, destination: str) -> Tuple[int, List[str]]:
        return self.run_process(["git", "clone", url, destination])

    def user_exists(self, username: str) -> bool:
        try:
            pwd.getpwnam(username)
            return True
        except KeyError:
            return False

    def group_exists(self, group: str) -> bool:
        try:
            grp.getgrnam(group)
            return True
        except KeyError:
            return False

    def user_in_group(self, username: str, group: str) -> bool:
        try:
            group_entry = grp.getgrnam(group)
        except KeyError:
            return False
        if username in group_entry.gr_mem:
            return True
        try:
            return pwd.getpwnam(username).pw_gid == group_entry.gr_gid
        except KeyError:
            return False

    def hash_password(self, password: str) -> Optional[str]:
        """Return a SHA-512 crypt hash of password, or None if openssl fails."""
        err, out = self.run_process(
            ["openssl", "passwd", "-6", "-stdin"], stdin=password, stderr=False, sensitive=True
        )
        if err == 0 and out and out[0].strip():
            return out[0].strip()
        return None

    def build_stages(self, ctx: InstallContext) -> List[InstallStage]:
        """The ordered installation stages for this platform."""
        def privileges(state: InstallState):
            prerequisites.require_privileged_execution(self)

        def version_control(state: InstallState):
            prerequisites.require_version_control_tool(self)

        def container_runtime(state: InstallState):
            state.compose_command = prerequisites.require_container_runtime(self, self.ui)

        def environment_file(state: InstallState):
            if prerequisites.require_environment_file(self.ui, ctx.env_file):
                return InstallerResult.SUCCESS
            return InstallerResult.SKIPPED

        def configuration(state: InstallState):
            outcome = ConfigurationWizard(self.ui, ctx.env_file).run()
            state.configuration = outcome.configuration
            state.env_snapshot = outcome.env_snapshot

        def system_account(state: InstallState):
            username = self.ui.ask_string("System account to run ERPNext", default=ctx.default_username)
            state.username = username or ctx.default_username
            state.account_created = system_user.ensure_account(self, self.ui, state.username)

        def letsencrypt_proxy(state: InstallState):
            state.proxy_started = deployment.bring_up_letsencrypt_proxy(self, state.configuration, ctx.install_dir)
            return InstallerResult.SUCCESS if state.proxy_started else InstallerResult.SKIPPED

        def primary_stack(state: InstallState):
            state.stack = deployment.bring_up_primary_stack(
                self,
                self.ui,
                state.configuration,
                state.env_snapshot,
                ctx.install_dir,
                state.compose_command,
            )

        def site_initialization(state: InstallState):
            deployment.run_post_deploy_init(self, state.stack)

        return [
            InstallStage(STAGE_PRIVILEGES, privileges),
            InstallStage(STAGE_VERSION_CONTROL, version_control),
            InstallStage(STAGE_CONTAINER_RUNTIME, container_runtime),
            InstallStage(STAGE_ENVIRONMENT_FILE, environment_file),
            InstallStage(STAGE_CONFIGURATION, configuration),
            InstallStage(STAGE_SYSTEM_ACCOUNT, system_account, requires=("configuration",)),
            InstallStage(
                STAGE_LETSENCRYPT_PROXY,
                letsencrypt_proxy,
                requires=("configuration",),
                recoverable=True,
            ),
            InstallStage(
                STAGE_PRIMARY_STACK,
                primary_stack,
                requires=("configuration", "env_snapshot", "username", "compose_command"),
            ),
            InstallStage(STAGE_SITE_INITIALIZATION, site_initialization, requires=("stack",)),
        ]

    def install(self, ctx: InstallContext) -> InstallState:
        """Execute the full installation flow for this platform.

        Raises an InstallerError subclass on the first fatal failure; nothing
        that already ran is rolled back.
        """
        state = InstallState()
        run_stages(self.build_stages(ctx), state)
        return state
