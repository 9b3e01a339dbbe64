#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Linux-specific installer implementation for ERPNext."""

import os

import distro
import requests

from erpnext_installer.erpnext_utils import which, temporary_filename
from erpnext_installer.erpnext_common import DownloadToFile
from erpnext_installer.erpnext_constants import DOCKER_CONVENIENCE_SCRIPT_URL, PLATFORM_LINUX
from erpnext_installer.installer.configs.constants.constants import DEFAULT_LOGIN_SHELL
from erpnext_installer.installer.utils.logger_utils import InstallerLogger

from .base import BaseInstaller


class LinuxInstaller(BaseInstaller):
    """Linux-specific ERPNext installer implementation."""

    def __init__(self, ui, debug: bool = False):
        """Initialize the Linux installer."""
        super().__init__(ui, debug)
        self.distro = distro.id() or None

        if self.debug:
            InstallerLogger.debug(f"{PLATFORM_LINUX} installer initialized for {self.distro or 'unknown distribution'}")

    def install_docker(self) -> bool:
        """Install Docker with the convenience script, then start its service."""
        if self.is_docker_installed():
            return True

        InstallerLogger.info(
            "Attempting to install Docker via convenience script (see https://github.com/docker/docker-install)"
        )
        if not self._install_docker_convenience_script():
            return False

        self._configure_docker_service()

        err, out = self.run_process(["docker", "info"], retry=6, retry_sleep_sec=5)
        if err != 0:
            InstallerLogger.error(f"Docker installation verification failed: {out}")
        return err == 0

    def _install_docker_convenience_script(self) -> bool:
        """Install Docker using the convenience script from get.docker.com."""
        try:
            with temporary_filename('.sh') as temp_filename:
                if DownloadToFile(DOCKER_CONVENIENCE_SCRIPT_URL, temp_filename, self.debug):
                    os.chmod(temp_filename, 0o755)
                    err, out = self.run_process([temp_filename])
                    if err == 0:
                        InstallerLogger.info("Docker installation via convenience script succeeded")
                        return True
                    else:
                        InstallerLogger.error(f"Docker installation via convenience script failed: {out}")
        except (requests.RequestException, OSError) as e:
            InstallerLogger.error(f"Failed to download or execute Docker convenience script: {e}")
        return False

    def _configure_docker_service(self):
        """Start and enable the Docker service on systemd systems."""
        if which('systemctl'):
            err, out = self.run_process(["systemctl", "start", "docker"])
            if err == 0:
                err, out = self.run_process(["systemctl", "enable", "docker"])
                if err != 0:
                    InstallerLogger.error(f"Enabling Docker service failed: {out}")
            else:
                InstallerLogger.error(f"Starting Docker service failed: {out}")

    def create_user(self, username: str, password_hash: str) -> bool:
        err, out = self.run_process(
            ["useradd", "--create-home", "--shell", DEFAULT_LOGIN_SHELL, "--password", password_hash, username],
            sensitive=True,
        )
        if err != 0:
            InstallerLogger.error(f'Creating account "{username}" failed: {out}')
        return err == 0

    def create_group(self, group: str) -> bool:
        err, out = self.run_process(["groupadd", group])
        if err != 0:
            InstallerLogger.error(f'Creating group "{group}" failed: {out}')
        return err == 0

    def add_user_to_group(self, username: str, group: str) -> bool:
        err, out = self.run_process(["usermod", "-a", "-G", group, username])
        if err == 0:
            if self.debug:
                InstallerLogger.info(f'Adding {username} to "{group}" group succeeded')
        else:
            InstallerLogger.error(f'Adding {username} to "{group}" group failed: {out}')
        return err == 0
