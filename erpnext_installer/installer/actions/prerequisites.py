#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Checks that must pass before any configuration or deployment happens."""

import os
from typing import List

import requests

from erpnext_installer.erpnext_common import DownloadToFile
from erpnext_installer.erpnext_constants import (
    DOCKER_COMPOSE_INSTALL_URLS,
    DOCKER_INSTALL_URLS,
    ENV_TEMPLATE_URL,
)
from erpnext_installer.installer.utils.exceptions import PrivilegeError, ToolMissingError
from erpnext_installer.installer.utils.logger_utils import InstallerLogger

VERSION_CONTROL_TOOL = "git"
CONTAINER_RUNTIME = "docker"


def require_privileged_execution(platform) -> None:
    if not platform.is_privileged():
        raise PrivilegeError()


def require_version_control_tool(platform) -> None:
    if not platform.which(VERSION_CONTROL_TOOL):
        raise ToolMissingError(
            VERSION_CONTROL_TOOL,
            f"'{VERSION_CONTROL_TOOL}' is required to fetch the deployment projects; install it and try again.",
        )


def require_container_runtime(platform, ui) -> List[str]:
    """Make sure docker and a compose command are usable, returning the compose invocation.

    When docker is missing the user is asked once whether to run the
    get.docker.com convenience script; declining or a failed install ends the run.
    """
    if not platform.is_docker_installed():
        if not ui.ask_yes_no(
            f"{CONTAINER_RUNTIME} was not found. Install it now with the convenience script from get.docker.com?",
            default=True,
        ):
            raise ToolMissingError(
                CONTAINER_RUNTIME,
                f"{CONTAINER_RUNTIME} is required; see {DOCKER_INSTALL_URLS[platform.distro]}",
            )

        InstallerLogger.info(f"Attempting to install {CONTAINER_RUNTIME}")
        if not platform.install_docker():
            InstallerLogger.warning(f"{CONTAINER_RUNTIME} installation reported a failure")

        if not platform.is_docker_installed():
            raise ToolMissingError(
                CONTAINER_RUNTIME,
                f"{CONTAINER_RUNTIME} is still unavailable after the install attempt; "
                f"see {DOCKER_INSTALL_URLS[platform.distro]}",
            )

    compose_command = platform.discover_compose_command(CONTAINER_RUNTIME)
    if not compose_command:
        raise ToolMissingError(
            f"{CONTAINER_RUNTIME} compose",
            f"No compose command found for {CONTAINER_RUNTIME}; see {DOCKER_COMPOSE_INSTALL_URLS[platform.distro]}",
        )
    InstallerLogger.debug(f"Using compose command: {' '.join(compose_command)}")
    return compose_command


def require_environment_file(ui, env_file_path: str) -> bool:
    """Offer to download the template environment file when none exists.

    Never fails; returns True if a file is present afterwards.
    """
    if os.path.isfile(env_file_path):
        return True

    if ui.ask_yes_no(
        f"No environment file found at {env_file_path}. Download the template from {ENV_TEMPLATE_URL}?",
        default=True,
    ):
        try:
            if DownloadToFile(ENV_TEMPLATE_URL, env_file_path, InstallerLogger.is_debug_enabled()):
                InstallerLogger.info(f"Downloaded environment template to {env_file_path}")
            else:
                InstallerLogger.warning(f"Downloaded environment template at {env_file_path} is empty")
        except (requests.RequestException, OSError) as e:
            InstallerLogger.warning(f"Could not download environment template: {e}")

    if not os.path.isfile(env_file_path):
        InstallerLogger.info("Continuing without an environment file; all values will be prompted for")
        return False
    return True
