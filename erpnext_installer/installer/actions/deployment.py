#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Bringing up the certificate proxy and the ERPNext compose stack, then creating the site."""

import os
import re
import shutil
from typing import List

from ruamel.yaml.error import YAMLError

from erpnext_installer.erpnext_common import LoadYaml
from erpnext_installer.erpnext_constants import (
    FRAPPE_DOCKER_DIR_NAME,
    FRAPPE_DOCKER_REPO_URL,
    LETSENCRYPT_PROXY_DIR_NAME,
    LETSENCRYPT_PROXY_REPO_URL,
    LETSENCRYPT_PROXY_SAMPLE_ENV,
    LETSENCRYPT_PROXY_START_SCRIPT,
    ENV_FILE_NAME,
)
from erpnext_installer.installer.configs.constants.config_env_var_keys import (
    KEY_ENV_INSTALL_APPS,
    KEY_ENV_SITE_NAME,
    KEY_ENV_SITES,
)
from erpnext_installer.installer.configs.constants.constants import (
    BASE_COMPOSE_FRAGMENTS,
    COMPOSE_DETACH_FLAG,
    COMPOSE_EXEC_ENV_FLAG,
    COMPOSE_EXEC_NO_TTY_FLAG,
    COMPOSE_EXEC_SUBCOMMAND,
    COMPOSE_UP_SUBCOMMAND,
    DEFAULT_PROJECT_NAME,
    SERVICE_NAME_APPLICATION,
    SITE_INIT_COMMAND,
    SITE_INIT_INSTALL_APPS,
    STAGE_LETSENCRYPT_PROXY,
    STAGE_PRIMARY_STACK,
    STAGE_SITE_INITIALIZATION,
)
from erpnext_installer.installer.configs.constants.enums import ComposeFragment
from erpnext_installer.installer.core.configuration import Configuration
from erpnext_installer.installer.core.env_file import get_env_value, load_env_file, write_env_text
from erpnext_installer.installer.core.install_context import DeployedStack
from erpnext_installer.installer.utils.exceptions import DeploymentError
from erpnext_installer.installer.utils.logger_utils import InstallerLogger

# compose normalizes project names to this form and rejects anything else
PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


def select_compose_fragments(configuration: Configuration) -> List[ComposeFragment]:
    """Fragments to layer for this configuration; later entries override earlier ones."""
    fragments = list(BASE_COMPOSE_FRAGMENTS)
    if configuration.setup_networking:
        fragments.append(ComposeFragment.NETWORKING)
    return fragments


def _tail(output: List[str], lines: int = 10) -> str:
    return "\n".join(output[-lines:]) if output else "(no output)"


def clone_repository(platform, url: str, destination: str, stage: str, recoverable: bool = False) -> str:
    """Clone url into destination, reusing a checkout that is already there."""
    if os.path.isdir(os.path.join(destination, ".git")):
        InstallerLogger.info(f"Reusing existing checkout at {destination}")
        return destination
    if os.path.isdir(destination) and os.listdir(destination):
        raise DeploymentError(
            stage,
            f"{destination} already exists and is not a git checkout",
            recoverable=recoverable,
        )

    InstallerLogger.info(f"Cloning {url} into {destination}")
    err, out = platform.git_clone(url, destination)
    if err != 0:
        raise DeploymentError(stage, f"cloning {url} failed:\n{_tail(out)}", recoverable=recoverable)
    return destination


def bring_up_letsencrypt_proxy(platform, configuration: Configuration, install_dir: str) -> bool:
    """Start the nginx proxy and Let's Encrypt companion when certificates are wanted.

    Returns False when the configuration does not call for it. Failures raise a
    recoverable DeploymentError.
    """
    if not (configuration.setup_networking and configuration.setup_letsencrypt):
        InstallerLogger.debug("Let's Encrypt proxy not requested")
        return False

    proxy_dir = clone_repository(
        platform,
        LETSENCRYPT_PROXY_REPO_URL,
        os.path.join(install_dir, LETSENCRYPT_PROXY_DIR_NAME),
        STAGE_LETSENCRYPT_PROXY,
        recoverable=True,
    )

    sample_env = os.path.join(proxy_dir, LETSENCRYPT_PROXY_SAMPLE_ENV)
    proxy_env = os.path.join(proxy_dir, ENV_FILE_NAME)
    if os.path.isfile(sample_env) and not os.path.isfile(proxy_env):
        try:
            shutil.copyfile(sample_env, proxy_env)
        except OSError as e:
            raise DeploymentError(STAGE_LETSENCRYPT_PROXY, f"could not create {proxy_env}: {e}", recoverable=True)

    # start.sh output is only kept for the debug log
    err, out = platform.run_process([LETSENCRYPT_PROXY_START_SCRIPT], cwd=proxy_dir)
    if err != 0:
        raise DeploymentError(
            STAGE_LETSENCRYPT_PROXY,
            f"{LETSENCRYPT_PROXY_START_SCRIPT} exited with {err}:\n{_tail(out)}",
            recoverable=True,
        )
    InstallerLogger.info("Let's Encrypt proxy is running")
    return True


def validate_compose_fragments(project_dir: str, fragments: List[ComposeFragment]) -> None:
    """Check each fragment parses as a compose mapping and the application service is defined."""
    services = set()
    for fragment in fragments:
        fragment_path = os.path.join(project_dir, fragment.value)
        if not os.path.isfile(fragment_path):
            raise DeploymentError(STAGE_PRIMARY_STACK, f"composition fragment {fragment.value} is missing")
        try:
            contents = LoadYaml(fragment_path)
        except (YAMLError, OSError) as e:
            raise DeploymentError(STAGE_PRIMARY_STACK, f"composition fragment {fragment.value} is unreadable: {e}")
        if not isinstance(contents, dict):
            raise DeploymentError(STAGE_PRIMARY_STACK, f"composition fragment {fragment.value} is not a mapping")
        if isinstance(contents.get("services"), dict):
            services.update(contents["services"].keys())

    if SERVICE_NAME_APPLICATION not in services:
        raise DeploymentError(
            STAGE_PRIMARY_STACK,
            f'service "{SERVICE_NAME_APPLICATION}" is not defined by the selected composition fragments',
        )


def ask_project_name(ui) -> str:
    while True:
        project_name = (ui.ask_string("Compose project name", default=DEFAULT_PROJECT_NAME) or DEFAULT_PROJECT_NAME).strip()
        if PROJECT_NAME_PATTERN.match(project_name):
            return project_name
        ui.display_error(
            f'"{project_name}" is not a valid project name (lowercase letters, digits, "-" and "_" only)'
        )


def bring_up_primary_stack(
    platform,
    ui,
    configuration: Configuration,
    env_snapshot: str,
    install_dir: str,
    compose_command: List[str],
) -> DeployedStack:
    """Check out frappe_docker, install the saved configuration as its .env and start the stack."""
    project_dir = clone_repository(
        platform,
        FRAPPE_DOCKER_REPO_URL,
        os.path.join(install_dir, FRAPPE_DOCKER_DIR_NAME),
        STAGE_PRIMARY_STACK,
    )

    project_env = os.path.join(project_dir, ENV_FILE_NAME)
    try:
        write_env_text(project_env, env_snapshot)
    except OSError as e:
        raise DeploymentError(STAGE_PRIMARY_STACK, f"could not write {project_env}: {e}")

    project_name = ask_project_name(ui)
    fragments = select_compose_fragments(configuration)
    validate_compose_fragments(project_dir, fragments)

    stack = DeployedStack(
        project_name=project_name,
        project_dir=project_dir,
        compose_command=list(compose_command),
        fragments=fragments,
    )

    InstallerLogger.info(f'Starting compose project "{project_name}" ({len(fragments)} fragments)')
    # compose prints image pull progress straight to the terminal
    err = platform.run_process_streaming(
        stack.compose_base() + [COMPOSE_UP_SUBCOMMAND, COMPOSE_DETACH_FLAG], cwd=project_dir
    )
    if err != 0:
        raise DeploymentError(STAGE_PRIMARY_STACK, f"compose up exited with {err} (see the output above)")

    return stack


def build_site_init_command(stack: DeployedStack, sites: str) -> List[str]:
    return (
        stack.compose_base()
        + [
            COMPOSE_EXEC_SUBCOMMAND,
            COMPOSE_EXEC_NO_TTY_FLAG,
            COMPOSE_EXEC_ENV_FLAG,
            f"{KEY_ENV_SITE_NAME}={sites}",
            COMPOSE_EXEC_ENV_FLAG,
            f"{KEY_ENV_INSTALL_APPS}={SITE_INIT_INSTALL_APPS}",
            SERVICE_NAME_APPLICATION,
        ]
        + SITE_INIT_COMMAND
    )


def run_post_deploy_init(platform, stack: DeployedStack) -> None:
    """Create the site inside the running application container.

    The site name is read back from the deployed .env so edits made there
    since the configuration was saved are honored.
    """
    sites = get_env_value(load_env_file(stack.env_file), KEY_ENV_SITES)
    if not sites:
        raise DeploymentError(STAGE_SITE_INITIALIZATION, f"{KEY_ENV_SITES} is not set in {stack.env_file}")

    InstallerLogger.info(f"Creating site {sites}")
    err, out = platform.run_process(build_site_init_command(stack, sites), cwd=stack.project_dir)
    if err != 0:
        raise DeploymentError(STAGE_SITE_INITIALIZATION, f"site initialization exited with {err}:\n{_tail(out)}")
