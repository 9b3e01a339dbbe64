#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Installer-wide constants for compose invocation, accounts and pipeline stages."""

from erpnext_installer.installer.configs.constants.enums import ComposeFragment

# compose invocation
COMPOSE_PROJECT_NAME_FLAG = "--project-name"
COMPOSE_FILE_FLAG = "-f"
COMPOSE_UP_SUBCOMMAND = "up"
COMPOSE_DETACH_FLAG = "-d"
COMPOSE_EXEC_SUBCOMMAND = "exec"
COMPOSE_EXEC_NO_TTY_FLAG = "-T"
COMPOSE_EXEC_ENV_FLAG = "-e"
DEFAULT_PROJECT_NAME = "erpnext_docker"

# fragments always applied, in layering order; networking is appended when enabled
BASE_COMPOSE_FRAGMENTS = (
    ComposeFragment.CORE,
    ComposeFragment.APP,
    ComposeFragment.COMMON,
)

# post-deployment site initialization
SERVICE_NAME_APPLICATION = "erpnext-python"
SITE_INIT_COMMAND = ["docker-entrypoint.sh", "new"]
SITE_INIT_INSTALL_APPS = "erpnext"

# system account
DEFAULT_SYSTEM_USERNAME = "erpnext"
DOCKER_GROUP = "docker"
DEFAULT_LOGIN_SHELL = "/bin/bash"

# pipeline stage names
STAGE_PRIVILEGES = "privileges"
STAGE_VERSION_CONTROL = "version-control"
STAGE_CONTAINER_RUNTIME = "container-runtime"
STAGE_ENVIRONMENT_FILE = "environment-file"
STAGE_CONFIGURATION = "configuration"
STAGE_SYSTEM_ACCOUNT = "system-account"
STAGE_LETSENCRYPT_PROXY = "letsencrypt-proxy"
STAGE_PRIMARY_STACK = "primary-stack"
STAGE_SITE_INITIALIZATION = "site-initialization"
