#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Installation options and the state handed from one pipeline stage to the next."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from erpnext_installer.erpnext_constants import ENV_FILE_NAME
from erpnext_installer.installer.configs.constants.constants import (
    COMPOSE_FILE_FLAG,
    COMPOSE_PROJECT_NAME_FLAG,
    DEFAULT_SYSTEM_USERNAME,
)
from erpnext_installer.installer.configs.constants.enums import ComposeFragment
from erpnext_installer.installer.core.configuration import Configuration


@dataclass
class InstallContext:
    """Options gathered from the command line; defaults reproduce a bare interactive run."""

    env_file: str = field(default_factory=lambda: os.path.join(os.getcwd(), ENV_FILE_NAME))
    install_dir: str = field(default_factory=os.getcwd)
    default_username: str = DEFAULT_SYSTEM_USERNAME
    debug: bool = False


@dataclass(frozen=True)
class DeployedStack:
    """A running compose project as brought up by the primary-stack stage."""

    project_name: str
    project_dir: str
    compose_command: List[str]
    fragments: List[ComposeFragment]

    @property
    def env_file(self) -> str:
        return os.path.join(self.project_dir, ENV_FILE_NAME)

    def compose_base(self) -> List[str]:
        """Compose invocation prefix selecting this project and its fragments, in order."""
        cmd = list(self.compose_command) + [COMPOSE_PROJECT_NAME_FLAG, self.project_name]
        for fragment in self.fragments:
            cmd.extend([COMPOSE_FILE_FLAG, fragment.value])
        return cmd


@dataclass
class InstallState:
    """Values produced by pipeline stages; a stage's requirements name fields here."""

    configuration: Optional[Configuration] = None
    env_snapshot: Optional[str] = None
    username: Optional[str] = None
    account_created: Optional[bool] = None
    proxy_started: Optional[bool] = None
    compose_command: Optional[List[str]] = None
    stack: Optional[DeployedStack] = None
    completed_stages: List[str] = field(default_factory=list)
