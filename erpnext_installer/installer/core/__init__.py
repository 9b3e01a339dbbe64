#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Core components for the ERPNext installer.

This module contains the environment file codec, the configuration model and
wizard, the installation context and the staged pipeline runner.
"""

from .env_file import EnvironmentFile, load_env_file, save_env_file
from .configuration import Configuration
from .install_context import DeployedStack, InstallContext, InstallState
from .wizard import ConfigurationWizard, WizardOutcome
from .pipeline import InstallStage, run_stages

__all__ = [
    "EnvironmentFile",
    "load_env_file",
    "save_env_file",
    "Configuration",
    "DeployedStack",
    "InstallContext",
    "InstallState",
    "ConfigurationWizard",
    "WizardOutcome",
    "InstallStage",
    "run_stages",
]
