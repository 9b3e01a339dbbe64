#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Utility helpers shared by the installer stages and UI implementations.
"""

from .logger_utils import InstallerLogger

from .exceptions import (
    ConfigurationError,
    ConfigurationRejected,
    DeploymentError,
    InstallerError,
    PrivilegeError,
    ProvisioningError,
    StageError,
    ToolMissingError,
)

__all__ = [
    "InstallerLogger",
    "ConfigurationError",
    "ConfigurationRejected",
    "DeploymentError",
    "InstallerError",
    "PrivilegeError",
    "ProvisioningError",
    "StageError",
    "ToolMissingError",
]
