#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Platform-specific installer implementations for ERPNext."""

import platform

from erpnext_installer.erpnext_constants import PLATFORM_LINUX

from .base import BaseInstaller
from .linux import LinuxInstaller


def get_platform_installer(ui, debug: bool = False) -> BaseInstaller:
    """Determine the current host platform and return the matching installer."""

    platform_name = platform.system()

    if platform_name == PLATFORM_LINUX:
        return LinuxInstaller(ui, debug)
    else:
        raise NotImplementedError(f"Platform '{platform_name}' is not supported; ERPNext is installed on Linux hosts")


__all__ = [
    "BaseInstaller",
    "LinuxInstaller",
    "get_platform_installer",
]
