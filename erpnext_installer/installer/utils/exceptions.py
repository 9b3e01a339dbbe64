#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Custom exceptions for the ERPNext installer."""

from typing import Optional


class InstallerError(Exception):
    """Base class for installer errors. Any of these ends the run with exit code 1."""

    pass


class PrivilegeError(InstallerError, PermissionError):
    """Raised when the installer is not running with administrative rights."""

    def __init__(self, message: str = "This installer must be run as root (try sudo)."):
        super().__init__(message)


class ToolMissingError(InstallerError):
    """Raised when a required external tool is absent after any install attempt."""

    def __init__(self, tool: str, message: Optional[str] = None):
        super().__init__(message or f"Required tool '{tool}' was not found.")
        self.tool = tool


class ProvisioningError(InstallerError):
    """Raised when the system account or its group membership cannot be set up."""

    def __init__(self, username: str, message: str, remediation: Optional[str] = None):
        text = f"Provisioning account '{username}' failed: {message}"
        if remediation:
            text += f"\n{remediation}"
        super().__init__(text)
        self.username = username
        self.remediation = remediation


class ConfigurationError(InstallerError):
    """Raised for an inconsistent configuration."""

    pass


class ConfigurationRejected(InstallerError):
    """Raised when the user rejects the configuration summary."""

    pass


class DeploymentError(InstallerError):
    """Raised when cloning, compose or the in-container command fails."""

    def __init__(self, stage: str, message: str, recoverable: bool = False):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.recoverable = recoverable


class StageError(InstallerError):
    """Raised when a pipeline stage runs without the state it requires."""

    def __init__(self, stage: str, missing: list):
        super().__init__(f"Stage '{stage}' requires {', '.join(missing)}, which earlier stages did not provide.")
        self.stage = stage
        self.missing = missing
