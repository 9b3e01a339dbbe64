#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.


from enum import Enum, auto


# Used primarily for getting status from discrete stages during the installer and subsequently logging
class InstallerResult(Enum):
    """Return status for an installation stage."""

    SUCCESS = auto()
    FAILURE = auto()
    SKIPPED = auto()


class InstallVersion(Enum):
    """Release channels offered by the version menu, in menu order."""

    EDGE = "edge"
    VERSION_13 = "version-13"
    VERSION_12 = "version-12"

    @classmethod
    def from_value(cls, value):
        """Return the member for a persisted VERSION value, or None if unrecognized."""
        for member in cls:
            if member.value == str(value or "").strip():
                return member
        return None


class ComposeFragment(Enum):
    """Composition fragments, valued by their path inside the frappe_docker checkout."""

    CORE = "installation/docker-compose-frappe.yml"
    APP = "installation/docker-compose-erpnext.yml"
    COMMON = "installation/docker-compose-common.yml"
    NETWORKING = "installation/docker-compose-networks.yml"
