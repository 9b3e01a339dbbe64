#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""The confirmed deployment settings negotiated by the configuration wizard."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, replace

from erpnext_installer.installer.configs.constants.config_env_var_keys import (
    KEY_ENV_LETSENCRYPT_EMAIL,
    KEY_ENV_MYSQL_ROOT_PASSWORD,
    KEY_ENV_SITES,
    KEY_ENV_VERSION,
)
from erpnext_installer.installer.configs.constants.enums import InstallVersion
from erpnext_installer.installer.core.env_file import render_env
from erpnext_installer.installer.utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class Configuration:
    """Immutable settings for one deployment.

    setup_letsencrypt implies setup_networking; construction fails otherwise.
    """

    install_version: InstallVersion
    mysql_root_password: str
    sites: str
    letsencrypt_email: str = ""
    setup_networking: bool = False
    setup_letsencrypt: bool = False

    def __post_init__(self):
        if not isinstance(self.install_version, InstallVersion):
            raise ConfigurationError(f"Unknown install version: {self.install_version!r}")
        if self.setup_letsencrypt and not self.setup_networking:
            raise ConfigurationError("Let's Encrypt certificates require networking to be set up")
        if self.setup_letsencrypt and not self.letsencrypt_email:
            raise ConfigurationError("Let's Encrypt certificates require an email address")

    def with_values(self, **changes) -> "Configuration":
        return replace(self, **changes)

    def to_env_values(self) -> "OrderedDict[str, str]":
        """The .env lines for this configuration; the email line only when certificates are enabled."""
        values = OrderedDict(
            [
                (KEY_ENV_VERSION, self.install_version.value),
                (KEY_ENV_MYSQL_ROOT_PASSWORD, self.mysql_root_password),
                (KEY_ENV_SITES, self.sites),
            ]
        )
        if self.setup_letsencrypt:
            values[KEY_ENV_LETSENCRYPT_EMAIL] = self.letsencrypt_email
        return values

    def render_env(self) -> str:
        return render_env(self.to_env_values())
