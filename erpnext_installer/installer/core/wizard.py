#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Interactive negotiation of the deployment configuration.

The wizard is a fixed sequence of prompts:

1. load defaults from the environment file
2. networking yes/no (no forces certificates off)
3. certificates yes/no, offered only with networking and a known email
4. version, a closed numbered menu
5. confirmation loop over password, sites and (with certificates) email,
   ending when the user accepts the summary
6. persist the confirmed values and keep the written text as a snapshot
"""

from dataclasses import dataclass

from erpnext_installer.installer.configs.constants.config_env_var_keys import (
    KEY_ENV_LETSENCRYPT_EMAIL,
    KEY_ENV_MYSQL_ROOT_PASSWORD,
    KEY_ENV_SITES,
    KEY_ENV_VERSION,
)
from erpnext_installer.installer.configs.constants.enums import InstallVersion
from erpnext_installer.installer.core.configuration import Configuration
from erpnext_installer.installer.core.env_file import EnvironmentFile, save_env_file
from erpnext_installer.installer.utils.exceptions import ConfigurationRejected
from erpnext_installer.installer.utils.logger_utils import InstallerLogger

VERSION_DESCRIPTIONS = {
    InstallVersion.EDGE: "latest development images",
    InstallVersion.VERSION_13: "stable release 13",
    InstallVersion.VERSION_12: "stable release 12",
}


@dataclass(frozen=True)
class WizardDefaults:
    """Values found in the environment file before any prompting; empty when absent."""

    install_version: str = ""
    mysql_root_password: str = ""
    sites: str = ""
    letsencrypt_email: str = ""


@dataclass(frozen=True)
class WizardOutcome:
    configuration: Configuration
    env_snapshot: str


class ConfigurationWizard:
    def __init__(self, ui, env_file_path: str):
        self.ui = ui
        self.env_file_path = env_file_path

    def load_defaults(self) -> WizardDefaults:
        env = EnvironmentFile.load(self.env_file_path)
        defaults = WizardDefaults(
            install_version=env.get(KEY_ENV_VERSION),
            mysql_root_password=env.get(KEY_ENV_MYSQL_ROOT_PASSWORD),
            sites=env.get(KEY_ENV_SITES),
            letsencrypt_email=env.get(KEY_ENV_LETSENCRYPT_EMAIL),
        )
        InstallerLogger.debug(
            f"Loaded defaults from {self.env_file_path}: version={defaults.install_version!r}, "
            f"sites={defaults.sites!r}, email={defaults.letsencrypt_email!r}, "
            f"password {'present' if defaults.mysql_root_password else 'absent'}"
        )
        return defaults

    def ask_networking(self) -> bool:
        return self.ui.ask_yes_no("Set up externally reachable networking (nginx proxy network)?")

    def ask_letsencrypt(self, setup_networking: bool, default_email: str) -> bool:
        """Offer certificate automation; without networking or a known email the answer is no."""
        if not setup_networking:
            return False
        if not default_email:
            InstallerLogger.debug("No Let's Encrypt email on file, certificate setup not offered")
            return False
        return self.ui.ask_yes_no(f"Set up Let's Encrypt certificates (contact email {default_email})?")

    def choose_version(self) -> InstallVersion:
        choices = [(version.value, VERSION_DESCRIPTIONS[version]) for version in InstallVersion]
        while True:
            version = InstallVersion.from_value(self.ui.choose_one("Select the ERPNext version to install", choices))
            if version is not None:
                return version

    def _ask_secret(self, label: str, current: str) -> str:
        if current:
            reply = self.ui.ask_password(f"{label} (leave blank to keep the current value)")
            return reply or current
        reply = ""
        while not reply:
            reply = self.ui.ask_password(label)
        return reply

    def _ask_value(self, label: str, current: str) -> str:
        if current:
            return self.ui.ask_string(label, default=current) or current
        reply = ""
        while not reply:
            reply = self.ui.ask_string(label, default="").strip()
        return reply

    def confirm(self, draft: Configuration) -> Configuration:
        """Loop over the editable fields until the user accepts the summary.

        Values entered in one pass become the defaults of the next.
        """
        attempt = 0
        while True:
            attempt += 1
            password = self._ask_secret("MySQL root password", draft.mysql_root_password)
            sites = self._ask_value("Site name(s)", draft.sites)
            email = draft.letsencrypt_email
            if draft.setup_letsencrypt:
                email = self._ask_value("Let's Encrypt email", draft.letsencrypt_email)
            draft = draft.with_values(mysql_root_password=password, sites=sites, letsencrypt_email=email)
            try:
                return self.review(draft)
            except ConfigurationRejected as e:
                InstallerLogger.debug(f"{e} (pass {attempt}), asking again")

    def review(self, configuration: Configuration) -> Configuration:
        if not self.ui.show_configuration_summary(configuration):
            raise ConfigurationRejected("Configuration was not accepted")
        return configuration

    def persist(self, configuration: Configuration) -> str:
        return save_env_file(self.env_file_path, configuration.to_env_values())

    def run(self) -> WizardOutcome:
        defaults = self.load_defaults()
        setup_networking = self.ask_networking()
        setup_letsencrypt = self.ask_letsencrypt(setup_networking, defaults.letsencrypt_email)
        install_version = self.choose_version()

        draft = Configuration(
            install_version=install_version,
            mysql_root_password=defaults.mysql_root_password,
            sites=defaults.sites,
            letsencrypt_email=defaults.letsencrypt_email if setup_letsencrypt else "",
            setup_networking=setup_networking,
            setup_letsencrypt=setup_letsencrypt,
        )
        configuration = self.confirm(draft)
        snapshot = self.persist(configuration)
        InstallerLogger.info(f"Configuration saved to {self.env_file_path}")
        return WizardOutcome(configuration=configuration, env_snapshot=snapshot)
