#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Provisioning of the operating system account that runs the deployment."""

from erpnext_installer.installer.configs.constants.constants import DOCKER_GROUP
from erpnext_installer.installer.utils.exceptions import ProvisioningError
from erpnext_installer.installer.utils.logger_utils import InstallerLogger


def ensure_account(platform, ui, username: str, group: str = DOCKER_GROUP) -> bool:
    """Make sure username exists and belongs to group.

    An existing account is reused as is (its password is left alone). A new
    account gets a password entered twice by the user. Group membership is
    checked and granted on every call.

    Returns:
        True if the account was created by this call, False if it already existed
    """
    created = False

    if platform.user_exists(username):
        InstallerLogger.info(f'Account "{username}" already exists, reusing it')
    else:
        password = ui.ask_new_password(f'Password for new account "{username}"')
        password_hash = platform.hash_password(password)
        if not password_hash:
            raise ProvisioningError(
                username,
                "could not hash the password",
                remediation="Make sure openssl is installed, or create the account manually and run again.",
            )
        if not platform.create_user(username, password_hash) or not platform.user_exists(username):
            raise ProvisioningError(
                username,
                "account creation failed",
                remediation=f'Create it manually (e.g. "useradd -m {username}") and run the installer again.',
            )
        InstallerLogger.info(f'Created account "{username}"')
        created = True

    if not platform.group_exists(group):
        if not platform.create_group(group):
            raise ProvisioningError(
                username,
                f'group "{group}" does not exist and could not be created',
                remediation=f'Create it manually (e.g. "groupadd {group}") and run the installer again.',
            )
        InstallerLogger.info(f'Created group "{group}"')

    if platform.user_in_group(username, group):
        InstallerLogger.debug(f'"{username}" is already a member of "{group}"')
    elif not platform.add_user_to_group(username, group):
        raise ProvisioningError(
            username,
            f'could not add the account to group "{group}"',
            remediation=f'Run "usermod -a -G {group} {username}" manually.',
        )
    else:
        InstallerLogger.info(f'Added "{username}" to group "{group}"')

    return created
