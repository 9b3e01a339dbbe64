#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Environment file and deployment location arguments for the ERPNext installer
"""

from erpnext_installer.installer.configs.constants.constants import DEFAULT_SYSTEM_USERNAME


def add_environment_args(parser):
    """
    Add environment file and target location arguments to the parser

    Args:
        parser: ArgumentParser to add arguments to
    """
    environment_arg_group = parser.add_argument_group(title="Environment Config Options")

    environment_arg_group.add_argument(
        "--env-file",
        required=False,
        dest="envFile",
        metavar="<path>",
        type=str,
        default=None,
        help="Environment file holding VERSION, MYSQL_ROOT_PASSWORD, SITES and LETSENCRYPT_EMAIL (default: ./.env)",
    )
    environment_arg_group.add_argument(
        "--install-dir",
        required=False,
        dest="installDir",
        metavar="<path>",
        type=str,
        default=None,
        help="Directory the frappe_docker and proxy projects are cloned into (default: current directory)",
    )
    environment_arg_group.add_argument(
        "--username",
        required=False,
        dest="username",
        metavar="<string>",
        type=str,
        default=DEFAULT_SYSTEM_USERNAME,
        help=f"System account offered when asked which account runs ERPNext (default: {DEFAULT_SYSTEM_USERNAME})",
    )
