#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Basic ungrouped arguments for the ERPNext installer
"""

from erpnext_installer.erpnext_utils import str2bool


def add_basic_args(parser):
    """
    Add basic ungrouped arguments to the basicArgGroup

    Args:
        parser: ArgumentParser to add arguments to
    """
    basicArgGroup = parser.add_argument_group("Installer Options")

    basicArgGroup.add_argument(
        "--debug",
        "--verbose",
        dest="debug",
        type=str2bool,
        nargs="?",
        metavar="true|false",
        const=True,
        default=False,
        help="Enable debug output, including the commands run and their output",
    )
    basicArgGroup.add_argument(
        "--quiet",
        "--silent",
        action="store_true",
        dest="quiet",
        default=False,
        help="Suppress console logging output during installation",
    )
    basicArgGroup.add_argument(
        "--log-to-file",
        dest="logToFile",
        metavar="filename",
        nargs="?",
        const="",
        default=None,
        help="Log output to file. If no filename provided, creates timestamped log file.",
    )
