#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.


"""Build and format configuration summaries for UI display."""

from typing import List, Tuple

MASKED_VALUE = "********"

SUMMARY_LABEL_VERSION = "ERPNext Version"
SUMMARY_LABEL_PASSWORD = "MySQL Root Password"
SUMMARY_LABEL_SITES = "Sites"
SUMMARY_LABEL_NETWORKING = "Set Up Networking"
SUMMARY_LABEL_LETSENCRYPT = "Set Up Let's Encrypt"
SUMMARY_LABEL_EMAIL = "Let's Encrypt Email"

_SECRET_LABELS = (SUMMARY_LABEL_PASSWORD,)


def build_configuration_summary_items(configuration) -> List[Tuple[str, str]]:
    """Build a list of configuration summary items for display.

    Args:
        configuration: Configuration instance being confirmed

    Returns:
        List of (label, value) tuples representing configuration items
    """
    summary_items = [
        (SUMMARY_LABEL_VERSION, configuration.install_version.value),
        (SUMMARY_LABEL_PASSWORD, configuration.mysql_root_password),
        (SUMMARY_LABEL_SITES, configuration.sites),
        (SUMMARY_LABEL_NETWORKING, "Yes" if configuration.setup_networking else "No"),
        (SUMMARY_LABEL_LETSENCRYPT, "Yes" if configuration.setup_letsencrypt else "No"),
    ]
    # the email is only written (and only meaningful) with certificates enabled
    if configuration.setup_letsencrypt:
        summary_items.append((SUMMARY_LABEL_EMAIL, configuration.letsencrypt_email))

    return summary_items


def format_summary_value(label: str, value) -> str:
    """Format a summary value for display, masking secrets.

    Args:
        label: The label of the summary item
        value: The value to format

    Returns:
        String suitable for display
    """
    if label in _SECRET_LABELS:
        return MASKED_VALUE if value else "Not set"
    if value is None or value == "":
        return "Not set"
    return str(value)


def render_summary_lines(configuration, title: str = "CONFIGURATION SUMMARY") -> List[str]:
    """Lay out the summary as fixed-width lines shared by both interfaces."""
    lines = ["=" * 60, title, "=" * 60]
    for label, value in build_configuration_summary_items(configuration):
        lines.append(f"{label:<30}: {format_summary_value(label, value)}")
    lines.append("=" * 60)
    return lines
