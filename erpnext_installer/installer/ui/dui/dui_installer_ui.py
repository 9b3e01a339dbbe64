#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
DUI (python3-dialog) implementation for installer UI.
"""

from typing import List, Optional, Tuple, TYPE_CHECKING

from erpnext_installer.erpnext_common import (
    InstallerAskForPassword,
    InstallerAskForString,
    InstallerChooseOne,
    InstallerDisplayMessage,
    InstallerYesOrNo,
    UserInterfaceMode,
)
from erpnext_installer.installer.utils.logger_utils import InstallerLogger
from erpnext_installer.installer.utils.summary_utils import render_summary_lines

from erpnext_installer.installer.ui.shared.installer_ui import InstallerUI

if TYPE_CHECKING:
    from erpnext_installer.installer.core.configuration import Configuration


class DialogInstallerUI(InstallerUI):
    """Dialog-based User Interface sharing the TUI prompt sequence."""

    def __init__(self, ui_mode: UserInterfaceMode = UserInterfaceMode.InteractionDialog):
        super().__init__(ui_mode)

    # primitive prompts are thin wrappers around the shared helpers
    def ask_yes_no(self, message: str, default: Optional[bool] = None) -> bool:
        return InstallerYesOrNo(message, default=default, uiMode=self.ui_mode)

    def ask_string(self, prompt: str, default: str = "") -> str:
        return InstallerAskForString(prompt, default=default, uiMode=self.ui_mode)

    def ask_password(self, prompt: str) -> str:
        return InstallerAskForPassword(prompt, uiMode=self.ui_mode)

    def choose_one(self, prompt: str, choices: List[Tuple[str, str]], default: Optional[str] = None) -> str:
        return InstallerChooseOne(
            prompt,
            choices=[(tag, description, tag == default) for tag, description in choices],
            uiMode=self.ui_mode,
        )

    def display_message(self, message: str) -> None:
        InstallerDisplayMessage(message, uiMode=self.ui_mode)

    def display_error(self, message: str) -> None:
        InstallerLogger.error(message)
        InstallerDisplayMessage(f"Error: {message}", uiMode=self.ui_mode)

    def show_configuration_summary(self, configuration: "Configuration") -> bool:
        # a single yes/no dialog carries the full summary
        lines = render_summary_lines(configuration)
        lines.append("")
        lines.append("Accept this configuration?")
        return self.ask_yes_no("\n".join(lines), default=True)
