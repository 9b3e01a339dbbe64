#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Terminal UI implementation for the installer."""

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


class TUIInstallerUI(InstallerUI):
    """Terminal UI implementation using erpnext_common prompts."""

    def __init__(self, ui_mode: UserInterfaceMode = UserInterfaceMode.InteractionInput):
        """Initialize the TUI interface.

        Args:
            ui_mode: The user interface mode (InteractionInput for TUI, InteractionDialog for DUI)
        """
        super().__init__(ui_mode)

    def ask_yes_no(self, message: str, default: Optional[bool] = None) -> bool:
        """Ask the user a yes/no question using the TUI interface.

        Args:
            message: The question to ask the user
            default: Default answer if user just presses enter

        Returns:
            True for yes, False for no
        """
        return InstallerYesOrNo(message, default=default, uiMode=self.ui_mode)

    def ask_string(self, prompt: str, default: str = "") -> str:
        """Ask the user for a string input using the TUI interface.

        Args:
            prompt: The prompt to show the user
            default: Default value if user just presses enter

        Returns:
            The user's input string
        """
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
        """Display a message to the user using the TUI interface.

        Args:
            message: The message to display
        """
        InstallerDisplayMessage(message, uiMode=self.ui_mode)

    def display_error(self, message: str) -> None:
        """Display an error message to the user using the shared logger."""
        InstallerLogger.error(message)

    def show_configuration_summary(self, configuration: "Configuration") -> bool:
        """Print the summary block; an empty reply accepts it, anything else starts over.

        The reply is read unstripped so a line of spaces also counts as a change request.
        """
        print("\n".join(render_summary_lines(configuration)))
        reply = input("\nPress Enter to accept this configuration, or type anything to change it: ")
        return len(reply) == 0
