#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Abstract base class for installer UI implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, TYPE_CHECKING

from erpnext_installer.erpnext_common import UserInterfaceMode

if TYPE_CHECKING:
    from erpnext_installer.installer.core.configuration import Configuration


class InstallerUI(ABC):
    """Abstract base class for installer UI implementations.

    This interface decouples the installer stages from the presentation layer,
    allowing the same wizard and pipeline to run through plain terminal input
    or dialog widgets, and to be driven by scripted doubles in tests.
    """

    def __init__(self, ui_mode: UserInterfaceMode = UserInterfaceMode.InteractionInput):
        """Initialize the UI interface.

        Args:
            ui_mode: The user interface mode for this implementation
        """
        self.ui_mode = ui_mode

    @abstractmethod
    def ask_yes_no(self, message: str, default: Optional[bool] = None) -> bool:
        """Ask the user a yes/no question.

        Args:
            message: The question to ask the user
            default: Answer used when the user just presses enter; with None
                an explicit answer is required

        Returns:
            True for yes, False for no
        """
        pass

    @abstractmethod
    def ask_string(self, prompt: str, default: str = "") -> str:
        """Ask the user for a string input.

        Args:
            prompt: The prompt to show the user
            default: Value returned if the user just presses enter

        Returns:
            The user's input string
        """
        pass

    @abstractmethod
    def ask_password(self, prompt: str) -> str:
        """Ask the user for a secret without echoing it.

        Args:
            prompt: The prompt to show the user

        Returns:
            The entered value, possibly empty
        """
        pass

    @abstractmethod
    def choose_one(self, prompt: str, choices: List[Tuple[str, str]], default: Optional[str] = None) -> str:
        """Ask the user to pick exactly one of a closed set of options.

        Args:
            prompt: The prompt to show the user
            choices: (tag, description) pairs, presented in order and numbered from 1
            default: Tag preselected for the user, or None to force a choice

        Returns:
            The tag of the chosen option; anything else is re-prompted
        """
        pass

    @abstractmethod
    def display_message(self, message: str) -> None:
        """Display a message to the user.

        Args:
            message: The message to display
        """
        pass

    @abstractmethod
    def display_error(self, message: str) -> None:
        """Display an error message to the user.

        Args:
            message: The error message to display
        """
        pass

    @abstractmethod
    def show_configuration_summary(self, configuration: "Configuration") -> bool:
        """Present the configuration summary and ask whether to accept it.

        Args:
            configuration: The configuration assembled so far

        Returns:
            True if the user accepts, False to go around the confirmation loop again
        """
        pass

    def ask_new_password(self, prompt: str, confirm_prompt: str = "Confirm password") -> str:
        """Ask for a new non-empty secret twice until both entries match."""
        while True:
            first = self.ask_password(prompt)
            if not first:
                self.display_error("Password cannot be empty")
                continue
            if self.ask_password(confirm_prompt) == first:
                return first
            self.display_error("Passwords do not match")
