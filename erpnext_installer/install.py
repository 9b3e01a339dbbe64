#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import argparse
import os
import sys
import traceback
from typing import List, Optional

from erpnext_installer.erpnext_common import DialogCanceledException, DialogInit, UserInterfaceMode
from erpnext_installer.erpnext_constants import ENV_FILE_NAME, PresentationMode
from erpnext_installer.installer.args.basic_args import add_basic_args
from erpnext_installer.installer.args.environment_args import add_environment_args
from erpnext_installer.installer.args.presentation_args import add_presentation_args
from erpnext_installer.installer.configs.constants.enums import InstallerResult
from erpnext_installer.installer.core.install_context import InstallContext
from erpnext_installer.installer.platforms import get_platform_installer
from erpnext_installer.installer.ui import DialogInstallerUI, TUIInstallerUI
from erpnext_installer.installer.utils.exceptions import InstallerError
from erpnext_installer.installer.utils.logger_utils import InstallerLogger


def build_arg_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments specific to the installer itself"""
    add_basic_args(parser)
    add_presentation_args(parser)
    add_environment_args(parser)


def determine_presentation_mode(parsed_args: argparse.Namespace) -> PresentationMode:
    """Dialogs only when asked for and the dialog program is usable; otherwise plain terminal input."""
    if parsed_args.dui:
        if DialogInit():
            return PresentationMode.MODE_DUI
        InstallerLogger.warning("The dialog program is not available, falling back to terminal prompts")
    return PresentationMode.MODE_TUI


def create_ui_implementation(presentation_mode: PresentationMode):
    """Create the appropriate UI implementation based on interface mode."""
    if presentation_mode == PresentationMode.MODE_DUI:
        return DialogInstallerUI(UserInterfaceMode.InteractionDialog)
    return TUIInstallerUI(UserInterfaceMode.InteractionInput)


def build_install_context(parsed_args: argparse.Namespace) -> InstallContext:
    install_dir = os.path.abspath(parsed_args.installDir or os.getcwd())
    env_file = os.path.abspath(parsed_args.envFile or os.path.join(os.getcwd(), ENV_FILE_NAME))
    return InstallContext(
        env_file=env_file,
        install_dir=install_dir,
        default_username=parsed_args.username,
        debug=bool(parsed_args.debug),
    )


def configure_logging(parsed_args: argparse.Namespace) -> None:
    if parsed_args.quiet:
        InstallerLogger.set_console_output(False)

    if parsed_args.debug:
        InstallerLogger.set_debug_enabled(True)

    if parsed_args.logToFile is not None:
        if parsed_args.logToFile == "":
            log_filename = InstallerLogger.generate_timestamped_filename()
            InstallerLogger.info(f"No log filename specified, using: {log_filename}")
        else:
            log_filename = parsed_args.logToFile

        InstallerLogger.set_log_file(log_filename)
        InstallerLogger.info(f"Logging to file: {log_filename}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the installer; returns the process exit code."""
    parser = argparse.ArgumentParser(description="ERPNext Installer", conflict_handler="resolve")
    build_arg_parser(parser)
    parsed_args = parser.parse_args(argv)

    configure_logging(parsed_args)
    InstallerLogger.debug(f"Arguments: {parsed_args}")

    try:
        presentation_mode = determine_presentation_mode(parsed_args)
        # dialog widgets own the terminal, so hold log lines until they are done
        if presentation_mode == PresentationMode.MODE_DUI and parsed_args.logToFile is None:
            InstallerLogger.set_buffered_console(True)
        ui = create_ui_implementation(presentation_mode)
        ctx = build_install_context(parsed_args)

        InstallerLogger.start("INSTALLER")
        installer = get_platform_installer(ui, debug=ctx.debug)
        state = installer.install(ctx)
        InstallerLogger.end(
            "INSTALLER",
            InstallerResult.SUCCESS,
            f"ERPNext site {state.configuration.sites} is initialized",
        )
        return 0

    except (KeyboardInterrupt, DialogCanceledException):
        InstallerLogger.error("Installation cancelled by user.")
        return 1

    except (InstallerError, NotImplementedError) as e:
        InstallerLogger.end("INSTALLER", InstallerResult.FAILURE, str(e))
        InstallerLogger.debug(traceback.format_exc())
        return 1

    finally:
        # emit anything held back while dialogs were on screen
        InstallerLogger.flush_buffer_to_console()
        InstallerLogger.set_buffered_console(False)


if __name__ == "__main__":
    sys.exit(main())
