#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import sys
from datetime import datetime
from typing import Optional

from colorama import init as ColoramaInit, Fore, Style

from erpnext_installer.installer.configs.constants.enums import InstallerResult

ColoramaInit()


class InstallerLogger:
    """A static logger for installer stages with color-coded, simplified console output."""

    _console_output_enabled = True
    _main_log_file: Optional[str] = None
    _debug_enabled = False
    _buffer_console_enabled = False
    _buffered_lines: list[str] = []

    def __init__(self):
        """Constructor disabled - use static methods only."""
        raise NotImplementedError("InstallerLogger is entirely static. Use static methods directly.")

    @classmethod
    def set_console_output(cls, enabled: bool):
        cls._console_output_enabled = enabled

    @classmethod
    def set_log_file(cls, main_log_file: Optional[str]):
        """Set the main log file for all logging operations."""
        cls._main_log_file = main_log_file

    @classmethod
    def set_debug_enabled(cls, enabled: bool):
        """Enable or disable debug-level logging."""
        cls._debug_enabled = enabled

    @classmethod
    def is_debug_enabled(cls) -> bool:
        return cls._debug_enabled

    @classmethod
    def set_buffered_console(cls, enabled: bool):
        """Buffer console output instead of printing immediately (for DUI dialogs)."""
        cls._buffer_console_enabled = enabled
        if not enabled:
            cls._buffered_lines.clear()

    @classmethod
    def flush_buffer_to_console(cls):
        """Flush buffered console lines in order, then clear the buffer."""
        if not cls._buffered_lines:
            return
        try:
            for line in cls._buffered_lines:
                print(line, file=sys.stdout)
        finally:
            cls._buffered_lines.clear()

    @classmethod
    def generate_timestamped_filename(cls, base_name: str = "erpnext_install") -> str:
        """Generate a timestamped filename for logging."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{base_name}_{timestamp}.log"

    @staticmethod
    def _log(label: str, color: str, message: str, file: object = None):
        """Log a message to console or file based on configuration."""
        timestamp = f"[{InstallerLogger._timestamp()}]"

        if InstallerLogger._main_log_file:
            with open(InstallerLogger._main_log_file, "a", encoding="utf-8") as f:
                f.write(f"{timestamp} ({label}) {message}\n")

        elif InstallerLogger._console_output_enabled:
            line = f"{timestamp} {color}({label}){Style.RESET_ALL} {message}"
            if InstallerLogger._buffer_console_enabled:
                InstallerLogger._buffered_lines.append(line)
            else:
                # resolve the stream at call time so redirected stdout/stderr are honored
                print(line, file=file or sys.stdout)

    @staticmethod
    def start(label: str):
        """Log the start of a given action."""
        InstallerLogger._log("START", Fore.BLUE, f"[{label}]")

    @staticmethod
    def end(label: str, status: InstallerResult, message: Optional[str] = None):
        """Log the end of a given action."""
        log_message = f"[{label}]"
        if message:
            log_message += f": {message}"

        if status == InstallerResult.SUCCESS:
            InstallerLogger._log("SUCCESS", Fore.GREEN, log_message)
        elif status == InstallerResult.SKIPPED:
            InstallerLogger._log("SKIP", Fore.MAGENTA, log_message)
        else:  # FAILURE
            InstallerLogger._log("FAIL", Fore.RED, log_message, file=sys.stderr)

    @staticmethod
    def _timestamp() -> str:
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    @staticmethod
    def info(message: str):
        """Log a simple info message."""
        InstallerLogger._log("info", "", message)

    @staticmethod
    def warning(message: str):
        """Log a simple warning message."""
        InstallerLogger._log("WARNING", Fore.YELLOW, message, file=sys.stderr)

    @staticmethod
    def error(message: str):
        """Log a simple error message."""
        InstallerLogger._log("ERROR", Fore.RED, message, file=sys.stderr)

    @staticmethod
    def debug(message: str):
        """Log a debug message - only shown when debug is enabled."""
        if InstallerLogger._debug_enabled:
            InstallerLogger._log("DEBUG", Fore.CYAN, message)
