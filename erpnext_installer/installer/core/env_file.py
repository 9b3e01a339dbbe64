#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Read and write flat KEY=VALUE .env files."""

from __future__ import annotations

import os
import re
from collections import OrderedDict
from typing import Mapping, Optional

from dotenv import dotenv_values

from erpnext_installer.erpnext_utils import temporary_filename
from erpnext_installer.installer.utils.logger_utils import InstallerLogger


def load_env_file(file_path: str) -> "OrderedDict[str, str]":
    """Parse a .env file into an ordered mapping.

    A missing file yields an empty mapping. Lines that are not KEY=VALUE
    assignments (comments, blanks, bare words) are ignored. Quoted values are
    unquoted; no ${VAR} interpolation is performed.
    """
    values: "OrderedDict[str, str]" = OrderedDict()
    if not os.path.isfile(file_path):
        return values
    for key, value in dotenv_values(file_path, interpolate=False).items():
        # dotenv reports a bare "KEY" line (no "=") with a None value
        if value is not None:
            values[key] = value
    return values


def get_env_value(values: Mapping[str, Optional[str]], key: str) -> str:
    """Return the value stored for key, or an empty string if it is absent."""
    return values.get(key) or ""


# characters that python-dotenv and docker compose both read back verbatim when unquoted
_PLAIN_VALUE_RE = re.compile(r"^[A-Za-z0-9_.,:/@%+=~-]*$")


def quote_env_value(value: str) -> str:
    """Return value in the form that reads back unchanged from a .env file.

    Plain values are written bare. Anything else is single-quoted, which both
    python-dotenv and compose take literally (no ${VAR} expansion), unless the
    value itself contains a single quote or backslash; those are double-quoted
    with backslash escapes.
    """
    value = str(value)
    if _PLAIN_VALUE_RE.match(value):
        return value
    if ("'" not in value) and ("\\" not in value):
        return f"'{value}'"
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_env(values: Mapping[str, str]) -> str:
    """Serialize a mapping as one KEY=VALUE line per entry."""
    return "".join(f"{key}={quote_env_value(value)}\n" for key, value in values.items())


def write_env_text(file_path: str, content: str) -> None:
    """Replace file_path with content.

    The content is written to a temporary file in the same directory and moved
    into place, so a reader never sees a half-written file.
    """
    target_dir = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(target_dir, exist_ok=True)
    with temporary_filename(suffix=".env", dir=target_dir) as tmp_name:
        with open(tmp_name, "w", encoding="utf-8") as f:
            f.write(content)
        if os.path.isfile(file_path):
            # keep the permissions of the file being replaced (it holds secrets)
            os.chmod(tmp_name, os.stat(file_path).st_mode & 0o777)
        else:
            os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, file_path)


def save_env_file(file_path: str, values: Mapping[str, str]) -> str:
    """Overwrite file_path with the given mapping and return the written content."""
    content = render_env(values)
    write_env_text(file_path, content)
    InstallerLogger.debug(f"Wrote {len(values)} value(s) to {file_path}")
    return content


class EnvironmentFile:
    """An ordered KEY=VALUE mapping read from a file path."""

    def __init__(self, file_path: str, values: Optional[Mapping[str, str]] = None):
        self.file_path = file_path
        self.values: "OrderedDict[str, str]" = OrderedDict(values or {})

    @classmethod
    def load(cls, file_path: str) -> "EnvironmentFile":
        return cls(file_path, load_env_file(file_path))

    def get(self, key: str) -> str:
        return get_env_value(self.values, key)
