# common/json_utils.py
# -*- coding: utf-8 -*-
"""
Helpers for reading the JSON files written by the package manager.
"""

import json
from pathlib import Path
from typing import Any


class MalformedJsonError(ValueError):
    """Raised when a file exists but does not hold valid JSON."""

    def __init__(self, file_path: Path, reason: str):
        self.file_path = file_path
        super().__init__(f"{file_path} is not valid JSON: {reason}")


def read_json_file(file_path: Path) -> Any:
    """
    Reads and parses a UTF-8 encoded JSON file.

    Args:
        file_path: The path to the file to read.

    Returns:
        The decoded JSON document.

    Raises:
        OSError: If the file cannot be read (FileNotFoundError when missing).
        MalformedJsonError: If the content is not valid JSON or not UTF-8.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedJsonError(file_path, str(e)) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(file_path, str(e)) from e
