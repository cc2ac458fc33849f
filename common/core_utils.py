# common/core_utils.py
# -*- coding: utf-8 -*-
"""
Logging setup shared by the module scripts.

Log records go to stderr, and optionally to a file; standard output is left
to command results such as the module listing, which the package manager
shows verbatim.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from settings.config_models import SYMBOLS_DEFAULT

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# level -> key into the symbols mapping
LEVEL_SYMBOL_KEYS: Dict[int, str] = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "critical",
}


class SymbolFormatter(logging.Formatter):
    """
    Formatter providing `%(symbol)s`: the symbol configured for the
    record's level, falling back to the built-in symbol.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        style: str = "%",
        validate: bool = True,
        symbols: Optional[Dict[str, str]] = None,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def symbol_for(self, levelno: int) -> str:
        key = LEVEL_SYMBOL_KEYS.get(levelno)
        if key is None:
            return ""
        return self.symbols.get(key, SYMBOLS_DEFAULT.get(key, ""))

    def format(self, record: logging.LogRecord) -> str:
        record.symbol = self.symbol_for(record.levelno)
        return super().format(record)


def build_log_format(
    log_prefix: Optional[str] = None, log_format_str: Optional[str] = None
) -> str:
    """
    Returns the record format with `log_prefix` in front of it.

    A custom `log_format_str` may place the prefix itself with a
    "{log_prefix}" placeholder.
    """
    prefix = f"{log_prefix.strip()} " if log_prefix and log_prefix.strip() else ""
    base_format = log_format_str or LOG_FORMAT
    if "{log_prefix}" in base_format:
        return base_format.format(log_prefix=prefix)
    return prefix + base_format


def _create_file_handler(log_file: str) -> Optional[logging.Handler]:
    try:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_file_path, mode="a")
    except OSError as e:
        print(
            f"Warning: Could not open log file {log_file}, logging to stderr only: {e}",
            file=sys.stderr,
        )
        return None


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Replaces the handlers of the root logger.

    Args:
        log_level: Level of the root logger.
        log_file: Optional file the records are appended to. Its directory is
            created when missing; if it cannot be opened, a warning is printed
            and logging continues without it.
        log_to_console: Whether records go to stderr.
        log_format_str: Custom record format, see build_log_format.
        log_prefix: Text put in front of every record, e.g. "[MODULE-SCRIPTS]".
        symbols: Level symbols for the formatter.
    """
    handlers: List[logging.Handler] = []
    if log_file:
        file_handler = _create_file_handler(log_file)
        if file_handler is not None:
            handlers.append(file_handler)
    if log_to_console or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    final_format_str = build_log_format(log_prefix, log_format_str)
    formatter = SymbolFormatter(
        fmt=final_format_str, datefmt=LOG_DATE_FORMAT, symbols=symbols
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured at {logging.getLevelName(log_level)} with format '{final_format_str}'"
    )
