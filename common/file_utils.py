# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions: mirroring directory trees and writing files.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

from settings.config_models import AppSettings

from .command_utils import get_symbols, log_message

module_logger = logging.getLogger(__name__)


def mirror_directory(
    source_dir: Path,
    target_dir: Path,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> List[Path]:
    """
    Copies every file below `source_dir` to the same relative location below
    `target_dir`.

    Existing files in the target are overwritten; directories are created as
    needed. Files that only exist in the target are never deleted, so running
    this twice with an unchanged source yields the same target tree. File
    contents and permission bits are copied; symbolic links are followed.

    Parameters:
        source_dir (Path): The directory tree to copy from.
        target_dir (Path): The directory to copy into. Created if missing.
        app_settings (Optional[AppSettings]): Settings providing the logging symbols.
        current_logger (Optional[logging.Logger]): Logger instance to use for
            logging messages. If not provided, a module-level logger will be used.

    Returns:
        List[Path]: The target paths of all copied files, in walk order.

    Raises:
        FileNotFoundError: If `source_dir` is not a directory.
        OSError: If a directory cannot be created or a file cannot be copied.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not source_dir.is_dir():
        log_message(
            f"{symbols.get('error', '❌')} Cannot mirror {source_dir}: not a directory.",
            "error",
            logger_to_use,
            app_settings,
        )
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    log_message(
        f"{symbols.get('step', '➡️')} Mirroring {source_dir} to {target_dir}",
        "info",
        logger_to_use,
        app_settings,
    )
    target_dir.mkdir(parents=True, exist_ok=True)

    copied_files: List[Path] = []
    # symlinked directories (e.g. web/bundles/* from assets:install --symlink) are descended into
    for current_dir, dir_names, file_names in os.walk(source_dir, followlinks=True):
        dir_names.sort()
        target_subdir = target_dir / Path(current_dir).relative_to(source_dir)
        target_subdir.mkdir(parents=True, exist_ok=True)
        for file_name in sorted(file_names):
            target_path = target_subdir / file_name
            shutil.copy2(Path(current_dir) / file_name, target_path)
            copied_files.append(target_path)
            log_message(f"   copied {target_path}", "debug", logger_to_use, app_settings)

    log_message(
        f"{symbols.get('success', '✅')} Mirrored {len(copied_files)} file(s) into {target_dir}",
        "success",
        logger_to_use,
        app_settings,
    )
    return copied_files


def create_and_write_file(
    file_path: Path,
    contents: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Writes `contents` to `file_path`, creating the file or replacing whatever
    it held before. The write is not atomic and no backup is kept.

    Raises:
        OSError: If the file cannot be opened or written, e.g. when its parent
            directory does not exist.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    try:
        with open(file_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(contents)
    except OSError as e:
        log_message(
            f"{symbols.get('error', '❌')} Failed to write {file_path}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    log_message(
        f"{symbols.get('success', '✅')} Wrote {file_path}",
        "success",
        logger_to_use,
        app_settings,
    )
