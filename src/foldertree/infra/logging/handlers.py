from __future__ import annotations

"""
Logging Handlers.

Handler factories plus the tagging used to tell the handlers installed by
foldertree apart from handlers added by the host application or by test
runners (pytest's caplog, for instance), so reconfiguration only ever
replaces our own.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_foldertree_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as managed by this package and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    return _tag_handler(sh)


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Initialize a RotatingFileHandler, creating the parent directory.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Formatter for file entries.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        Optional[RotatingFileHandler]: Configured handler, or None when the
        file cannot be opened (a warning is written to stderr instead).
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
