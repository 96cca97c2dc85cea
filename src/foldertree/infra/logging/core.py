from __future__ import annotations

"""
Logging Core Orchestrator.

Idempotent configuration of the root logger. File output goes through a
QueueHandler/QueueListener pair so that scans and materializations never
block on log file writes.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from foldertree.infra.fs import get_user_data_dir
from foldertree.infra.logging.config import _LEVEL_MAP, LoggingConfig
from foldertree.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_foldertree_configured"
_QUEUE_LISTENER_ATTR: str = "_foldertree_queue_listener"

DEFAULT_LOG_FILE_NAME = "foldertree.log"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = DEFAULT_LOG_FILE_NAME) -> str:
    """
    Resolve the standard log path within the user data directory.

    Args:
        file_name: Target log filename.

    Returns:
        str: Absolute path to the persistent log file.
    """
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once, behind a queue listener.

    Repeated calls are no-ops unless force is True, in which case the
    handlers installed by a previous call are stopped and replaced. Foreign
    handlers attached to the root logger are left untouched.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    handlers_list: List[logging.Handler] = []

    if cfg.console:
        handlers_list.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers_list.append(fh)

    if not handlers_list:
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = _tag_handler(QueueHandler(log_queue))

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()

    root.addHandler(queue_handler)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    atexit.register(_safe_stop_listener, listener)
    return root


def shutdown_logging() -> None:
    """Flush and detach the handlers installed by configure_logging."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    """Acquire a named logger (usually __name__)."""
    return logging.getLogger(name)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Return the last lines of a log file.

    Args:
        n_lines: Maximum number of lines to return.
        log_path: Log file to read. Defaults to the standard log path.

    Returns:
        str: The log tail, or a short notice when the file is missing.
    """
    path = log_path or get_default_log_path()
    if not os.path.exists(path):
        return "Log file not found."

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        lines = f.readlines()
    return "".join(lines[-n_lines:])


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a textual level to its numeric constant (INFO if unknown)."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
    for h in listener.handlers:
        h.close()
