from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI and installs a global exception hook so that
unexpected crashes are logged with their stack trace before the process
exits.
"""

import logging
import os
import sys
import traceback
from typing import Any, List, Optional

# -----------------------------------------------------------------------------
# ENVIRONMENT INITIALIZATION
# -----------------------------------------------------------------------------

# Allow running this file directly from a source checkout
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log unhandled exceptions and print the full trace to stderr.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    if issubclass(exctype, KeyboardInterrupt):
        sys.__excepthook__(exctype, value, tb)
        return

    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("foldertree.supervisor").critical(f"FATAL EXCEPTION DETECTED: {value}\n{stack_trace}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (FOLDERTREE)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Install the supervisor and run the CLI."""
    sys.excepthook = global_exception_handler

    from foldertree.interface.cli.app import main as cli_main

    return cli_main(argv)


if __name__ == "__main__":
    sys.exit(main())
