from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (the 'scan' and 'create' subcommands plus
global diagnostic flags) and translates parsed namespaces into
configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the foldertree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="foldertree",
        description="Inspect directory trees and scaffold them from declarative specs.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    # --- scan ---
    scan = sub.add_parser("scan", help="Describe an existing directory.")
    scan.add_argument("path", help="Directory to scan.")
    scan.add_argument(
        "--deep",
        action="store_true",
        default=None,
        help="Recurse into every nested folder.",
    )
    scan.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of skipping entries that vanish during the scan.",
    )
    view = scan.add_mutually_exclusive_group()
    view.add_argument("--json", dest="json_output", action="store_true", help="Print the descriptor tree as JSON.")
    view.add_argument("--paths", action="store_true", help="Print every descendant path.")
    view.add_argument("--files", action="store_true", help="Print file paths only.")
    view.add_argument("--folders", action="store_true", help="Print folder paths only.")

    # --- create ---
    create = sub.add_parser("create", help="Create directories from a nested spec.")
    create.add_argument("spec", help="JSON text, or the path of a .json file holding the spec.")
    create.add_argument("root", help="Directory the spec is created under.")
    create.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Show what would be created without touching the disk.",
    )
    create.add_argument("--json", dest="json_output", action="store_true", help="Print the mirror tree as JSON.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only flags the user actually set produce keys, so persisted values
    survive when a flag is omitted.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file:
        overrides["log_file"] = args.log_file

    if getattr(args, "deep", None):
        overrides["deep"] = True
    if getattr(args, "strict", False):
        overrides["skip_vanished"] = False
    if getattr(args, "dry_run", None):
        overrides["dry_run"] = True

    if getattr(args, "json_output", False):
        overrides["output_format"] = "json"
    elif getattr(args, "paths", False) or getattr(args, "files", False) or getattr(args, "folders", False):
        overrides["output_format"] = "paths"

    return overrides
