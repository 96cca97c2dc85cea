from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration resolution (defaults,
persisted file and CLI overrides), logging bootstrap, dispatch to the
scanner or the materializer, and result rendering. Domain errors are
translated into exit codes here and nowhere else.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from foldertree.core.materializer import TreeMaterializer
from foldertree.core.renderer import render_descriptor_tree, render_mirror_tree
from foldertree.core.scanner import Scanner
from foldertree.domain.config import get_default_config, load_config, validate_config
from foldertree.domain.descriptors import FolderDescriptor
from foldertree.domain.errors import FolderTreeError
from foldertree.domain.tree_spec import MirrorTree, mirror_to_dict
from foldertree.infra.logging import LoggingConfig, configure_logging, get_logger
from foldertree.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Configuration hierarchy: defaults or persisted state, then overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig(
        level=conf["log_level"],
        console=True,
        log_file=conf["log_file"] or None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    # 4. Dispatch
    try:
        if args.command == "scan":
            return _run_scan(args, conf)
        return _run_create(args, conf)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except FolderTreeError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_scan(args: Any, conf: Dict[str, Any]) -> int:
    scanner = Scanner(skip_vanished=conf["skip_vanished"])
    result = scanner.scan(args.path, deep=conf["deep"])

    if not result.exists:
        print(f"ERROR: Directory does not exist: {result.path}", file=sys.stderr)
        return EXIT_USAGE

    if conf["output_format"] == "json":
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    elif conf["output_format"] == "paths":
        for line in _select_paths(result, args, conf["deep"]):
            print(line)
    else:
        print("\n".join(render_descriptor_tree(result)))
    return EXIT_OK


def _run_create(args: Any, conf: Dict[str, Any]) -> int:
    spec = _read_spec_argument(args.spec)
    dry_run = conf["dry_run"]

    mirror = TreeMaterializer().create_tree(spec, args.root, dry_run=dry_run)

    if conf["output_format"] == "json":
        print(json.dumps(mirror_to_dict(mirror), ensure_ascii=False, indent=2))
    elif conf["output_format"] == "paths":
        for line in _mirror_paths(mirror):
            print(line)
    else:
        label = f"{args.root} (dry run)" if dry_run else args.root
        print("\n".join(render_mirror_tree(mirror, root_label=label)))
    return EXIT_OK

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge restricted to known configuration keys."""
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _read_spec_argument(value: str) -> str:
    """Treat the argument as a spec file path when one exists, else as JSON text."""
    if os.path.isfile(value):
        logger.debug(f"Reading tree spec from file: {value}")
        with open(value, "r", encoding="utf-8") as f:
            return f.read()
    return value


def _select_paths(result: FolderDescriptor, args: Any, deep: bool) -> List[str]:
    if getattr(args, "files", False):
        return [f.path for f in result.get_files(deep)]
    if getattr(args, "folders", False):
        return [f.path for f in result.get_folders(deep)]
    return result.get_paths(deep)


def _mirror_paths(mirror: MirrorTree) -> List[str]:
    out: List[str] = []
    for node in mirror.values():
        out.extend(node.iter_paths())
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
