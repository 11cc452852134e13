from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging initialization, resolution of the
remembered session, dispatch of the requested operation and result
rendering. Domain errors become exit code 1 with a message on stderr.
"""

import argparse
import json
import os
import sys
from typing import Any, Callable, Dict, List, Optional

from vfxstructor.core.analysis.tree_generator import get_directory_structure
from vfxstructor.core.analysis.tree_renderer import render_tree
from vfxstructor.core.services.builder import (
    add_asset_folders,
    create_folder,
    create_project_structure,
)
from vfxstructor.core.services.mutator import delete_folder, plan_delete, rename_folder
from vfxstructor.core.services.templates import default_template, read_template, write_template
from vfxstructor.core.services.validator import validate_project_config
from vfxstructor.domain import config as cfg
from vfxstructor.domain.errors import StructorError
from vfxstructor.infra.desktop import copy_to_clipboard, open_in_explorer
from vfxstructor.infra.fs import normalize_path
from vfxstructor.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from vfxstructor.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 operation failure, 2 usage error,
             130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    _setup_logging(args)
    logger.debug(f"CLI command: {args.command}")

    # 3. Dispatch
    handler = _COMMANDS[args.command]
    try:
        result = handler(args)
    except StructorError as e:
        logger.error(str(e))
        _emit_error(args, str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130

    # 4. Output rendering phase
    if args.json_output:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        _print_human(result)

    return 0 if result.get("ok", True) else 1

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_create(args: argparse.Namespace) -> Dict[str, Any]:
    session = cfg.load_session()
    request = cli_args.args_to_project_request(args, session)
    project = validate_project_config(request)

    message = create_project_structure(project)

    if not args.no_remember:
        cfg.remember_session(
            artist_ref=project.artist_ref,
            base_path=normalize_path(project.base_path, fallback=os.getcwd()),
        )
    return {"ok": True, "message": message}


def _cmd_tree(args: argparse.Namespace) -> Dict[str, Any]:
    path = args.path or cfg.load_session().get("base_path") or os.getcwd()
    node = get_directory_structure(path, include_files=args.files)
    return {
        "ok": True,
        "tree": node.to_dict(),
        "lines": render_tree(node, max_depth=args.depth),
    }


def _cmd_mkdir(args: argparse.Namespace) -> Dict[str, Any]:
    return {"ok": True, "message": create_folder(args.path, args.parents)}


def _cmd_rename(args: argparse.Namespace) -> Dict[str, Any]:
    ops = rename_folder(args.path, args.new_name, preflight=args.preflight)
    return {
        "ok": True,
        "message": f"Renamed {len(ops)} folder(s) to '{args.new_name}'",
        "renamed": [{"from": op.source, "to": op.destination} for op in ops],
    }


def _cmd_delete(args: argparse.Namespace) -> Dict[str, Any]:
    if not args.yes:
        targets = [op.source for op in plan_delete(args.path)]
        if not _confirm(f"Delete {len(targets)} folder(s) and their contents?", targets):
            return {"ok": False, "message": "Deletion cancelled."}

    ops = delete_folder(args.path)
    return {
        "ok": True,
        "message": f"Deleted {len(ops)} folder(s)",
        "deleted": [op.source for op in ops],
    }


def _cmd_add_asset(args: argparse.Namespace) -> Dict[str, Any]:
    created, failed = add_asset_folders(args.project_path, args.name, kind=args.kind)
    return {
        "ok": not failed,
        "message": f"{len(created)} folder(s) created, {len(failed)} failed",
        "created": created,
        "failed": [{"path": p, "error": err} for p, err in failed],
    }


def _cmd_copy_path(args: argparse.Namespace) -> Dict[str, Any]:
    clean = copy_to_clipboard(args.path)
    return {"ok": True, "message": f"Copied to clipboard: {clean}"}


def _cmd_reveal(args: argparse.Namespace) -> Dict[str, Any]:
    clean = open_in_explorer(args.path)
    return {"ok": True, "message": f"Opened in file manager: {clean}"}


def _cmd_template(args: argparse.Namespace) -> Dict[str, Any]:
    if args.template_command == "show":
        template = read_template(args.path)
        return {"ok": True, "template": template.to_dict()}

    if os.path.exists(args.path) and not args.force:
        return {"ok": False, "message": f"File already exists: {args.path} (use --force)"}
    write_template(default_template(), args.path)
    return {"ok": True, "message": f"Template written to {args.path}"}


_COMMANDS: Dict[str, Callable[[argparse.Namespace], Dict[str, Any]]] = {
    "create": _cmd_create,
    "tree": _cmd_tree,
    "mkdir": _cmd_mkdir,
    "rename": _cmd_rename,
    "delete": _cmd_delete,
    "add-asset": _cmd_add_asset,
    "copy-path": _cmd_copy_path,
    "reveal": _cmd_reveal,
    "template": _cmd_template,
}

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _setup_logging(args: argparse.Namespace) -> None:
    settings = cfg.load_app_state().get("app_settings", {})
    level = "DEBUG" if args.debug else str(settings.get("log_level", "INFO"))

    log_file = args.log_file
    if not log_file and settings.get("log_to_file"):
        log_file = get_default_log_path()

    configure_logging(LoggingConfig(level=level, console=True, log_file=log_file))


def _confirm(question: str, targets: List[str]) -> bool:
    for t in targets:
        print(f"  - {t}")
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _emit_error(args: argparse.Namespace, message: str) -> None:
    if args.json_output:
        print(json.dumps({"ok": False, "error": message}, ensure_ascii=False, indent=2))
    else:
        print(f"ERROR: {message}", file=sys.stderr)

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human(result: Dict[str, Any]) -> None:
    """Render a command result for the terminal."""
    if "lines" in result:
        print("\n".join(result["lines"]))

    if "template" in result:
        t = result["template"]
        print(f"Template: {t['name']}")
        if t["description"]:
            print(f"  {t['description']}")
        print(f"Directories ({len(t['directories'])}):")
        for d in t["directories"]:
            print(f"  - {d}")
        if t["baseFiles"]:
            print(f"Base files ({len(t['baseFiles'])}):")
            for f in t["baseFiles"]:
                print(f"  - {f['source']} -> {f['destination']}")

    for item in result.get("failed", []):
        print(f"FAILED: {item['path']}: {item['error']}", file=sys.stderr)

    if "message" in result:
        stream = sys.stdout if result.get("ok", True) else sys.stderr
        print(result["message"], file=stream)


if __name__ == "__main__":
    sys.exit(main())
