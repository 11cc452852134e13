from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema: one subcommand per public
operation plus the global diagnostic flags. Provides logic to translate the
'create' namespace into a raw project request.
"""

import argparse
from typing import Any, Dict

from vfxstructor.domain.constants import ASSET_FOLDER_LAYOUTS, DEFAULT_ASSET_KIND

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the vfxstructor CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="vfxstructor",
        description="Scaffold and manage VFX production project folders.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotating).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print machine-readable JSON results.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Project creation ---
    create = sub.add_parser("create", help="Create a new project structure.")
    create.add_argument("-p", "--project", dest="project_ref", default=None, help="Project reference (3 chars).")
    create.add_argument("-a", "--artist", dest="artist_ref", default=None, help="Artist reference (3 chars).")
    create.add_argument("-b", "--base", dest="base_path", default=None, help="Parent directory of the project.")
    create.add_argument("-t", "--template", dest="template_path", default=None, help="JSON layout template.")
    create.add_argument(
        "--no-remember",
        action="store_true",
        help="Do not store artist and base path for the next run.",
    )

    # --- Inspection ---
    tree = sub.add_parser("tree", help="Show the directory structure of a path.")
    tree.add_argument("path", nargs="?", default=None, help="Directory to inspect (default: last base path).")
    tree.add_argument("--files", action="store_true", help="Include files as leaves.")
    tree.add_argument("--depth", type=int, default=None, help="Limit rendered depth.")

    # --- Folder management ---
    mkdir = sub.add_parser("mkdir", help="Create a single folder.")
    mkdir.add_argument("path", help="Folder to create.")
    mkdir.add_argument("--parents", action="store_true", help="Create missing ancestors.")

    rename = sub.add_parser("rename", help="Rename a folder across its project.")
    rename.add_argument("path", help="Folder to rename.")
    rename.add_argument("new_name", help="New folder name.")
    rename.add_argument(
        "--preflight",
        action="store_true",
        help="Check every destination before renaming anything.",
    )

    delete = sub.add_parser("delete", help="Delete a folder across its project.")
    delete.add_argument("path", help="Folder to delete.")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")

    asset = sub.add_parser("add-asset", help="Create the folder kit of a new asset.")
    asset.add_argument("project_path", help="Project root folder.")
    asset.add_argument("name", help="Asset name (upper-cased).")
    asset.add_argument(
        "--kind",
        default=DEFAULT_ASSET_KIND,
        choices=sorted(ASSET_FOLDER_LAYOUTS),
        help="Folder kit to create.",
    )

    # --- Desktop integration ---
    copy = sub.add_parser("copy-path", help="Copy a cleaned path to the clipboard.")
    copy.add_argument("path")

    reveal = sub.add_parser("reveal", help="Reveal a path in the file manager.")
    reveal.add_argument("path")

    # --- Templates ---
    template = sub.add_parser("template", help="Inspect or initialize layout templates.")
    template_sub = template.add_subparsers(dest="template_command", metavar="ACTION")
    template_sub.required = True
    show = template_sub.add_parser("show", help="Validate and print a template.")
    show.add_argument("path")
    init = template_sub.add_parser("init", help="Write the built-in layout as a template.")
    init.add_argument("path")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_project_request(args: argparse.Namespace, session: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate the 'create' namespace into a raw project request.

    Missing artist reference and base path fall back to the last session.

    Args:
        args: Parsed command-line arguments.
        session: Last session values.

    Returns:
        Dict[str, Any]: Raw request for validate_project_config.
    """
    return {
        "project_ref": args.project_ref,
        "artist_ref": args.artist_ref or session.get("artist_ref"),
        "base_path": args.base_path or session.get("base_path"),
        "template_path": args.template_path,
    }
