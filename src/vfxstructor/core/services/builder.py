from __future__ import annotations

"""
Project Structure Builder.

Materializes a project layout (built-in or template-driven) under
'{base_path}/{artist_ref}_{project_ref}', seeds template base files, and
provides the single-folder and asset-kit creation helpers.
"""

import logging
import os
import shutil
from typing import List, Optional, Sequence, Tuple

from vfxstructor.core.paths import (
    RootPredicate,
    canonicalize,
    final_segment,
    is_project_root_name,
    join_path,
    split_segments,
)
from vfxstructor.core.services.templates import read_template
from vfxstructor.domain.constants import (
    ASSET_FOLDER_LAYOUTS,
    DEFAULT_ASSET_KIND,
    DEFAULT_PROJECT_DIRECTORIES,
)
from vfxstructor.domain.errors import StructorIOError, ValidationError
from vfxstructor.domain.project_models import ProjectConfig, ProjectTemplate
from vfxstructor.infra.fs import normalize_path, safe_mkdir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PROJECT CREATION
# -----------------------------------------------------------------------------

def create_project_structure(config: ProjectConfig) -> str:
    """
    Create the directory layout of a new project.

    Stages:
    1. Resolve the project directory and load the template (if any). Template
       failures abort before anything is created.
    2. Create every layout directory with its missing ancestors, in order.
       Existing directories are accepted, so re-running is safe.
    3. Copy template base files, overwriting existing destinations.

    The first failure in stage 2 or 3 aborts the operation; earlier steps are
    not rolled back.

    Args:
        config: Project request.

    Returns:
        str: Success message containing the project directory.

    Raises:
        StructorIOError: A directory cannot be created or a file cannot be copied.
        TemplateParseError: The template is malformed.
        ValidationError: A template path escapes the project directory.
    """
    base = canonicalize(normalize_path(config.base_path, fallback=os.getcwd()))
    project_dir = f"{base}/{config.project_dir_name}"

    template: Optional[ProjectTemplate] = None
    if config.template_path:
        template = read_template(config.template_path)
        directories: Sequence[str] = template.directories
        logger.info(f"Using template '{template.name}' for {project_dir}")
    else:
        directories = DEFAULT_PROJECT_DIRECTORIES

    # Pre-flight: every planned path must stay inside the project directory
    planned_dirs = [_resolve_inside(project_dir, d) for d in directories]
    planned_files: List[Tuple[str, str]] = []
    if template is not None:
        planned_files = [
            (f.source, _resolve_inside(project_dir, f.destination))
            for f in template.base_files
        ]

    logger.info(f"Creating project structure at {project_dir}")

    # Project root first, so an empty layout still yields the root folder
    _make_dirs(project_dir)
    for target in planned_dirs:
        _make_dirs(target)
        logger.debug(f"Directory ready: {target}")

    for source, destination in planned_files:
        _copy_base_file(source, destination)

    logger.info(
        f"Project structure created at {project_dir} "
        f"({len(planned_dirs)} directories, {len(planned_files)} base files)"
    )
    return f"Project structure created at {project_dir}"


def create_folder(path: str, create_parents: bool) -> str:
    """
    Create a single folder.

    Args:
        path: Target folder path.
        create_parents: Create missing ancestors. When False the call fails if
            any ancestor is missing or the folder already exists.

    Returns:
        str: Confirmation message.

    Raises:
        StructorIOError: The folder cannot be created.
    """
    target = canonicalize(normalize_path(path, fallback=os.getcwd()))
    logger.debug(f"Creating folder {target} (create_parents={create_parents})")

    try:
        if create_parents:
            os.makedirs(target, exist_ok=True)
        else:
            os.mkdir(target)
    except OSError as e:
        raise StructorIOError(
            f"Failed to create directory: {e}", path=target, reason=str(e)
        ) from e

    return f"Directory created successfully at {target}"

# -----------------------------------------------------------------------------
# ASSET KITS
# -----------------------------------------------------------------------------

def add_asset_folders(
        project_path: str,
        asset_name: str,
        kind: str = DEFAULT_ASSET_KIND,
        root_predicate: RootPredicate = is_project_root_name,
) -> Tuple[List[str], List[Tuple[str, str]]]:
    """
    Create the per-department folder kit of a new asset inside a project.

    Individual folder failures are logged and reported but do not stop the
    remaining folders.

    Args:
        project_path: Project root folder.
        asset_name: Asset identifier; upper-cased before use.
        kind: Kit identifier (see ASSET_FOLDER_LAYOUTS).
        root_predicate: Rule identifying project root folder names.

    Returns:
        Tuple[List[str], List[Tuple[str, str]]]: Created folders, and
        (folder, error) pairs for the failures.

    Raises:
        ValidationError: Unknown kit, invalid asset name, or the target is not
            a project root.
    """
    layout = ASSET_FOLDER_LAYOUTS.get(kind)
    if layout is None:
        known = ", ".join(sorted(ASSET_FOLDER_LAYOUTS))
        raise ValidationError(f"Unknown folder kit '{kind}'. Available: {known}")

    name = (asset_name or "").strip().upper()
    if not name or len(split_segments(name)) != 1 or name in (".", ".."):
        raise ValidationError(f"Invalid asset name: '{asset_name}'")

    project_dir = canonicalize(normalize_path(project_path, fallback=os.getcwd()))
    if not root_predicate(final_segment(project_dir)):
        raise ValidationError(f"Not a project root folder: {project_dir}")

    created: List[str] = []
    failed: List[Tuple[str, str]] = []
    for rel in layout:
        target = join_path(project_dir, rel.format(name=name))
        ok, err = safe_mkdir(target)
        if ok:
            created.append(target)
        else:
            logger.error(f"Error creating folder {target}: {err}")
            failed.append((target, err or "unknown error"))

    logger.info(f"Asset '{name}' ({kind}): {len(created)} folders created, {len(failed)} failed")
    return created, failed

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _resolve_inside(project_dir: str, rel: str) -> str:
    """Join a template-relative path to the project dir, refusing escapes."""
    joined = os.path.normpath(os.path.join(project_dir, rel.replace("\\", "/")))
    root = os.path.normpath(project_dir)
    if os.path.isabs(rel.replace("\\", "/")) or os.path.commonpath([root, joined]) != root:
        raise ValidationError(f"Template path escapes the project directory: {rel}")
    return joined


def _make_dirs(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise StructorIOError(
            f"Failed to create directory {path}: {e}", path=path, reason=str(e)
        ) from e


def _copy_base_file(source: str, destination: str) -> None:
    parent = os.path.dirname(destination)
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise StructorIOError(
            f"Failed to create parent directory: {e}", path=parent, reason=str(e)
        ) from e

    try:
        shutil.copy(source, destination)
    except OSError as e:
        raise StructorIOError(
            f"Failed to copy file from {source} to {destination}: {e}",
            path=source,
            reason=str(e),
        ) from e
    logger.debug(f"Copied {source} -> {destination}")
