from __future__ import annotations

"""
Scoped Folder Mutator.

Renames or deletes a folder together with every same-named folder inside the
enclosing project root. Folders sharing a leaf name anywhere in a project
(e.g. 'global' under both 'scenes' and 'scripts') are one logical folder and
change together.

Both operations follow the same linear sequence:
    clean path -> protect root -> (rename: refuse files) -> resolve root
    -> enumerate matches -> mutate each match in plan order.

Mutations stop at the first failure and are never rolled back. The plan is an
explicit list of FolderOperation values; 'preflight=True' validates every
rename destination before the first mutation.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from vfxstructor.core.paths import (
    RootPredicate,
    clean_path,
    final_segment,
    find_project_root,
    is_project_root_name,
    join_path,
)
from vfxstructor.domain.errors import StructorIOError, ValidationError

logger = logging.getLogger(__name__)

OP_RENAME = "rename"
OP_DELETE = "delete"

# -----------------------------------------------------------------------------
# OPERATION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FolderOperation:
    """
    One filesystem mutation of a scoped plan.

    Attributes:
        kind: 'rename' or 'delete'.
        source: Folder being mutated.
        destination: Rename target (None for deletes).
    """
    kind: str
    source: str
    destination: Optional[str] = None

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def rename_folder(
        old_path: str,
        new_name: str,
        *,
        preflight: bool = False,
        root_predicate: RootPredicate = is_project_root_name,
) -> List[FolderOperation]:
    """
    Rename a folder and every same-named folder of its project.

    Args:
        old_path: Path of the folder to rename.
        new_name: New leaf name.
        preflight: Check every destination before renaming anything.
        root_predicate: Rule identifying project root folder names.

    Returns:
        List[FolderOperation]: The operations that were applied.

    Raises:
        ValidationError: Root protection, folder holds files, invalid name,
            project root not found, or a destination already exists.
        StructorIOError: The filesystem refused a read or rename.
    """
    plan = plan_rename(old_path, new_name, root_predicate=root_predicate)
    apply_operations(plan, preflight=preflight)
    logger.info(f"Renamed {len(plan)} folder(s) '{final_segment(clean_path(old_path))}' -> '{new_name}'")
    return plan


def delete_folder(
        path: str,
        *,
        root_predicate: RootPredicate = is_project_root_name,
) -> List[FolderOperation]:
    """
    Delete a folder and every same-named folder of its project, recursively.

    Returns:
        List[FolderOperation]: The operations that were applied.

    Raises:
        ValidationError: Root protection or project root not found.
        StructorIOError: A folder could not be removed.
    """
    plan = plan_delete(path, root_predicate=root_predicate)
    apply_operations(plan)
    logger.info(f"Deleted {len(plan)} folder(s) named '{final_segment(clean_path(path))}'")
    return plan


def plan_rename(
        old_path: str,
        new_name: str,
        *,
        root_predicate: RootPredicate = is_project_root_name,
) -> List[FolderOperation]:
    """
    Resolve the ordered rename operations without touching the filesystem.

    Nested matches are listed before the folder that contains them, so every
    source path is still valid when its turn comes.
    """
    target, target_name = _resolve_target(old_path, "rename", root_predicate)
    _validate_new_name(new_name, root_predicate)

    if _contains_files(target):
        raise ValidationError(
            "Folder contains files. Please ensure folder is empty before renaming."
        )

    root = _require_root(target, root_predicate)
    matches = find_matching_folders(root, target_name, descend_into_matches=True)
    logger.debug(f"Rename plan for '{target_name}' under {root}: {len(matches)} match(es)")

    return [
        FolderOperation(OP_RENAME, m, join_path(_parent(m), new_name))
        for m in matches
    ]


def plan_delete(
        path: str,
        *,
        root_predicate: RootPredicate = is_project_root_name,
) -> List[FolderOperation]:
    """
    Resolve the ordered delete operations without touching the filesystem.

    Folders nested inside a match are not listed: they go away with it.
    """
    target, target_name = _resolve_target(path, "delete", root_predicate)
    root = _require_root(target, root_predicate)
    matches = find_matching_folders(root, target_name, descend_into_matches=False)
    logger.debug(f"Delete plan for '{target_name}' under {root}: {len(matches)} match(es)")
    return [FolderOperation(OP_DELETE, m) for m in matches]


def apply_operations(operations: Sequence[FolderOperation], *, preflight: bool = False) -> None:
    """
    Execute a plan in order, stopping at the first failure.

    Args:
        operations: Plan produced by plan_rename/plan_delete.
        preflight: Validate every rename destination before mutating.

    Raises:
        ValidationError: A rename destination already exists.
        StructorIOError: The filesystem refused an operation.
    """
    if preflight:
        for op in operations:
            if op.kind == OP_RENAME and op.destination and os.path.lexists(op.destination):
                raise ValidationError(f"Destination already exists: {op.destination}")

    for op in operations:
        if op.kind == OP_RENAME:
            _apply_rename(op)
        elif op.kind == OP_DELETE:
            _apply_delete(op)
        else:
            raise ValueError(f"Unknown folder operation: {op.kind}")


def find_matching_folders(
        root: str,
        target_name: str,
        *,
        descend_into_matches: bool = True,
) -> List[str]:
    """
    Collect every directory under root whose name equals target_name.

    The walk visits entries in name order. With descend_into_matches the
    result is post-order (nested matches precede their enclosing match);
    without it, the subtree of a match is not searched.

    Raises:
        StructorIOError: A directory could not be listed.
    """
    try:
        st = os.stat(root)
    except OSError as e:
        raise StructorIOError(
            f"Failed to read directory: {e}", path=root, reason=str(e)
        ) from e

    found: List[str] = []
    _visit_dirs(root, target_name, descend_into_matches, found, {(st.st_dev, st.st_ino)})
    return found

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: RESOLUTION
# -----------------------------------------------------------------------------

def _resolve_target(raw: str, verb: str, root_predicate: RootPredicate) -> Tuple[str, str]:
    target = clean_path(raw)
    target_name = final_segment(target)
    if not target_name:
        raise ValidationError("Could not get folder name")
    if root_predicate(target_name):
        raise ValidationError(f"Cannot {verb} project root folder")
    return target, target_name


def _require_root(target: str, root_predicate: RootPredicate) -> str:
    root = find_project_root(target, root_predicate)
    if root is None:
        raise ValidationError("Could not find project root")
    return root


def _validate_new_name(new_name: str, root_predicate: RootPredicate) -> None:
    if not new_name or not new_name.strip():
        raise ValidationError("New folder name cannot be empty")
    if "/" in new_name or "\\" in new_name or new_name in (".", ".."):
        raise ValidationError(f"Invalid folder name: '{new_name}'")
    if root_predicate(new_name):
        raise ValidationError(f"New folder name matches the project root pattern: '{new_name}'")


def _contains_files(path: str) -> bool:
    try:
        with os.scandir(path) as it:
            return any(os.path.isfile(entry.path) for entry in it)
    except OSError as e:
        raise StructorIOError(
            f"Failed to read directory: {e}", path=path, reason=str(e)
        ) from e


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0] if "/" in path else ""


def _visit_dirs(
        directory: str,
        target: str,
        descend_into_matches: bool,
        found: List[str],
        active: Set[Tuple[int, int]],
) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise StructorIOError(
            f"Failed to read directory: {e}", path=directory, reason=str(e)
        ) from e

    for entry in entries:
        if not entry.is_dir():
            continue
        child = join_path(directory, entry.name)
        is_match = entry.name == target

        if is_match and not descend_into_matches:
            found.append(child)
            continue

        st = entry.stat()
        identity = (st.st_dev, st.st_ino)
        if identity not in active:
            active.add(identity)
            _visit_dirs(child, target, descend_into_matches, found, active)
            active.discard(identity)

        if is_match:
            found.append(child)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: MUTATION
# -----------------------------------------------------------------------------

def _apply_rename(op: FolderOperation) -> None:
    destination = op.destination or ""
    if os.path.lexists(destination):
        raise ValidationError(f"Destination already exists: {destination}")
    try:
        os.rename(op.source, destination)
    except OSError as e:
        raise StructorIOError(
            f"Failed to rename {op.source}: {e}", path=op.source, reason=str(e)
        ) from e
    logger.debug(f"Renamed {op.source} -> {destination}")


def _apply_delete(op: FolderOperation) -> None:
    try:
        if os.path.islink(op.source):
            os.unlink(op.source)
        else:
            shutil.rmtree(op.source)
    except OSError as e:
        raise StructorIOError(
            f"Failed to delete {op.source}: {e}", path=op.source, reason=str(e)
        ) from e
    logger.debug(f"Deleted {op.source}")
