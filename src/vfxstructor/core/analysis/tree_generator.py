from __future__ import annotations

"""
Directory Tree Snapshotter.

Recursively walks a directory and builds an ordered, serializable tree of
DirectoryNode entries. Two variants share the walk: directories-only (used
internally and for project views) and directories-plus-files (generic display).
"""

import logging
import os
from typing import List, Optional, Set, Tuple

from vfxstructor.core.paths import canonicalize, join_path
from vfxstructor.domain.errors import StructorIOError
from vfxstructor.domain.tree_models import DirectoryNode
from vfxstructor.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_DirIdentity = Tuple[int, int]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_directory_structure(path: str, *, include_files: bool = False) -> DirectoryNode:
    """
    Snapshot the tree rooted at a user-supplied path.

    The path is expanded (~, environment variables), made absolute and
    canonicalized before the walk.

    Args:
        path: Raw directory path.
        include_files: Include files as leaf children of their directory.

    Returns:
        DirectoryNode: Root of the snapshot.
    """
    root = canonicalize(normalize_path(path, fallback=os.getcwd())) or "/"
    logger.info(f"Reading directory structure: {root}")
    return snapshot(root, include_files=include_files)


def snapshot(root: str, *, include_files: bool = False) -> DirectoryNode:
    """
    Build the ordered tree of a filesystem entry.

    A non-directory root yields a single leaf node. Within every directory,
    subdirectories sort before files and each group is ordered by name
    (case-sensitive). The walk only reads from the filesystem.

    Args:
        root: Canonical path of the entry to snapshot.
        include_files: Include files as leaf children of their directory.

    Returns:
        DirectoryNode: Root of the snapshot.

    Raises:
        StructorIOError: If the root does not exist or an entry is unreadable.
    """
    try:
        st = os.stat(_fs_path(root))
    except OSError as e:
        raise StructorIOError(
            f"Failed to read {root}: {e.strerror or e}", path=root, reason=str(e)
        ) from e

    name = _entry_name(root)
    if not os.path.isdir(_fs_path(root)):
        return DirectoryNode(name=name, path=root, is_directory=False)

    return _walk(root, name, include_files, {(st.st_dev, st.st_ino)})

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _walk(
        path: str,
        name: str,
        include_files: bool,
        active: Set[_DirIdentity],
) -> DirectoryNode:
    """
    Recursive step. 'active' holds the identities of the directories on the
    current descent path; re-entering one of them means a symlink cycle.
    """
    children: List[DirectoryNode] = []

    try:
        with os.scandir(_fs_path(path)) as it:
            entries = list(it)
    except OSError as e:
        raise StructorIOError(
            f"Failed to read directory {path}: {e.strerror or e}", path=path, reason=str(e)
        ) from e

    for entry in entries:
        child_path = join_path(path, entry.name)
        try:
            is_dir = entry.is_dir()
        except OSError as e:
            raise StructorIOError(
                f"Failed to read entry {child_path}: {e.strerror or e}",
                path=child_path,
                reason=str(e),
            ) from e

        if not is_dir:
            if include_files:
                children.append(DirectoryNode(name=entry.name, path=child_path, is_directory=False))
            continue

        identity = _identity(entry)
        if identity is not None and identity in active:
            logger.debug(f"Symlink cycle detected, not descending: {child_path}")
            children.append(DirectoryNode(name=entry.name, path=child_path, is_directory=True))
            continue

        if identity is not None:
            active.add(identity)
        try:
            children.append(_walk(child_path, entry.name, include_files, active))
        finally:
            if identity is not None:
                active.discard(identity)

    children.sort(key=_sort_key)
    return DirectoryNode(name=name, path=path, is_directory=True, children=tuple(children))


def _sort_key(node: DirectoryNode) -> Tuple[int, str]:
    return (0 if node.is_directory else 1, node.name)


def _identity(entry: os.DirEntry) -> Optional[_DirIdentity]:
    try:
        st = entry.stat(follow_symlinks=True)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def _entry_name(path: str) -> str:
    # A bare drive or '/' has no final segment
    stripped = path.rstrip("/")
    base = stripped.rsplit("/", 1)[-1] if "/" in stripped else stripped
    return "" if base.endswith(":") else base


def _fs_path(path: str) -> str:
    # 'C:' alone is the current directory of drive C, not its root
    return path + "/" if path.endswith(":") else path
