from __future__ import annotations

"""
Tree Renderer.

Converts DirectoryNode snapshots into visual ASCII representations for the
terminal.
"""

from typing import List, Optional

from vfxstructor.domain.tree_models import DirectoryNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(node: DirectoryNode, max_depth: Optional[int] = None) -> List[str]:
    """
    Render a snapshot as a list of lines, the root name first.

    Directories are suffixed with '/' so that leaf folders and files stay
    distinguishable in directories-plus-files snapshots.

    Args:
        node: Snapshot root.
        max_depth: Optional limit of rendered levels below the root.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [_label(node) if node.name else node.path]
    render_tree_structure(node, lines, prefix="", depth=1, max_depth=max_depth)
    return lines


def render_tree_structure(
        node: DirectoryNode,
        lines: List[str],
        prefix: str = "",
        depth: int = 1,
        max_depth: Optional[int] = None,
) -> None:
    """
    Recursively append the children of a node to the accumulator.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories. Child order is taken from the snapshot.

    Args:
        node: Current node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        depth: Current level (root children are level 1).
        max_depth: Optional limit of rendered levels.
    """
    if max_depth is not None and depth > max_depth:
        return

    total = len(node.children)
    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(child)}")

        if child.is_directory and child.children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(child, lines, new_prefix, depth + 1, max_depth)


def _label(node: DirectoryNode) -> str:
    return f"{node.name}/" if node.is_directory else node.name
