from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type produced by the snapshot subsystem.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryNode:
    """
    One filesystem entry of a snapshot.

    Attributes:
        name: Final path segment.
        path: Canonical path of the entry.
        is_directory: True for directories, False for leaf files.
        children: Ordered child nodes (directories first, then files).
    """
    name: str
    path: str
    is_directory: bool
    children: Tuple["DirectoryNode", ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "is_directory": self.is_directory,
            "children": [c.to_dict() for c in self.children],
        }
