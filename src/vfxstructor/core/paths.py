from __future__ import annotations

"""
Path Canonicalization and Project Root Detection.

Converts inconsistent user-supplied or OS-native path strings into a single
slash-delimited form and centralizes the project root naming rule. Every
other component routes its path handling through this module.
"""

import os
from typing import Callable, List, Optional

from vfxstructor.domain.constants import (
    PROJECT_ROOT_NAME_LENGTH,
    PROJECT_ROOT_SEPARATOR,
    PROJECT_ROOT_SEPARATOR_INDEX,
)

RootPredicate = Callable[[str], bool]

# -----------------------------------------------------------------------------
# SEGMENT HELPERS
# -----------------------------------------------------------------------------

def split_segments(raw: str) -> List[str]:
    """Split a path on both separator styles, dropping empty segments."""
    return [s for s in (raw or "").replace("\\", "/").split("/") if s]


def final_segment(path: str) -> str:
    """Return the last non-empty segment of a path, or '' for an empty path."""
    segments = split_segments(path)
    return segments[-1] if segments else ""


def _collapse_duplicates(segments: List[str], kept: Optional[List[str]] = None) -> List[str]:
    """Drop every segment equal to the segment kept immediately before it."""
    out: List[str] = list(kept or [])
    for seg in segments:
        if not out or out[-1] != seg:
            out.append(seg)
    return out


def _looks_like_drive(segment: str) -> bool:
    if segment.endswith(":"):
        return True
    return len(segment) == 1 and segment.isalpha()

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def canonicalize(raw: str, *, drive_semantics: Optional[bool] = None) -> str:
    """
    Normalize any path string into its canonical slash-delimited form.

    Backslashes become forward slashes, empty segments disappear and
    consecutive duplicate segments ('.../maya/maya/...') collapse into one.
    With drive semantics the first segment is rendered as a drive with exactly
    one colon ('C::/x' -> 'C:/x') and a leading double slash marks a network
    share ('\\\\srv\\share' -> '//srv/share'); without them the result is rooted
    with a single leading '/'. The result never carries a trailing slash and
    canonicalizing it again returns it unchanged.

    Args:
        raw: Input path string.
        drive_semantics: Force drive-letter handling on or off. Defaults to
            the host platform (True on Windows).

    Returns:
        str: Canonical path, or '' when the input has no segments.
    """
    if drive_semantics is None:
        drive_semantics = os.name == "nt"

    segments = split_segments(raw)
    if not segments:
        return ""

    # UNC share: \\server\share keeps its double-slash prefix
    if drive_semantics and raw.replace("\\", "/").startswith("//"):
        return "//" + "/".join(_collapse_duplicates(segments))

    if drive_semantics and _looks_like_drive(segments[0]):
        drive = segments[0].rstrip(":") + ":"
        kept = _collapse_duplicates(segments[1:], [drive])
        if len(kept) == 1:
            return drive
        return drive + "/" + "/".join(kept[1:])

    return "/" + "/".join(_collapse_duplicates(segments))


def clean_path(raw: str) -> str:
    """
    Normalize a path that denotes an existing filesystem entry.

    Purely string based: no platform detection takes place. A first segment
    ending with ':' is re-rendered with exactly one colon, a leading '/' in the
    input is preserved, and consecutive duplicate segments collapse.

    Args:
        raw: Input path string.

    Returns:
        str: Cleaned path, or '' when the input has no segments.
    """
    normalized = (raw or "").replace("\\", "/")
    segments = split_segments(normalized)
    if not segments:
        return ""

    head = segments[0]
    if head.endswith(":"):
        head = head.rstrip(":") + ":"

    rest = _collapse_duplicates(segments[1:], [head])
    cleaned = "/".join(rest)
    if normalized.startswith("/"):
        cleaned = "/" + cleaned
    return cleaned


def join_path(parent: str, name: str) -> str:
    """Join a canonical parent and a child name without doubling separators."""
    if not parent:
        return name
    return parent.rstrip("/") + "/" + name

# -----------------------------------------------------------------------------
# PROJECT ROOT CONVENTION
# -----------------------------------------------------------------------------

def is_project_root_name(name: str) -> bool:
    """
    True if a single path segment follows the project root pattern.

    The convention is 'XXX_YYY': exactly seven characters with an underscore
    at index 3 ('ABC_123' matches, 'AB_1234' and 'ABCDEFG' do not).
    """
    return (
        len(name) == PROJECT_ROOT_NAME_LENGTH
        and name[PROJECT_ROOT_SEPARATOR_INDEX] == PROJECT_ROOT_SEPARATOR
    )


def find_project_root(
        path: str,
        predicate: RootPredicate = is_project_root_name,
) -> Optional[str]:
    """
    Locate the nearest enclosing project root of a path.

    Ancestors are inspected outward starting at the direct parent; the path's
    own final segment is not considered.

    Args:
        path: Path whose project root is requested.
        predicate: Rule deciding whether a segment names a project root.

    Returns:
        Optional[str]: Path of the root with the input's prefix style
        preserved, or None if no ancestor matches.
    """
    normalized = path.replace("\\", "/").rstrip("/")
    segments = normalized.split("/")
    for idx in range(len(segments) - 2, -1, -1):
        if segments[idx] and predicate(segments[idx]):
            return "/".join(segments[: idx + 1])
    return None
