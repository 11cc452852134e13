from __future__ import annotations

"""
Desktop Integration Layer.

One-shot OS integrations: placing a cleaned path on the system clipboard and
revealing a path in the platform file manager. Paths are canonicalized before
leaving the process.
"""

import logging
import os
import subprocess
import sys
from typing import Any, List

from vfxstructor.core.paths import canonicalize
from vfxstructor.domain.errors import StructorError, StructorIOError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CLIPBOARD
# -----------------------------------------------------------------------------

def copy_to_clipboard(text: str) -> str:
    """
    Copy a path to the system clipboard after removing duplicate segments.

    Args:
        text: Path string as shown to the user.

    Returns:
        str: The cleaned path that was placed on the clipboard.

    Raises:
        StructorError: The clipboard is unavailable (e.g. no display).
    """
    clean = canonicalize(text)
    logger.debug(f"Copying to clipboard - original: {text}, cleaned: {clean}")

    try:
        root = _create_clipboard_root()
    except Exception as e:
        raise StructorError(f"Failed to access clipboard: {e}") from e

    try:
        root.withdraw()
        root.clipboard_clear()
        root.clipboard_append(clean)
        # Flush to the window manager before the hidden window goes away
        root.update()
    except Exception as e:
        raise StructorError(f"Failed to copy text: {e}") from e
    finally:
        root.destroy()

    logger.info(f"Copied to clipboard: {clean}")
    return clean


def _create_clipboard_root() -> Any:
    """Create the hidden toolkit window that owns the clipboard selection."""
    import customtkinter as ctk

    return ctk.CTk()

# -----------------------------------------------------------------------------
# FILE MANAGER
# -----------------------------------------------------------------------------

def open_in_explorer(path: str) -> str:
    """
    Reveal a path in the host file manager.

    Windows selects the entry in Explorer, macOS reveals it in Finder, other
    platforms open the parent folder with xdg-open.

    Args:
        path: Path to reveal.

    Returns:
        str: The cleaned path handed to the file manager.

    Raises:
        StructorIOError: The file manager could not be launched.
    """
    clean = canonicalize(path)
    cmd = reveal_command(clean, sys.platform)
    logger.debug(f"Opening in file manager: {cmd}")

    try:
        subprocess.Popen(cmd)
    except OSError as e:
        raise StructorIOError(
            f"Failed to open file manager: {e}", path=clean, reason=str(e)
        ) from e
    return clean


def reveal_command(clean_path: str, platform_name: str) -> List[str]:
    """Build the platform-specific reveal command for a canonical path."""
    if platform_name == "win32":
        return ["explorer", "/select,", clean_path.replace("/", "\\")]
    if platform_name == "darwin":
        return ["open", "-R", clean_path]
    return ["xdg-open", os.path.dirname(clean_path) or "/"]
