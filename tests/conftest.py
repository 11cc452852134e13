from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures building project trees on disk.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def vfx_project(tmp_path: Path) -> Path:
    """
    Create a small project tree on disk and return its root.

    Structure:
    /work/ABC_XYZ
      /maya
        /scenes
          /global
        /scripts
          /global
        /images
          shot.exr
      /nuke
    """
    root = tmp_path / "work" / "ABC_XYZ"
    for rel in ("maya/scenes/global", "maya/scripts/global", "maya/images", "nuke"):
        (root / rel).mkdir(parents=True)
    (root / "maya" / "images" / "shot.exr").write_text("pixels", encoding="utf-8")
    return root


@pytest.fixture
def user_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the persistent config file into a temporary directory."""
    from vfxstructor.domain import config as cfg

    data_dir = tmp_path / "userdata"
    data_dir.mkdir()
    monkeypatch.setattr(cfg, "CONFIG_FILE", str(data_dir / "config.json"))
    return data_dir
