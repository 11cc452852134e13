from __future__ import annotations

"""
Unit tests for the Project Structure Builder.

Verifies default layout creation, idempotent re-runs, template-driven
layouts with base files, abort semantics and the asset folder kits.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from vfxstructor.core.paths import canonicalize
from vfxstructor.core.services.builder import (
    add_asset_folders,
    create_folder,
    create_project_structure,
)
from vfxstructor.domain.constants import ASSET_FOLDER_LAYOUTS, DEFAULT_PROJECT_DIRECTORIES
from vfxstructor.domain.errors import StructorIOError, TemplateParseError, ValidationError
from vfxstructor.domain.project_models import ProjectConfig


def _all_dirs(root: Path):
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_dir()}


def _template(tmp_path: Path, directories, base_files) -> str:
    path = tmp_path / "template.json"
    path.write_text(json.dumps({
        "name": "Test",
        "description": "Test layout",
        "directories": directories,
        "baseFiles": base_files,
    }), encoding="utf-8")
    return str(path)

# -----------------------------------------------------------------------------
# DEFAULT LAYOUT
# -----------------------------------------------------------------------------

def test_create_default_structure(tmp_path: Path) -> None:
    """TC-01: Exactly the built-in layout is created under base/ARTIST_PROJECT."""
    base = tmp_path / "base"
    base.mkdir()
    config = ProjectConfig(project_ref="XYZ", artist_ref="ABC", base_path=str(base))

    message = create_project_structure(config)

    project = base / "ABC_XYZ"
    assert canonicalize(str(project)) in message
    assert message.startswith("Project structure created at ")
    assert _all_dirs(project) == set(DEFAULT_PROJECT_DIRECTORIES)


def test_create_default_structure_is_rerunnable(tmp_path: Path) -> None:
    """TC-02: A second run over an existing structure succeeds."""
    config = ProjectConfig(project_ref="XYZ", artist_ref="ABC", base_path=str(tmp_path))
    first = create_project_structure(config)
    second = create_project_structure(config)
    assert first == second
    assert _all_dirs(tmp_path / "ABC_XYZ") == set(DEFAULT_PROJECT_DIRECTORIES)


def test_create_structure_directory_failure_aborts(tmp_path: Path) -> None:
    # A file sitting where 'houdini' should go blocks that directory
    project = tmp_path / "ABC_XYZ"
    project.mkdir()
    (project / "houdini").write_text("blocker", encoding="utf-8")
    config = ProjectConfig(project_ref="XYZ", artist_ref="ABC", base_path=str(tmp_path))

    with pytest.raises(StructorIOError) as exc:
        create_project_structure(config)

    assert "houdini" in str(exc.value)
    # Earlier entries exist, later ones were never attempted
    assert (project / "Deliveries").is_dir()
    assert not (project / "maya").exists()

# -----------------------------------------------------------------------------
# TEMPLATE LAYOUT
# -----------------------------------------------------------------------------

def test_create_from_template_copies_base_files(tmp_path: Path) -> None:
    source = tmp_path / "lib" / "default.ma"
    source.parent.mkdir()
    source.write_text("//Maya ASCII", encoding="utf-8")
    template = _template(
        tmp_path,
        ["maya/scenes", "comp"],
        [{"source": str(source), "destination": "maya/scenes/shots/default.ma"}],
    )
    base = tmp_path / "base"
    config = ProjectConfig("XYZ", "ABC", str(base), template_path=template)

    create_project_structure(config)

    project = base / "ABC_XYZ"
    assert (project / "maya" / "scenes").is_dir()
    assert (project / "comp").is_dir()
    assert not (project / "houdini").exists()
    copied = project / "maya" / "scenes" / "shots" / "default.ma"
    assert copied.read_text(encoding="utf-8") == "//Maya ASCII"


def test_create_from_template_overwrites_existing_base_file(tmp_path: Path) -> None:
    source = tmp_path / "seed.txt"
    source.write_text("fresh", encoding="utf-8")
    template = _template(tmp_path, ["docs"], [{"source": str(source), "destination": "docs/seed.txt"}])
    config = ProjectConfig("XYZ", "ABC", str(tmp_path / "base"), template_path=template)

    create_project_structure(config)
    target = tmp_path / "base" / "ABC_XYZ" / "docs" / "seed.txt"
    target.write_text("edited", encoding="utf-8")
    create_project_structure(config)

    assert target.read_text(encoding="utf-8") == "fresh"


def test_missing_base_file_source_fails_after_directories(tmp_path: Path) -> None:
    """TC-03: The error names the missing source; directories stay created."""
    missing = str(tmp_path / "nowhere" / "default.ma")
    template = _template(tmp_path, ["maya/scenes"], [{"source": missing, "destination": "maya/scenes/d.ma"}])
    config = ProjectConfig("XYZ", "ABC", str(tmp_path / "base"), template_path=template)

    with pytest.raises(StructorIOError) as exc:
        create_project_structure(config)

    assert missing in str(exc.value)
    assert (tmp_path / "base" / "ABC_XYZ" / "maya" / "scenes").is_dir()


def test_malformed_template_aborts_before_creation(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2", encoding="utf-8")
    config = ProjectConfig("XYZ", "ABC", str(tmp_path / "base"), template_path=str(bad))

    with pytest.raises(TemplateParseError):
        create_project_structure(config)
    assert not (tmp_path / "base").exists()


@pytest.mark.parametrize("entry", ["../outside", "maya/../../outside"])
def test_template_paths_cannot_escape_project(tmp_path: Path, entry: str) -> None:
    template = _template(tmp_path, ["maya", entry], [])
    config = ProjectConfig("XYZ", "ABC", str(tmp_path / "base"), template_path=template)

    with pytest.raises(ValidationError):
        create_project_structure(config)
    assert not (tmp_path / "base").exists()

# -----------------------------------------------------------------------------
# SINGLE FOLDER
# -----------------------------------------------------------------------------

def test_create_folder_with_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"
    message = create_folder(str(target), create_parents=True)
    assert target.is_dir()
    assert message == f"Directory created successfully at {canonicalize(str(target))}"


def test_create_folder_without_parents_requires_ancestors(tmp_path: Path) -> None:
    with pytest.raises(StructorIOError, match="Failed to create directory"):
        create_folder(str(tmp_path / "missing" / "child"), create_parents=False)

    create_folder(str(tmp_path / "single"), create_parents=False)
    assert (tmp_path / "single").is_dir()


def test_create_folder_without_parents_rejects_existing(tmp_path: Path) -> None:
    (tmp_path / "exists").mkdir()
    with pytest.raises(StructorIOError):
        create_folder(str(tmp_path / "exists"), create_parents=False)

# -----------------------------------------------------------------------------
# ASSET KITS
# -----------------------------------------------------------------------------

def test_add_asset_folders_creates_kit(vfx_project: Path) -> None:
    created, failed = add_asset_folders(str(vfx_project), "robot")

    root = canonicalize(str(vfx_project))
    assert failed == []
    assert [c[len(root) + 1:] for c in created] == [
        rel.format(name="ROBOT") for rel in ASSET_FOLDER_LAYOUTS["asset"]
    ]
    assert len(created) == 28
    assert (vfx_project / "maya" / "cache" / "ROBOT" / "alembic").is_dir()
    assert (vfx_project / "maya" / "assets" / "ROBOT").is_dir()
    for sub in ("abc", "audio", "comp", "desk", "flip", "geo/fbx", "geo/obj",
                "hda", "otls", "render", "scripts", "sim", "tex", "video"):
        assert (vfx_project / "houdini" / "ROBOT" / sub).is_dir()
    assert (vfx_project / "nuke" / "ROBOT" / "renders").is_dir()
    assert not (vfx_project / "maya" / "scenes" / "ROBOT").exists()


def test_add_rnd_folders_creates_kit(vfx_project: Path) -> None:
    created, failed = add_asset_folders(str(vfx_project), "fx_test", kind="rnd")

    assert failed == []
    assert len(created) == 28
    assert (vfx_project / "maya" / "scenes" / "FX_TEST").is_dir()
    assert (vfx_project / "maya" / "sourceImages" / "FX_TEST" / "substance").is_dir()
    assert (vfx_project / "houdini" / "FX_TEST" / "geo" / "obj").is_dir()
    assert not (vfx_project / "maya" / "assets" / "FX_TEST").exists()


def test_add_shot_folders_creates_kit(vfx_project: Path) -> None:
    created, failed = add_asset_folders(str(vfx_project), "sh010", kind="shot")

    assert failed == []
    assert len(created) == 26
    assert (vfx_project / "maya" / "scenes" / "SH010").is_dir()
    assert (vfx_project / "maya" / "cache" / "SH010" / "particles").is_dir()
    assert (vfx_project / "houdini" / "SH010" / "hda").is_dir()
    assert (vfx_project / "nuke" / "SH010" / "scripts").is_dir()
    assert not (vfx_project / "maya" / "sourceImages" / "SH010").exists()
    assert not (vfx_project / "maya" / "assets" / "SH010").exists()


def test_add_asset_folders_continues_after_failure(vfx_project: Path) -> None:
    real_mkdirs = os.makedirs

    def flaky(path, *args, **kwargs):
        if "houdini" in str(path):
            raise PermissionError("denied")
        return real_mkdirs(path, *args, **kwargs)

    with patch("os.makedirs", side_effect=flaky):
        created, failed = add_asset_folders(str(vfx_project), "robot")

    assert len(failed) == 14
    assert all("denied" in err for _, err in failed)
    assert (vfx_project / "nuke" / "ROBOT" / "scripts").is_dir()
    assert len(created) == len(ASSET_FOLDER_LAYOUTS["asset"]) - 14


@pytest.mark.parametrize("kwargs", [
    {"asset_name": "robot", "kind": "vehicle"},
    {"asset_name": "   "},
    {"asset_name": "a/b"},
])
def test_add_asset_folders_validation(vfx_project: Path, kwargs) -> None:
    with pytest.raises(ValidationError):
        add_asset_folders(str(vfx_project), **kwargs)


def test_add_asset_folders_requires_project_root(vfx_project: Path) -> None:
    with pytest.raises(ValidationError, match="Not a project root"):
        add_asset_folders(str(vfx_project / "maya"), "robot")
