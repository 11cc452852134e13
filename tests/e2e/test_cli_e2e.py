from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and file system side effects.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "vfxstructor" / "main.py"


def run_cli(args: List[str], home: Path, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and points the user data
    directory at a temporary home so no real settings are touched.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        home: Directory used as the user's home.
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


def test_cli_help(home: Path) -> None:
    """TC-01: Verify the help screen lists every subcommand."""
    result = run_cli(["--help"], home)

    assert result.returncode == 0
    for command in ("create", "tree", "rename", "delete", "add-asset", "template"):
        assert command in result.stdout


def test_cli_missing_command_is_usage_error(home: Path) -> None:
    result = run_cli([], home)
    assert result.returncode == 2


def test_cli_full_project_lifecycle(tmp_path: Path, home: Path) -> None:
    """TC-02: Create, rename across matches, add an asset and delete."""
    base = tmp_path / "projects"
    base.mkdir()

    created = run_cli(["create", "-p", "xyz", "-a", "abc", "-b", str(base)], home)
    assert created.returncode == 0, created.stderr
    project = base / "ABC_XYZ"
    assert (project / "maya" / "scripts" / "global").is_dir()

    renamed = run_cli(["--json", "rename", str(project / "maya" / "scenes" / "global"), "shared"], home)
    assert renamed.returncode == 0, renamed.stderr
    assert len(json.loads(renamed.stdout)["renamed"]) == 2
    assert (project / "maya" / "scripts" / "shared").is_dir()

    asset = run_cli(["add-asset", str(project), "robot"], home)
    assert asset.returncode == 0, asset.stderr
    assert (project / "nuke" / "ROBOT" / "renders").is_dir()

    deleted = run_cli(["delete", str(project / "nuke" / "ROBOT"), "-y"], home)
    assert deleted.returncode == 0, deleted.stderr
    assert not (project / "nuke" / "ROBOT").exists()
    assert not (project / "houdini" / "ROBOT").exists()


def test_cli_tree_defaults_to_remembered_base(tmp_path: Path, home: Path) -> None:
    base = tmp_path / "projects"
    base.mkdir()
    assert run_cli(["create", "-p", "XYZ", "-a", "ABC", "-b", str(base)], home).returncode == 0

    result = run_cli(["tree", "--depth", "1"], home)

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["projects/", "└── ABC_XYZ/"]


def test_cli_reports_domain_errors(tmp_path: Path, home: Path) -> None:
    """TC-03: Root protection surfaces as exit code 1 and an ERROR line."""
    target = tmp_path / "ABC_XYZ"
    target.mkdir()

    result = run_cli(["delete", str(target), "-y"], home)

    assert result.returncode == 1
    assert "ERROR: Cannot delete project root folder" in result.stderr
    assert target.is_dir()


def test_cli_debug_log_file(tmp_path: Path, home: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"

    result = run_cli(["--debug", "--log-file", str(log_file), "mkdir", str(tmp_path / "plates")], home)

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "plates").is_dir()
    assert "CLI command: mkdir" in log_file.read_text(encoding="utf-8")
