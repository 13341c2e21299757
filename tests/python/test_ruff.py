"""Test that all Python code passes ruff linting."""

import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("ruff")

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_ruff_check():
    """Run ruff check on the entire codebase."""
    result = subprocess.run(
        [sys.executable, "-m", "ruff", "check", "."],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
    )
    assert result.returncode == 0, f"Ruff found issues:\n{result.stdout}\n{result.stderr}"


def test_lint_rules_are_pinned():
    """The rule set is fixed in pyproject.toml so newer ruff defaults do not change it."""
    tomllib = pytest.importorskip("tomllib")
    with open(REPO_ROOT / "pyproject.toml", "rb") as f:
        pyproject = tomllib.load(f)

    assert pyproject["tool"]["ruff"]["lint"]["select"] == ["E4", "E7", "E9", "F"]
