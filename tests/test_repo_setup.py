# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the repo setup.

Validates the project bootstrap:
  1. Every module begins with a PEP 723 inline metadata block
  2. pyproject.toml installs every top-level module and declares pydantic
  3. The sample game file ships with the repo
  4. The entry point runs with 'python game.py'
"""

import re
import subprocess
import sys
import tomllib
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent

MODULES = [
    "box_score",
    "config",
    "errors",
    "field_zones",
    "game",
    "game_state",
    "models",
    "outcomes",
    "play_log_ingestion",
    "play_resolver",
    "runner_resolver",
    "scorebook",
]


def _parse_pep723_block(text: str) -> str | None:
    """Extract the PEP 723 metadata block content from a script, or None."""
    m = re.search(
        r"^# /// script\s*\n((?:#[^\n]*\n)*?)# ///",
        text,
        re.MULTILINE,
    )
    if m:
        return m.group(1)
    return None


# ---------------------------------------------------------------------------
# Step 1: PEP 723 metadata
# ---------------------------------------------------------------------------

class TestStep1PEP723Metadata:
    @pytest.mark.parametrize("module", MODULES)
    def test_module_has_pep723_block(self, module):
        text = (PROJECT_ROOT / f"{module}.py").read_text()
        assert text.startswith("# /// script")
        assert _parse_pep723_block(text) is not None

    @pytest.mark.parametrize("module", [m for m in MODULES if m not in ("config", "errors")])
    def test_pydantic_declared(self, module):
        block = _parse_pep723_block((PROJECT_ROOT / f"{module}.py").read_text())
        assert "pydantic" in block

    @pytest.mark.parametrize("module", MODULES)
    def test_requires_python(self, module):
        block = _parse_pep723_block((PROJECT_ROOT / f"{module}.py").read_text())
        assert 'requires-python = ">=3.12"' in block


# ---------------------------------------------------------------------------
# Step 2: packaging
# ---------------------------------------------------------------------------

class TestStep2Packaging:
    @pytest.fixture(scope="class")
    def pyproject(self):
        with open(PROJECT_ROOT / "pyproject.toml", "rb") as f:
            return tomllib.load(f)

    def test_all_modules_installed(self, pyproject):
        assert sorted(pyproject["tool"]["setuptools"]["py-modules"]) == sorted(MODULES)

    def test_pydantic_dependency(self, pyproject):
        assert any(d.startswith("pydantic") for d in pyproject["project"]["dependencies"])

    def test_pytest_in_test_extra(self, pyproject):
        assert any(d.startswith("pytest") for d in pyproject["project"]["optional-dependencies"]["test"])

    @pytest.mark.parametrize("module", MODULES)
    def test_module_importable(self, module):
        __import__(module)


# ---------------------------------------------------------------------------
# Step 3-4: data and entry point
# ---------------------------------------------------------------------------

class TestStep3EntryPoint:
    def test_sample_game_exists(self):
        assert (PROJECT_ROOT / "data" / "sample_game.json").exists()

    def test_game_py_runs(self):
        result = subprocess.run(
            [sys.executable, "game.py", "--game", "data/sample_game.json"],
            cwd=PROJECT_ROOT, capture_output=True, text=True, timeout=60,
        )
        assert result.returncode == 0, result.stderr
        assert "TEAM TOTALS" in result.stdout
