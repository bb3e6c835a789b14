"""
Shared pytest fixtures for stylerules tests.

Provides fixtures for creating isolated CSS trees and config files, and an
in-process CLI runner.

Test Tier Markers:
  @pytest.mark.evergreen - Tests that always run, never skip (production tests)
  @pytest.mark.dev       - Development/WIP tests, toggle-able
"""

from __future__ import annotations

import io
from contextlib import redirect_stdout
from pathlib import Path
from typing import Callable

import pytest

from stylerules.config import LintConfig
from stylerules.utils import log


# =============================================================================
# Test Data Constants
# =============================================================================

# (relative path, content) pairs for a small project tree
CSS_TREE_FILES: list[tuple[str, str]] = [
    ("app.css", "a { color: hsl(200 50% 50%); }\n"),
    ("theme/dark.css", ".dark {\n  background: lch(50% 40 30deg);\n}\n"),
    ("theme/clean.css", ".ok { color: hsl(120deg 100% 50%); }\n"),
    ("node_modules/lib/vendor.css", "b { color: hsl(10 50% 50%); }\n"),
    ("notes.txt", "a { color: hsl(1 2% 3%); }\n"),
]


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test tiers."""
    config.addinivalue_line(
        "markers",
        "evergreen: tests that always run, never skip (production tests)"
    )
    config.addinivalue_line(
        "markers",
        "dev: development/WIP tests, toggle-able for active development"
    )


# =============================================================================
# Logger Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def plain_logger() -> None:
    """Disable ANSI colors so assertions can match plain output."""
    log.set_color(False)


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def angle_config() -> LintConfig:
    """Config enabling hue-degree-notation with the 'angle' policy."""
    return LintConfig(rules={"hue-degree-notation": "angle"})


@pytest.fixture
def number_config() -> LintConfig:
    """Config enabling hue-degree-notation with the 'number' policy."""
    return LintConfig(rules={"hue-degree-notation": "number"})


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes YAML text to tmp_path/.stylerules.yaml."""

    def _write(text: str) -> Path:
        path = tmp_path / ".stylerules.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# =============================================================================
# CSS Tree Fixtures
# =============================================================================


@pytest.fixture
def css_tree(tmp_path: Path) -> Path:
    """Create a small project tree of CSS files under tmp_path/project.

    Includes a node_modules file (skipped by directory expansion) and a
    non-CSS file (ignored).
    """
    root = tmp_path / "project"
    for rel_path, content in CSS_TREE_FILES:
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


# =============================================================================
# CLI Runner
# =============================================================================


class CLIResult:
    """Result of running a CLI command."""

    def __init__(self, returncode: int, stdout: str):
        self.returncode = returncode
        self.stdout = stdout


class CLIRunner:
    """Helper class to run CLI commands in-process with captured output."""

    def __init__(self, workdir: Path, monkeypatch: pytest.MonkeyPatch):
        self.workdir = workdir
        # Config discovery starts from the working directory
        monkeypatch.chdir(workdir)

    def run(self, args: list[str]) -> CLIResult:
        """Run CLI with given args and return result.

        Args:
            args: Command line arguments (without 'stylerules' prefix)

        Returns:
            CLIResult with return code and captured output
        """
        from stylerules.cli import main

        stdout_capture = io.StringIO()

        with redirect_stdout(stdout_capture):
            try:
                returncode = main(["--no-color", *args])
            except SystemExit as e:
                returncode = e.code if isinstance(e.code, int) else 1

        return CLIResult(
            returncode=returncode or 0,
            stdout=stdout_capture.getvalue(),
        )


@pytest.fixture
def cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CLIRunner:
    """In-process CLI runner rooted at tmp_path."""
    return CLIRunner(tmp_path, monkeypatch)
