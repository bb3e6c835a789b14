"""
Shared utilities for the stylerules CLI.
"""

from __future__ import annotations

import fnmatch
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

# =============================================================================
# Constants
# =============================================================================

CSS_SUFFIXES = {".css"}

# Directories never descended into when expanding paths
SKIP_DIRS = {"node_modules", ".git", "dist", "build", ".venv", "__pycache__"}


# =============================================================================
# Logging
# =============================================================================


class Logger:
    """Simple colored logger with --no-color support."""

    COLORS = {
        "reset": "\033[0m",
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "magenta": "\033[95m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "underline": "\033[4m",
    }

    def __init__(self, use_color: Optional[bool] = None):
        if use_color is None:
            self._use_color = sys.stdout.isatty()
        else:
            self._use_color = use_color

    def set_color(self, use_color: bool) -> None:
        """Set whether to use color output."""
        self._use_color = use_color

    def colorize(self, text: str, color: str) -> str:
        if not self._use_color:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def header(self, message: str) -> None:
        """Print a section header."""
        print(f"\n{self.colorize('===', 'cyan')} {self.colorize(message, 'bold')} {self.colorize('===', 'cyan')}")

    def success(self, message: str) -> None:
        """Print a success message."""
        print(f"  {self.colorize('[OK]', 'green')} {message}")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        print(f"  {self.colorize('[WARN]', 'yellow')} {message}")

    def error(self, message: str) -> None:
        """Print an error message."""
        print(f"  {self.colorize('[ERROR]', 'red')} {message}")

    def dim(self, message: str) -> None:
        """Print a dim/secondary message."""
        print(f"  {self.colorize(message, 'dim')}")

    def table_row(self, col1: str, col2: str, col1_width: int = 30) -> None:
        """Print a table row with two columns."""
        print(f"  {col1:<{col1_width}} {col2}")


# Global logger instance
log = Logger()


# =============================================================================
# Path Utilities
# =============================================================================


def is_ignored(path: Path, patterns: Iterable[str]) -> bool:
    """Check a path against glob patterns (matched on the POSIX form)."""
    posix = path.as_posix()
    return any(
        fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(path.name, pattern)
        for pattern in patterns
    )


def iter_css_files(paths: Iterable[Path], ignore: Iterable[str] = ()) -> Iterator[Path]:
    """Expand files and directories into the CSS files to lint.

    Files given explicitly are yielded whatever their suffix; directories
    are searched recursively for ``*.css``, skipping SKIP_DIRS.
    """
    ignore = list(ignore)
    seen: set[Path] = set()

    for path in paths:
        if path.is_dir():
            candidates = sorted(
                p for p in path.rglob("*")
                if p.is_file()
                and p.suffix.lower() in CSS_SUFFIXES
                and not any(part in SKIP_DIRS for part in p.relative_to(path).parts)
            )
        else:
            candidates = [path]

        for candidate in candidates:
            if candidate in seen or is_ignored(candidate, ignore):
                continue
            seen.add(candidate)
            yield candidate
