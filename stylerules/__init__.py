"""
stylerules - stylesheet linter for color notation rules.

A small rule-based CSS linter. Each rule checks declaration values and can
rewrite them in place without disturbing the surrounding text.

Usage:
    python -m stylerules <command> [options]

Commands:
    lint        Lint CSS files (optionally fixing problems in place)
    rules       List available rules
"""

from .cli import __version__, main

__all__ = ["__version__", "main"]
