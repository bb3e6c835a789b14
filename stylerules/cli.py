"""
Main CLI for the stylerules tool.

Provides a unified interface for linting stylesheets and listing rules.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .utils import log


# =============================================================================
# Version
# =============================================================================

__version__ = "0.1.0"


# =============================================================================
# Argument Parsing
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""

    parser = argparse.ArgumentParser(
        prog="stylerules",
        description="Stylesheet linter for color notation rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  lint        Lint CSS files (optionally fixing problems in place)
  rules       List available rules

Examples:
  stylerules lint styles/                              # Lint with .stylerules.yaml
  stylerules lint app.css --rule hue-degree-notation=angle
  stylerules lint styles/ --fix                        # Rewrite fixable problems
  stylerules lint app.css --formatter json             # Machine-readable output
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- lint ---
    lint_parser = subparsers.add_parser(
        "lint",
        help="Lint CSS files",
        description="Check CSS files against the configured rules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  no problems found (or all problems fixed)
  1  fatal error (bad config, unreadable file, unknown rule)
  2  problems found
        """,
    )
    lint_parser.add_argument(
        "paths",
        nargs="+",
        help="CSS files or directories to lint",
    )
    lint_parser.add_argument(
        "--config", "-c",
        help="Path to config file (default: nearest .stylerules.yaml)",
    )
    lint_parser.add_argument(
        "--fix",
        action="store_true",
        help="Rewrite fixable problems in place",
    )
    lint_parser.add_argument(
        "--rule", "-r",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Enable or override a rule, e.g. hue-degree-notation=number (repeatable)",
    )
    lint_parser.add_argument(
        "--formatter", "-f",
        choices=["string", "json"],
        default="string",
        help="Output format (default: string)",
    )

    # --- rules ---
    subparsers.add_parser(
        "rules",
        help="List available rules",
        description="Show every registered rule with its category and fixability.",
    )

    return parser


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        log.set_color(False)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "lint":
            from .lint_cmd import cmd_lint
            return cmd_lint(args)

        elif args.command == "rules":
            from .lint_cmd import cmd_rules
            return cmd_rules(args)

        else:
            log.error(f"Unknown command: {args.command}")
            return 1

    except KeyboardInterrupt:
        log.warning("\nInterrupted")
        return 130
    except Exception as e:
        log.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
