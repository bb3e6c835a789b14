"""
Lint command handlers for the stylerules CLI.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .config import load_config, parse_rule_override
from .formatters import FORMATTERS
from .rules.registry import build_registry
from .rules.runner import lint_paths
from .utils import log


def cmd_lint(args: argparse.Namespace) -> int:
    """Lint the given paths and print a report.

    Returns:
        0 when clean, 2 when problems remain, 1 on errors.
    """
    config = load_config(Path(args.config) if args.config else None)

    overrides = dict(parse_rule_override(text) for text in args.rule)
    config = config.with_overrides(rules=overrides, fix=True if args.fix else None)

    if not config.enabled_rules:
        log.error("No rules enabled. Add rules to .stylerules.yaml or pass --rule NAME=VALUE")
        return 1

    report = lint_paths([Path(p) for p in args.paths], config)

    if not report.files and not report.errors:
        log.error(f"No CSS files found in: {', '.join(args.paths)}")
        return 1

    output = FORMATTERS[args.formatter](report, log)
    if output:
        print(output)

    if args.formatter == "string" and config.fix and report.fixed_count:
        changed = sum(1 for f in report.files if f.changed)
        log.success(f"Fixed {report.fixed_count} problem(s) in {changed} file(s)")

    if report.errors or any(f.invalid_options for f in report.files):
        return 1
    if not report.passed:
        return 2
    return 0


def cmd_rules(args: argparse.Namespace) -> int:
    """List registered rules."""
    registry = build_registry()

    for category in registry.list_categories():
        log.header(f"Rules: {category}")
        for rule in sorted(registry.get_by_category(category), key=lambda r: r.name):
            fixable = "fixable" if rule.meta.fixable else ""
            log.table_row(rule.name, fixable)
            if rule.meta.description:
                log.dim(f"  {rule.meta.description}")
            log.dim(f"  {rule.meta.url}")
    return 0
