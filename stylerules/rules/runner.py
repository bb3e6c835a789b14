"""
Lint runner: central orchestration for applying configured rules.

Parses each stylesheet once, runs every enabled rule against it in config
order, and in fix mode writes the rewritten stylesheet back to disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from stylerules.config import LintConfig
from stylerules.css.stylesheet import parse_stylesheet
from stylerules.utils import iter_css_files, log
from .base import Diagnostic, RuleContext, RuleResult
from .registry import RuleRegistry, build_registry

_log = logging.getLogger(__name__)

_BOM = "\ufeff"


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class FileReport:
    """Lint outcome for one stylesheet."""

    source: Optional[str]
    """File path, or None for text linted directly."""

    results: dict[str, RuleResult] = field(default_factory=dict)
    """Rule name -> RuleResult for each rule that ran."""

    original: str = ""
    """Stylesheet text as read."""

    output: Optional[str] = None
    """Rewritten text (fix mode only)."""

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """All diagnostics from every rule, in source order."""
        found = [d for result in self.results.values() for d in result.diagnostics]
        return sorted(found, key=lambda d: (d.index, d.rule))

    @property
    def invalid_options(self) -> list[str]:
        return [msg for result in self.results.values() for msg in result.invalid_options]

    @property
    def fixed_count(self) -> int:
        return sum(result.fixed_count for result in self.results.values())

    @property
    def changed(self) -> bool:
        return self.output is not None and self.output != self.original

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results.values())


@dataclass
class LintReport:
    """Aggregated result from linting a set of files."""

    files: list[FileReport] = field(default_factory=list)

    errors: list[str] = field(default_factory=list)
    """Error messages for unreadable files and unknown rules."""

    @property
    def passed(self) -> bool:
        return all(report.passed for report in self.files)

    @property
    def problem_count(self) -> int:
        return sum(len(report.diagnostics) for report in self.files)

    @property
    def fixed_count(self) -> int:
        return sum(report.fixed_count for report in self.files)


# =============================================================================
# Runner
# =============================================================================


def lint_text(
    css: str,
    config: LintConfig,
    fix: Optional[bool] = None,
    source: Optional[str] = None,
    errors: Optional[list[str]] = None,
    registry: Optional[RuleRegistry] = None,
) -> FileReport:
    """Run every enabled rule against one stylesheet.

    Args:
        css: Stylesheet text.
        config: Lint configuration (enabled rules and their options).
        fix: Fix mode. Defaults to ``config.fix``.
        source: File path used in diagnostics.
        errors: List that unknown rule names are reported to.
        registry: Rules to look names up in. A new one is built when omitted.

    Returns:
        FileReport with per-rule results, and the rewritten text in fix mode.
    """
    if registry is None:
        registry = build_registry()

    if fix is None:
        fix = config.fix

    # A byte order mark is not part of the first line
    bom = ""
    if css.startswith(_BOM):
        bom, css = _BOM, css[len(_BOM):]

    stylesheet = parse_stylesheet(css)
    report = FileReport(source=source, original=bom + css)
    context = RuleContext(fix=fix, source=source)

    for name, options in config.enabled_rules.items():
        rule = registry.get(name)
        if rule is None:
            message = f"Unknown rule '{name}'"
            if errors is not None and message not in errors:
                errors.append(message)
                log.warning(f"{message}, skipping")
            continue

        report.results[name] = rule.check(stylesheet, options, context)

    if fix:
        report.output = bom + stylesheet.to_string()

    return report


def lint_paths(
    paths: Iterable[Path],
    config: LintConfig,
    fix: Optional[bool] = None,
) -> LintReport:
    """Lint files and directories, writing fixes back in fix mode.

    Args:
        paths: Files and/or directories. Directories are searched for *.css.
        config: Lint configuration.
        fix: Fix mode. Defaults to ``config.fix``.

    Returns:
        LintReport with one FileReport per readable file.
    """
    if fix is None:
        fix = config.fix

    lint_report = LintReport()
    registry = build_registry()

    for path in iter_css_files(paths, config.ignore):
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                css = f.read()
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"{path}: cannot read file ({e})"
            lint_report.errors.append(error_msg)
            log.error(error_msg)
            continue

        report = lint_text(
            css, config, fix=fix, source=str(path), errors=lint_report.errors, registry=registry
        )
        lint_report.files.append(report)

        if report.changed:
            try:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(report.output)
            except OSError as e:
                error_msg = f"{path}: cannot write fixes ({e})"
                lint_report.errors.append(error_msg)
                log.error(error_msg)
                continue
            _log.debug("Wrote %d fix(es) to %s", report.fixed_count, path)

    return lint_report
