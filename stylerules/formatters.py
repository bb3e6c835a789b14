"""
Output formatters for lint reports.

- "string": human-readable, grouped per file
- "json": machine-readable list of per-file results
"""

from __future__ import annotations

import json
from typing import Callable, Optional

from .rules.runner import LintReport
from .utils import Logger, log as default_log


def format_string(report: LintReport, logger: Optional[Logger] = None) -> str:
    """Format a report as text.

    Example:
        styles/app.css
          3:14  error  Expected "200" to be "200deg"  hue-degree-notation

        1 problem
    """
    logger = logger or default_log
    lines: list[str] = []

    for file_report in report.files:
        if file_report.passed:
            continue

        lines.append(logger.colorize(file_report.source or "<input>", "underline"))
        for message in file_report.invalid_options:
            lines.append(f"  {logger.colorize('Invalid option', 'yellow')}  {message}")
        for d in file_report.diagnostics:
            position = f"{d.line}:{d.column}"
            lines.append(
                f"  {position:<8} {logger.colorize(d.severity, 'red')}  "
                f"{d.message}  {logger.colorize(d.rule, 'dim')}"
            )
        lines.append("")

    problems = report.problem_count
    if problems:
        noun = "problem" if problems == 1 else "problems"
        lines.append(logger.colorize(f"{problems} {noun}", "bold"))

    return "\n".join(lines)


def format_json(report: LintReport, logger: Optional[Logger] = None) -> str:
    """Format a report as JSON (one object per linted file)."""
    payload = [
        {
            "source": file_report.source,
            "errored": not file_report.passed,
            "warnings": [d.to_dict() for d in file_report.diagnostics],
            "invalidOptionWarnings": [{"text": msg} for msg in file_report.invalid_options],
            "fixed": file_report.fixed_count,
        }
        for file_report in report.files
    ]
    return json.dumps(payload, indent=2)


FORMATTERS: dict[str, Callable[..., str]] = {
    "string": format_string,
    "json": format_json,
}
