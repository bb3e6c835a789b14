"""
Base types and protocols for the pluggable rule system.

Defines the contract that all rules must follow, plus data containers for
rule context, diagnostics and results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from stylerules.css.stylesheet import Declaration, Stylesheet

log = logging.getLogger(__name__)


# =============================================================================
# Data Containers
# =============================================================================


@dataclass(frozen=True)
class RuleMeta:
    """Static metadata describing a rule."""

    url: str
    """Documentation URL for the rule."""

    fixable: bool = False
    """Whether the rule can rewrite the stylesheet in fix mode."""

    description: str = ""
    """One-line summary shown by ``stylerules rules``."""


@dataclass
class RuleContext:
    """Context provided to rules for one stylesheet run."""

    fix: bool = False
    """Rewrite offending values instead of reporting them."""

    source: Optional[str] = None
    """Path of the stylesheet being checked, if it came from a file."""


@dataclass
class Diagnostic:
    """A single problem reported by a rule.

    Offsets are absolute positions in the stylesheet source; lines and
    columns are 1-based, with the end position just past the offending text.
    """

    rule: str
    message: str
    index: int
    end_index: int
    line: int
    column: int
    end_line: int
    end_column: int
    severity: str = "error"
    source: Optional[str] = None
    prop: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the warning shape used by the JSON formatter."""
        return {
            "line": self.line,
            "column": self.column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
            "rule": self.rule,
            "severity": self.severity,
            "text": f"{self.message} ({self.rule})",
        }


@dataclass
class RuleResult:
    """Result returned by a rule after checking one stylesheet."""

    rule: str
    """Name of the rule that produced this result."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    """Problems found (check mode)."""

    fixed_count: int = 0
    """Number of problems rewritten in place (fix mode)."""

    invalid_options: list[str] = field(default_factory=list)
    """Messages for option values the rule rejected. Non-empty means the rule did not run."""

    @property
    def passed(self) -> bool:
        return not self.diagnostics and not self.invalid_options


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


@runtime_checkable
class Rule(Protocol):
    """Protocol for lint rules.

    Rules check a parsed stylesheet against their primary option and return
    a result. In fix mode they rewrite declaration values in place instead of
    reporting.

    Categories:
        - "color": Color notation and color function checks
        - "syntax": Generic value syntax checks
        - "general": Anything else
    """

    @property
    def name(self) -> str:
        """Unique identifier for this rule (e.g. 'hue-degree-notation')."""
        ...

    @property
    def category(self) -> str:
        """Rule category: 'color', 'syntax', or 'general'."""
        ...

    @property
    def meta(self) -> RuleMeta:
        """Documentation URL and fixability."""
        ...

    def check(
        self,
        stylesheet: Stylesheet,
        options: Any,
        context: Optional[RuleContext] = None,
    ) -> RuleResult:
        """Check a stylesheet and return results.

        Args:
            stylesheet: Parsed stylesheet. Mutated when ``context.fix`` is set.
            options: The rule's primary option from configuration.
            context: Fix mode flag and source path.

        Returns:
            RuleResult with diagnostics or a fixed count.
        """
        ...


# =============================================================================
# Base Classes (Optional Implementations)
# =============================================================================


class BaseRule:
    """Optional base class providing common rule functionality.

    Rules can inherit from this for convenience, or implement the Rule
    protocol directly.
    """

    def __init__(self, name: str, category: str, meta: RuleMeta) -> None:
        self._name = name
        self._category = category
        self._meta = meta

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> str:
        return self._category

    @property
    def meta(self) -> RuleMeta:
        return self._meta

    def check(
        self,
        stylesheet: Stylesheet,
        options: Any,
        context: Optional[RuleContext] = None,
    ) -> RuleResult:
        """Override this method in subclasses."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement check()"
        )

    def _make_result(self, **kwargs: Any) -> RuleResult:
        """Helper to create a RuleResult with this rule's name."""
        return RuleResult(rule=self.name, **kwargs)

    def validate_options(
        self,
        result: RuleResult,
        actual: Any,
        possible: Iterable[Any],
    ) -> bool:
        """Check the primary option against the allowed values.

        Records one invalid-option message on the result when the value is
        not allowed.

        Returns:
            True if the option is valid and the rule should run.
        """
        possible = tuple(possible)
        if actual in possible:
            return True

        message = f'Invalid option value "{actual}" for rule "{self.name}"'
        result.invalid_options.append(message)
        log.debug("%s (expected one of: %s)", message, ", ".join(map(str, possible)))
        return False

    def report(
        self,
        result: RuleResult,
        stylesheet: Stylesheet,
        decl: Declaration,
        message: str,
        index: int,
        end_index: int,
        context: Optional[RuleContext] = None,
    ) -> Diagnostic:
        """Record a diagnostic for a span of a declaration.

        Args:
            result: Result to append to.
            stylesheet: Stylesheet the declaration belongs to, for positions.
            decl: The offending declaration.
            message: Diagnostic text.
            index: Start offset relative to the declaration start.
            end_index: End offset (exclusive) relative to the declaration start.
            context: Run context, for the source path.

        Returns:
            The recorded Diagnostic.
        """
        start = decl.source_index + index
        end = decl.source_index + end_index
        line, column = stylesheet.position_at(start)
        end_line, end_column = stylesheet.position_at(end)

        diagnostic = Diagnostic(
            rule=self.name,
            message=message,
            index=start,
            end_index=end,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            source=context.source if context else None,
            prop=decl.prop,
        )
        result.diagnostics.append(diagnostic)
        return diagnostic
