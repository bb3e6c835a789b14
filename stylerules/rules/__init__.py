"""
Pluggable rule system for stylesheet linting.

This module provides the base types and protocols for implementing rules.

Usage:
    from stylerules.rules import register_rule, BaseRule, RuleMeta

    @register_rule
    class MyRule(BaseRule):
        def __init__(self):
            super().__init__("my-rule", "general", RuleMeta(url="..."))

        def check(self, stylesheet, options, context=None):
            result = self._make_result()
            # ... checking logic ...
            return result

    # Later, to run rules:
    from stylerules.rules import build_registry

    registry = build_registry()  # Import rule modules, register marked rules
    rule = registry.get("hue-degree-notation")
    result = rule.check(stylesheet, "angle")
"""

from .base import (
    BaseRule,
    Diagnostic,
    Rule,
    RuleContext,
    RuleMeta,
    RuleResult,
)
from .registry import RuleRegistry, build_registry, discover_rules, register_rule

__all__ = [
    # Base types
    "RuleContext",
    "RuleMeta",
    "RuleResult",
    "Diagnostic",
    # Protocols
    "Rule",
    # Base class
    "BaseRule",
    # Registry
    "RuleRegistry",
    "build_registry",
    "register_rule",
    "discover_rules",
]
