"""
Rule registry for plugin discovery and registration.

Rule classes mark themselves with @register_rule. A registry is built
explicitly with build_registry(), which imports the rule modules and
registers one instance of every marked class, enabling lookup by the names
used in configuration files.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
import warnings
from types import ModuleType
from typing import Optional, Type, TypeVar

from .base import Rule

# Type variable for the decorator
R = TypeVar("R", bound=Type[Rule])

log = logging.getLogger(__name__)

VALID_CATEGORIES = frozenset({"color", "syntax", "general"})


class RuleRegistry:
    """Registry for rule plugins.

    Manages registration and lookup of rules. discover_rules() fills a
    registry with the @register_rule classes; register() adds rules directly.
    """

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._by_category: dict[str, list[str]] = {}

    def register(self, rule: Rule) -> None:
        """Register a rule instance.

        Args:
            rule: Rule instance to register. Must implement the Rule protocol
                (have name, category, meta, check).

        Raises:
            TypeError: If rule doesn't implement the Rule protocol.
            ValueError: If a rule with the same name is already registered,
                or the category is unknown.
        """
        if not isinstance(rule, Rule):
            raise TypeError(
                f"Rule must implement the Rule protocol. "
                f"Got {type(rule).__name__} which is missing required "
                f"attributes/methods (name, category, meta, check)."
            )

        name = rule.name
        category = rule.category

        if name in self._rules:
            existing = self._rules[name]
            raise ValueError(
                f"Rule '{name}' is already registered "
                f"(existing: {type(existing).__name__}, "
                f"new: {type(rule).__name__})"
            )

        if category not in VALID_CATEGORIES:
            raise ValueError(
                f"Invalid category '{category}' for rule '{name}'. "
                f"Must be one of: {', '.join(sorted(VALID_CATEGORIES))}"
            )

        self._rules[name] = rule
        self._by_category.setdefault(category, []).append(name)

    def get(self, name: str) -> Optional[Rule]:
        """Get a rule by name, or None if not registered."""
        return self._rules.get(name)

    def get_by_category(self, category: str) -> list[Rule]:
        """Get all rules in a category (may be empty)."""
        names = self._by_category.get(category, [])
        return [self._rules[name] for name in names]

    def list_names(self) -> list[str]:
        """Get names of all registered rules, sorted alphabetically."""
        return sorted(self._rules.keys())

    def list_categories(self) -> list[str]:
        """Get all categories that have registered rules."""
        return sorted(self._by_category.keys())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._rules


def register_rule(cls: R) -> R:
    """Decorator marking a rule class for discovery.

    Marked classes are instantiated (with no arguments) and registered by
    ``discover_rules()`` into the registry it is given. Nothing is registered
    at import time.

    Usage:
        @register_rule
        class MyRule(BaseRule):
            def __init__(self):
                super().__init__("my-rule", "color", RuleMeta(url="..."))

            def check(self, stylesheet, options, context=None):
                ...
    """
    cls.__register_rule__ = True
    return cls


def _marked_rules(module: ModuleType) -> list[type]:
    """Rule classes defined in ``module`` and marked with @register_rule."""
    return [
        obj
        for obj in vars(module).values()
        if isinstance(obj, type)
        and obj.__dict__.get("__register_rule__", False)
        and obj.__module__ == module.__name__
    ]


def discover_rules(registry: RuleRegistry) -> int:
    """Import all rule modules and register their marked rules.

    Recursively scans the ``stylerules.rules`` package. Rules whose name is
    already in ``registry`` are left alone, so calling this repeatedly on the
    same registry is safe.

    Args:
        registry: Registry to populate.

    Returns:
        Number of rules newly registered by this call.

    Raises:
        TypeError: If a marked class doesn't implement the Rule protocol.
    """
    import stylerules.rules as rules_pkg

    initial_count = len(registry)
    skip_modules = {"__init__", "base", "registry", "runner"}

    def _import_recursive(package_name: str, package_path: list[str]) -> None:
        for module_info in pkgutil.iter_modules(package_path):
            if module_info.name in skip_modules or module_info.name.startswith("test_"):
                continue

            full_name = f"{package_name}.{module_info.name}"
            try:
                module = importlib.import_module(full_name)
            except ImportError as e:
                # Partial discovery is better than none
                warnings.warn(f"Failed to import rule module '{full_name}': {e}")
                continue

            for cls in _marked_rules(module):
                rule = cls()
                if rule.name not in registry:
                    registry.register(rule)

            if module_info.ispkg and hasattr(module, "__path__"):
                _import_recursive(full_name, list(module.__path__))

    _import_recursive("stylerules.rules", list(rules_pkg.__path__))

    return len(registry) - initial_count


def build_registry() -> RuleRegistry:
    """Create a registry holding every built-in rule.

    Called once per lint run (and by ``stylerules rules``); each call returns
    a new, independent registry.
    """
    registry = RuleRegistry()
    count = discover_rules(registry)
    log.debug("Registered %d rule(s)", count)
    return registry
