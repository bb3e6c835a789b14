"""
Configuration loading for stylerules.

Reads a YAML config file (``.stylerules.yaml`` by default, searched from the
working directory upward) and validates it into a ``LintConfig`` model.

Example config:

    rules:
      hue-degree-notation: angle
    fix: false
    ignore:
      - "vendor/**"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


CONFIG_FILENAMES = (".stylerules.yaml", ".stylerules.yml")


class ConfigError(ValueError):
    """Raised when a config file or override cannot be used."""


# =============================================================================
# Models
# =============================================================================


class LintConfig(BaseModel):
    """Validated lint configuration."""

    model_config = ConfigDict(extra="forbid")

    rules: Dict[str, Any] = Field(
        default_factory=dict,
        description="Rule name -> primary option. A null option disables the rule.",
    )
    fix: bool = Field(False, description="Rewrite fixable problems in place")
    ignore: List[str] = Field(
        default_factory=list, description="Glob patterns of files to skip"
    )

    @property
    def enabled_rules(self) -> Dict[str, Any]:
        return {name: options for name, options in self.rules.items() if options is not None}

    def with_overrides(
        self,
        rules: Optional[Dict[str, Any]] = None,
        fix: Optional[bool] = None,
    ) -> "LintConfig":
        """Return a copy with command-line overrides applied."""
        update: Dict[str, Any] = {}
        if rules:
            update["rules"] = {**self.rules, **rules}
        if fix is not None:
            update["fix"] = fix
        return self.model_copy(update=update)


# =============================================================================
# Loading
# =============================================================================


def find_config(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest config file, searching from start_dir (or cwd) upward."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()
    while True:
        for name in CONFIG_FILENAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current == current.parent:
            return None
        current = current.parent


def load_config(path: Optional[Path] = None) -> LintConfig:
    """Load and validate a config file.

    Args:
        path: Explicit config path. If None, the nearest config file is used,
            and an empty config is returned when there is none.

    Returns:
        Validated LintConfig.

    Raises:
        ConfigError: If the file can't be read, isn't valid YAML, or doesn't
            match the config schema.
    """
    if path is None:
        path = find_config()
        if path is None:
            return LintConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    try:
        return LintConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def parse_rule_override(text: str) -> tuple[str, Any]:
    """Parse a ``name=value`` command-line rule override.

    The value is read as YAML, so ``null`` disables a rule and plain words
    stay strings.
    """
    name, sep, raw_value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ConfigError(f"Invalid rule override '{text}' (expected NAME=VALUE)")

    try:
        value = yaml.safe_load(raw_value) if raw_value.strip() else None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid value in rule override '{text}': {e}") from e
    return name, value
