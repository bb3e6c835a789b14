"""
Standard-syntax predicates.

Values written in a preprocessor dialect (SCSS/Less variables, interpolation,
template placeholders) cannot be reasoned about as plain CSS. Rules use these
predicates to leave such tokens alone.
"""

from __future__ import annotations

import re


_LESS_INTERPOLATION = re.compile(r"@\{.+?\}")
_PSV_INTERPOLATION = re.compile(r"\$\(.+?\)")
_SCSS_INTERPOLATION = re.compile(r"#\{.+?\}", re.DOTALL)
_TEMPLATE_INTERPOLATION = re.compile(r"\{.+?\}", re.DOTALL)

_SCSS_NAMESPACED_VARIABLE = re.compile(r"^.+\.\$")
_SCSS_NAMESPACED_FUNCTION = re.compile(r"^.+\.[-\w]+\(")


def has_interpolation(value: str) -> bool:
    """Check for Less, SCSS, postcss-simple-vars or template interpolation."""
    return any(
        pattern.search(value)
        for pattern in (
            _LESS_INTERPOLATION,
            _PSV_INTERPOLATION,
            _SCSS_INTERPOLATION,
            _TEMPLATE_INTERPOLATION,
        )
    )


def is_standard_syntax_value(value: str) -> bool:
    """Check whether a value token is plain CSS.

    Args:
        value: A single value token, e.g. ``"200"``, ``"$hue"``, ``"#{$h}"``.

    Returns:
        False for SCSS/Less variables (optionally preceded by an operator such
        as ``-$hue``), SCSS namespaced members, and interpolated text.
    """
    normalized = value
    # Operator in front of a variable (-$hue, +@hue)
    if value and value[0] in "-+*/":
        normalized = value[1:]

    if normalized.startswith("$"):
        return False
    if _SCSS_NAMESPACED_VARIABLE.match(value):
        return False
    if _SCSS_NAMESPACED_FUNCTION.match(value):
        return False
    if normalized.startswith("@"):
        return False
    if has_interpolation(normalized):
        return False
    return True
