"""
CSS parsing utilities shared by all rules.

- ``stylesheet``: declaration scanner with source positions
- ``value_parser``: lossless declaration value parser
- ``syntax``: standard-syntax (non-preprocessor) predicates
"""

from .stylesheet import Declaration, Stylesheet, parse_stylesheet
from .syntax import has_interpolation, is_standard_syntax_value
from .value_parser import (
    Dimension,
    ParsedValue,
    ValueNode,
    parse_value,
    stringify,
    unit,
    walk,
)

__all__ = [
    # Stylesheet scanning
    "Declaration",
    "Stylesheet",
    "parse_stylesheet",
    # Value parsing
    "Dimension",
    "ParsedValue",
    "ValueNode",
    "parse_value",
    "stringify",
    "unit",
    "walk",
    # Syntax predicates
    "has_interpolation",
    "is_standard_syntax_value",
]
