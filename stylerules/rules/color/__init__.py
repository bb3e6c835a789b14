"""
Color rules package.

Provides rules for color function notation, including:
- Hue notation (angle vs. bare number) for hsl/hsla/hwb/lch/oklch
"""

from .hue_degree_notation import (
    HUE_ARG_INDEX,
    HUE_FUNCS,
    HueDegreeNotationRule,
    HueFinding,
    as_degree,
    as_number,
    find_hue,
    is_degree,
    is_number,
)

__all__ = [
    # Hue notation rule
    "HueDegreeNotationRule",
    "HueFinding",
    "HUE_ARG_INDEX",
    "HUE_FUNCS",
    # Hue helpers
    "find_hue",
    "is_degree",
    "is_number",
    "as_degree",
    "as_number",
]
