"""
Hue notation rule (hue-degree-notation).

Requires the hue argument of ``hsl()``, ``hsla()``, ``hwb()``, ``lch()`` and
``oklch()`` to use one notation consistently:

- "angle": the hue carries the ``deg`` unit (``hsl(200deg 50% 50%)``)
- "number": the hue is a bare number (``hsl(200 50% 50%)``)

Only hues written as a bare number or in degrees are policed. Other angle
units (``grad``, ``rad``, ``turn``), variables, interpolation and nested
functions such as ``var()`` or ``calc()`` are left alone. The rule does not
check the rest of the color function's syntax.

Fixable: in fix mode the hue token is rewritten in place and the declaration
value is re-serialized once, keeping every other character as written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from stylerules.css.stylesheet import Declaration, Stylesheet
from stylerules.css.syntax import is_standard_syntax_value
from stylerules.css.value_parser import FUNCTION, WORD, ValueNode, parse_value, unit
from ..base import BaseRule, RuleContext, RuleMeta, RuleResult
from ..registry import register_rule

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

RULE_NAME = "hue-degree-notation"

META = RuleMeta(
    url="https://stylelint.io/user-guide/rules/hue-degree-notation",
    fixable=True,
    description="Specify number or angle notation for degree hues",
)

messages = {
    "expected": lambda unfixed, fixed: f'Expected "{unfixed}" to be "{fixed}"',
}

POLICIES = ("angle", "number")

# Hue is the first coordinate in HSL/HWB spaces and the third in LCH spaces
HUE_FIRST_ARG_FUNCS = ("hsl", "hsla", "hwb")
HUE_THIRD_ARG_FUNCS = ("lch", "oklch")

HUE_ARG_INDEX: Mapping[str, int] = MappingProxyType({
    **{name: 0 for name in HUE_FIRST_ARG_FUNCS},
    **{name: 2 for name in HUE_THIRD_ARG_FUNCS},
})
HUE_FUNCS = frozenset(HUE_ARG_INDEX)

HAS_HUE_COLOR_FUNC = re.compile(
    r"\b(?:%s)\(" % "|".join(sorted(HUE_FUNCS, key=len, reverse=True)),
    re.IGNORECASE,
)


# =============================================================================
# Hue Location and Notation
# =============================================================================


def find_hue(node: ValueNode) -> Optional[ValueNode]:
    """Return the hue argument of a color function node.

    Only word and function children count as arguments; spaces, dividers
    and comments are skipped.

    Returns:
        The hue node, or None if the function is not a hue function or has
        too few arguments.
    """
    index = HUE_ARG_INDEX.get(node.value.lower())
    if index is None:
        return None

    args = [child for child in node.nodes if child.type in (WORD, FUNCTION)]
    if index >= len(args):
        return None
    return args[index]


def is_degree(value: str) -> bool:
    dimension = unit(value)
    return dimension is not None and dimension.unit.lower() == "deg"


def is_number(value: str) -> bool:
    dimension = unit(value)
    return dimension is not None and dimension.unit == ""


def as_degree(value: str) -> str:
    return f"{value}deg"


def as_number(value: str) -> str:
    """Strip the unit from a dimension.

    Raises:
        TypeError: If the value has no numeric part. Callers only pass values
            already classified as degrees, so this signals a bug.
    """
    dimension = unit(value)
    if dimension is None:
        raise TypeError(f'The "{value}" value must have a unit')
    return dimension.number


# =============================================================================
# Rule
# =============================================================================


@dataclass
class HueFinding:
    """A non-conforming hue token within one declaration.

    Offsets are relative to the declaration start.
    """

    unfixed: str
    fixed: str
    index: int
    end_index: int


@register_rule
class HueDegreeNotationRule(BaseRule):
    """Enforces angle or number notation for color function hues.

    Primary option: "angle" | "number".
    """

    messages = messages

    def __init__(self) -> None:
        super().__init__(RULE_NAME, "color", META)

    def check(
        self,
        stylesheet: Stylesheet,
        options: Any,
        context: Optional[RuleContext] = None,
    ) -> RuleResult:
        context = context or RuleContext()
        result = self._make_result()

        if not self.validate_options(result, options, POLICIES):
            return result

        for decl in stylesheet.walk_decls():
            findings = self.check_declaration(decl, options, fix=context.fix)
            if context.fix:
                result.fixed_count += len(findings)
                continue
            for finding in findings:
                self.report(
                    result,
                    stylesheet,
                    decl,
                    messages["expected"](finding.unfixed, finding.fixed),
                    finding.index,
                    finding.end_index,
                    context,
                )

        return result

    def check_declaration(
        self,
        decl: Declaration,
        policy: str,
        fix: bool = False,
    ) -> list[HueFinding]:
        """Find (and optionally fix) non-conforming hues in one declaration.

        Args:
            decl: Declaration to inspect. Its value is replaced when ``fix``
                is set and at least one hue was rewritten.
            policy: "angle" or "number".
            fix: Rewrite offending hues in place.

        Returns:
            One HueFinding per non-conforming hue, in source order.
        """
        if not HAS_HUE_COLOR_FUNC.search(decl.value):
            return []

        findings: list[HueFinding] = []
        parsed = parse_value(decl.raw_value)

        def visit(node: ValueNode, *_: Any) -> None:
            if node.type != FUNCTION:
                return
            if node.value.lower() not in HUE_FUNCS:
                return

            hue = find_hue(node)
            if hue is None:
                return

            value = hue.value
            if not is_standard_syntax_value(value):
                return
            if not is_degree(value) and not is_number(value):
                return
            if policy == "angle" and is_degree(value):
                return
            if policy == "number" and is_number(value):
                return

            fixed = as_degree(value) if policy == "angle" else as_number(value)
            findings.append(
                HueFinding(
                    unfixed=value,
                    fixed=fixed,
                    index=decl.value_index + hue.source_index,
                    end_index=decl.value_index + hue.source_end_index,
                )
            )
            if fix:
                hue.value = fixed

        parsed.walk(visit)

        if fix and findings:
            decl.set_value(parsed.to_string())
            log.debug("Fixed %d hue(s) in '%s' declaration", len(findings), decl.prop)

        return findings
