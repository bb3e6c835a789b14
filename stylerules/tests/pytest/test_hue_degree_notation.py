"""
Tests for the hue-degree-notation rule.

Tests cover:
- Fix mode for both policies and every hue function
- Check mode diagnostics and their positions
- Tokens the rule must leave alone (variables, other units, nested functions)
- Option validation
- Hue helpers (find_hue, is_degree, is_number, as_degree, as_number)
"""

from __future__ import annotations

import pytest

from stylerules.css.stylesheet import parse_stylesheet
from stylerules.css.value_parser import parse_value
from stylerules.rules.base import RuleContext
from stylerules.rules.color.hue_degree_notation import (
    HUE_ARG_INDEX,
    HueDegreeNotationRule,
    as_degree,
    as_number,
    find_hue,
    is_degree,
    is_number,
    messages,
)


@pytest.fixture
def rule() -> HueDegreeNotationRule:
    return HueDegreeNotationRule()


def fix_css(rule: HueDegreeNotationRule, css: str, policy: str) -> str:
    """Run the rule in fix mode and return the rewritten stylesheet."""
    sheet = parse_stylesheet(css)
    rule.check(sheet, policy, RuleContext(fix=True))
    return sheet.to_string()


def check_css(rule: HueDegreeNotationRule, css: str, policy: str) -> list[str]:
    """Run the rule in check mode and return the diagnostic messages."""
    result = rule.check(parse_stylesheet(css), policy)
    return [d.message for d in result.diagnostics]


# =============================================================================
# Fix Mode Tests
# =============================================================================


@pytest.mark.evergreen
class TestFix:
    """Verify hues are rewritten to the configured notation."""

    def test_number_to_angle(self, rule: HueDegreeNotationRule) -> None:
        """A bare hue gains the deg unit under 'angle'."""
        assert fix_css(rule, "color: hsl(200 50% 50%)", "angle") == "color: hsl(200deg 50% 50%)"

    def test_angle_to_number(self, rule: HueDegreeNotationRule) -> None:
        """A degree hue loses its unit under 'number'."""
        assert fix_css(rule, "color: hsl(200deg 50% 50%)", "number") == "color: hsl(200 50% 50%)"

    def test_third_argument_hue(self, rule: HueDegreeNotationRule) -> None:
        """lch() carries its hue in the third argument."""
        assert fix_css(rule, "color: lch(50% 40 30deg)", "number") == "color: lch(50% 40 30)"

    @pytest.mark.parametrize(
        "before, after",
        [
            ("hsl(120 100% 50%)", "hsl(120deg 100% 50%)"),
            ("hsla(120 100% 50% / 0.5)", "hsla(120deg 100% 50% / 0.5)"),
            ("hwb(120 0% 0%)", "hwb(120deg 0% 0%)"),
            ("lch(50% 40 120)", "lch(50% 40 120deg)"),
            ("oklch(0.7 0.1 120)", "oklch(0.7 0.1 120deg)"),
        ],
    )
    def test_every_hue_function(
        self, rule: HueDegreeNotationRule, before: str, after: str
    ) -> None:
        css = f"a {{ color: {before}; }}"
        assert fix_css(rule, css, "angle") == f"a {{ color: {after}; }}"

    def test_legacy_comma_syntax(self, rule: HueDegreeNotationRule) -> None:
        """Comma-separated arguments keep their exact spacing."""
        css = "a { color: hsla(200 , 50%,50%, .5); }"
        assert fix_css(rule, css, "angle") == "a { color: hsla(200deg , 50%,50%, .5); }"

    def test_case_insensitive_function_and_unit(self, rule: HueDegreeNotationRule) -> None:
        """Function names and the deg unit match in any case."""
        assert fix_css(rule, "color: HSL(10 1% 1%)", "angle") == "color: HSL(10deg 1% 1%)"
        assert fix_css(rule, "color: Hwb(10DEG 1% 1%)", "number") == "color: Hwb(10 1% 1%)"

    def test_signed_and_fractional_numbers(self, rule: HueDegreeNotationRule) -> None:
        assert fix_css(rule, "color: hsl(-30 1% 1%)", "angle") == "color: hsl(-30deg 1% 1%)"
        assert fix_css(rule, "color: hsl(.5deg 1% 1%)", "number") == "color: hsl(.5 1% 1%)"

    def test_several_hues_in_one_declaration(self, rule: HueDegreeNotationRule) -> None:
        """Every hue function in a value is fixed and counted."""
        sheet = parse_stylesheet(
            "a { background: linear-gradient(hsl(10 1% 1%), hwb(20 0% 0%) 50%, red); }"
        )
        result = rule.check(sheet, "angle", RuleContext(fix=True))

        assert result.fixed_count == 2
        assert result.diagnostics == []
        assert sheet.to_string() == (
            "a { background: linear-gradient(hsl(10deg 1% 1%), hwb(20deg 0% 0%) 50%, red); }"
        )

    def test_other_declarations_untouched(self, rule: HueDegreeNotationRule) -> None:
        """Only the offending declaration changes; comments and spacing survive."""
        css = (
            "/* palette */\n"
            ".a {\n"
            "  color:   hsl( 200 50% 50% ) !important;\n"
            "  background: hsl(10deg 1% 1%);\n"
            "  border: 1px solid red;\n"
            "}\n"
        )
        expected = css.replace("hsl( 200 50%", "hsl( 200deg 50%")
        assert fix_css(rule, css, "angle") == expected

    def test_fix_is_idempotent(self, rule: HueDegreeNotationRule) -> None:
        """A fixed stylesheet produces no further findings."""
        once = fix_css(rule, "a { color: hsl(1 2% 3%); b: lch(1% 2 3); }", "angle")
        twice = fix_css(rule, once, "angle")

        assert twice == once
        assert check_css(rule, once, "angle") == []

    def test_fix_marks_declaration_changed(self, rule: HueDegreeNotationRule) -> None:
        sheet = parse_stylesheet("color: hsl(1 2% 3%); margin: 0")
        rule.check(sheet, "angle", RuleContext(fix=True))
        assert [d.changed for d in sheet.walk_decls()] == [True, False]


# =============================================================================
# Check Mode Tests
# =============================================================================


@pytest.mark.evergreen
class TestCheck:
    """Verify diagnostics in check mode."""

    def test_diagnostic_points_at_hue(self, rule: HueDegreeNotationRule) -> None:
        """The diagnostic spans exactly the hue token."""
        sheet = parse_stylesheet("color: hsl(200 50% 50%)")
        result = rule.check(sheet, "angle")

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.message == 'Expected "200" to be "200deg"'
        assert diagnostic.rule == "hue-degree-notation"
        assert diagnostic.severity == "error"
        assert diagnostic.prop == "color"
        assert (diagnostic.index, diagnostic.end_index) == (11, 14)
        assert sheet.source[diagnostic.index:diagnostic.end_index] == "200"
        assert (diagnostic.line, diagnostic.column) == (1, 12)
        assert (diagnostic.end_line, diagnostic.end_column) == (1, 15)

    def test_positions_in_multiline_stylesheet(self, rule: HueDegreeNotationRule) -> None:
        css = ".dark {\n  background: lch(50% 40 30deg);\n}\n"
        result = rule.check(parse_stylesheet(css), "number", RuleContext(source="dark.css"))

        diagnostic = result.diagnostics[0]
        assert diagnostic.message == 'Expected "30deg" to be "30"'
        assert (diagnostic.line, diagnostic.column) == (2, 26)
        assert (diagnostic.end_line, diagnostic.end_column) == (2, 31)
        assert diagnostic.source == "dark.css"

    def test_check_does_not_modify(self, rule: HueDegreeNotationRule) -> None:
        """Check mode never rewrites values."""
        sheet = parse_stylesheet("color: hsl(200 50% 50%)")
        rule.check(sheet, "angle")
        assert sheet.changed is False

    def test_conforming_values_pass(self, rule: HueDegreeNotationRule) -> None:
        result = rule.check(parse_stylesheet("a { color: hsl(200deg 50% 50%); }"), "angle")
        assert result.passed is True
        assert result.fixed_count == 0

    def test_hue_after_comment(self, rule: HueDegreeNotationRule) -> None:
        """Comments inside the function are not counted as arguments."""
        assert check_css(rule, "color: hsl(/* h */ 200 50% 50%)", "angle") == [
            'Expected "200" to be "200deg"'
        ]

    @pytest.mark.parametrize("value", ["200", "200deg", "-1.5", "1e2deg"])
    def test_policies_are_exclusive(self, rule: HueDegreeNotationRule, value: str) -> None:
        """A degree-or-number hue is accepted by exactly one policy."""
        css = f"color: hsl({value} 50% 50%)"
        reported = [bool(check_css(rule, css, policy)) for policy in ("angle", "number")]
        assert sorted(reported) == [False, True]


# =============================================================================
# Ignored Token Tests
# =============================================================================


@pytest.mark.evergreen
class TestIgnored:
    """Verify tokens the rule leaves alone under both policies."""

    @pytest.mark.parametrize(
        "css",
        [
            "color: hsl($hue 50% 50%)",
            "color: hsl(-$hue 50% 50%)",
            "color: hsl(@hue 50% 50%)",
            "color: hsl(#{$hue} 50% 50%)",
            "color: hwb(200grad 50% 50%)",
            "color: hsl(1rad 50% 50%)",
            "color: hsl(0.5turn 50% 50%)",
            "color: hsl(var(--hue) 50% 50%)",
            "color: hsl(calc(10 + 20) 50% 50%)",
            "color: hsl(none 50% 50%)",
            "color: hsl(\u0662\u0660\u0660 50% 50%)",
            "color: lch(50% 40)",
            "color: hsl()",
            "color: rgb(200 50 50)",
            "color: red",
            "color: /* hsl(1 2% 3%) */ red",
            "content: 'hsl(1 2% 3%)'",
        ],
    )
    @pytest.mark.parametrize("policy", ["angle", "number"])
    def test_left_alone(self, rule: HueDegreeNotationRule, css: str, policy: str) -> None:
        assert check_css(rule, css, policy) == []
        assert fix_css(rule, css, policy) == css

    def test_nested_hue_function_inside_var_fallback(self, rule: HueDegreeNotationRule) -> None:
        """Hue functions nested in other functions are still checked."""
        assert fix_css(rule, "color: var(--c, hsl(1 2% 3%))", "angle") == (
            "color: var(--c, hsl(1deg 2% 3%))"
        )


# =============================================================================
# Option Tests
# =============================================================================


@pytest.mark.evergreen
class TestOptions:
    """Verify primary option validation."""

    @pytest.mark.parametrize("option", ["degrees", "", True, 1, ["angle"]])
    def test_invalid_option(self, rule: HueDegreeNotationRule, option: object) -> None:
        """An unknown option is reported and the rule does not run."""
        result = rule.check(parse_stylesheet("color: hsl(200 50% 50%)"), option)

        assert result.diagnostics == []
        assert result.invalid_options == [
            f'Invalid option value "{option}" for rule "hue-degree-notation"'
        ]
        assert result.passed is False

    def test_invalid_option_does_not_fix(self, rule: HueDegreeNotationRule) -> None:
        sheet = parse_stylesheet("color: hsl(200 50% 50%)")
        result = rule.check(sheet, "degrees", RuleContext(fix=True))
        assert result.fixed_count == 0
        assert sheet.changed is False


# =============================================================================
# Helper Tests
# =============================================================================


@pytest.mark.evergreen
class TestHelpers:
    """Verify hue location and notation helpers."""

    def test_hue_positions(self) -> None:
        assert dict(HUE_ARG_INDEX) == {"hsl": 0, "hsla": 0, "hwb": 0, "lch": 2, "oklch": 2}

    def test_hue_positions_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            HUE_ARG_INDEX["lab"] = 0  # type: ignore[index]

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("hsl(200 50% 50%)", "200"),
            ("hsla(200, 50%, 50%)", "200"),
            ("lch(50% 40 30deg)", "30deg"),
            ("OKLCH(0.5 0.1 90)", "90"),
        ],
    )
    def test_find_hue(self, value: str, expected: str) -> None:
        func = parse_value(value).nodes[0]
        hue = find_hue(func)
        assert hue is not None
        assert hue.value == expected

    @pytest.mark.parametrize("value", ["lch(50% 40)", "hsl()", "rgb(1 2 3)", "lab(1 2 3)"])
    def test_find_hue_none(self, value: str) -> None:
        assert find_hue(parse_value(value).nodes[0]) is None

    def test_notation_predicates(self) -> None:
        assert is_degree("30deg") and is_degree("30DEG")
        assert not is_degree("30") and not is_degree("30grad") and not is_degree("deg")
        assert is_number("30") and is_number("-1.5e2")
        assert not is_number("30deg") and not is_number("$h")

    def test_conversions(self) -> None:
        assert as_degree("30") == "30deg"
        assert as_number("30deg") == "30"
        assert as_number("-1.5e2DEG") == "-1.5e2"

    def test_as_number_requires_numeric_value(self) -> None:
        with pytest.raises(TypeError, match='The "deg" value must have a unit'):
            as_number("deg")

    def test_message(self) -> None:
        assert messages["expected"]("200", "200deg") == 'Expected "200" to be "200deg"'
