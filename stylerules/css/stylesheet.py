"""
Stylesheet scanner and source mapping.

Finds the declarations of a stylesheet and records where each declaration
and its value sit in the source, so that rules can report positions and
rewrite values without touching anything else in the file.

This is a lightweight scanner, not a full CSS parser. It tracks comments,
strings, parentheses and ``#{...}``/``@{...}`` interpolation well enough to
split statements on ``;``, ``{`` and ``}``, and treats every statement of the
form ``property: value`` as a declaration. Nested rules (SCSS/Less/CSS
nesting) work because statements ending in ``{`` are skipped as preludes.
SCSS/Less ``//`` line comments are skipped where a statement begins.
Declarations outside any block are accepted too, which lets the scanner
read inline style text such as ``color: red; margin: 0``.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterator, Optional


# =============================================================================
# Data Structures
# =============================================================================


@dataclass
class Declaration:
    """A ``property: value`` declaration found in a stylesheet.

    Attributes:
        prop: Property name as written (e.g. 'color', '--brand', '$hue').
        raw_value: Current value text, comments included, without
            ``!important``. Rules assign to it through ``set_value()``.
        source_index: Offset of the declaration start (the property name)
            in the stylesheet source.
        value_index: Offset of the value from the declaration start.
        original_value: Value text as it was scanned.
    """

    prop: str
    raw_value: str
    source_index: int
    value_index: int
    original_value: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not self.original_value:
            self.original_value = self.raw_value

    @property
    def value(self) -> str:
        """Value with comments removed."""
        return _remove_comments(self.raw_value)

    @property
    def value_source_index(self) -> int:
        """Offset of the value in the stylesheet source."""
        return self.source_index + self.value_index

    @property
    def changed(self) -> bool:
        return self.raw_value != self.original_value

    def set_value(self, value: str) -> None:
        self.raw_value = value


class Stylesheet:
    """Declarations of one stylesheet plus the source they came from."""

    def __init__(self, source: str, declarations: list[Declaration]) -> None:
        self.source = source
        self.declarations = declarations
        self._line_starts = [0] + [
            index + 1 for index, char in enumerate(source) if char == "\n"
        ]

    def walk_decls(self, prop: Optional[str] = None) -> Iterator[Declaration]:
        """Iterate declarations in source order, optionally for one property."""
        for decl in self.declarations:
            if prop is None or decl.prop.lower() == prop.lower():
                yield decl

    def position_at(self, index: int) -> tuple[int, int]:
        """Convert a source offset to a 1-based (line, column) pair."""
        index = max(0, min(index, len(self.source)))
        line = bisect_right(self._line_starts, index)
        column = index - self._line_starts[line - 1] + 1
        return line, column

    @property
    def changed(self) -> bool:
        return any(decl.changed for decl in self.declarations)

    def to_string(self) -> str:
        """Serialize the stylesheet, substituting every changed value."""
        parts: list[str] = []
        last = 0
        for decl in self.declarations:
            if not decl.changed:
                continue
            start = decl.value_source_index
            parts.append(self.source[last:start])
            parts.append(decl.raw_value)
            last = start + len(decl.original_value)
        parts.append(self.source[last:])
        return "".join(parts)


# =============================================================================
# Scanning
# =============================================================================

_WHITESPACE = " \t\n\r\f"

_PROP_RE = re.compile(r"(--[^\s:;{}]+|\$[-\w]+|[*_]?-?[a-zA-Z_][-\w]*)\s*:")
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _remove_comments(content: str) -> str:
    """Remove CSS comments from content."""
    return re.sub(r"/\*.*?\*/", "", content, flags=re.DOTALL)


def _skip_string(css: str, start: int) -> int:
    """Return the offset just past the string starting at ``start``."""
    quote = css[start]
    i = start + 1
    while i < len(css):
        char = css[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n":
            # Unclosed string ends at the line break
            return i
        i += 1
    return len(css)


def _skip_line(css: str, start: int) -> int:
    """Return the offset of the line break ending the line comment at ``start``."""
    newline = css.find("\n", start)
    return len(css) if newline == -1 else newline


def _scan_statement(css: str, start: int) -> tuple[int, str]:
    """Find the end of the statement beginning at ``start``.

    Returns:
        Tuple of (offset of the terminator, terminator), where the
        terminator is one of ';', '{', '}' or '' at end of input.
    """
    depth = 0
    i = start
    length = len(css)
    # Only whitespace and comments seen so far
    at_start = True
    while i < length:
        char = css[i]
        if char == "\\":
            i += 2
            at_start = False
            continue
        if css.startswith("/*", i):
            close = css.find("*/", i + 2)
            i = length if close == -1 else close + 2
            continue
        if at_start and css.startswith("//", i):
            i = _skip_line(css, i)
            continue
        if char not in _WHITESPACE:
            at_start = False
        if char in "'\"":
            i = _skip_string(css, i)
            continue
        if char in "#@" and css.startswith("{", i + 1):
            close = css.find("}", i + 2)
            i = length if close == -1 else close + 1
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif depth == 0 and char in ";{}":
            return i, char
        i += 1
    return length, ""


def _skip_whitespace_and_comments(css: str, start: int, end: int) -> int:
    pos = start
    while pos < end:
        if css[pos] in _WHITESPACE:
            pos += 1
        elif css.startswith("/*", pos):
            close = css.find("*/", pos + 2, end)
            pos = end if close == -1 else close + 2
        elif css.startswith("//", pos):
            pos = min(_skip_line(css, pos), end)
        else:
            break
    return pos


def _parse_declaration(css: str, start: int, end: int) -> Optional[Declaration]:
    """Parse the statement ``css[start:end]`` as a declaration, if it is one."""
    pos = _skip_whitespace_and_comments(css, start, end)
    match = _PROP_RE.match(css, pos, end)
    if match is None:
        return None

    value_start = match.end()
    while value_start < end and css[value_start] in _WHITESPACE:
        value_start += 1

    raw_value = css[value_start:end].rstrip(_WHITESPACE)
    important_match = _IMPORTANT_RE.search(raw_value)
    if important_match is not None:
        raw_value = raw_value[:important_match.start()]

    if not raw_value:
        return None

    return Declaration(
        prop=match.group(1),
        raw_value=raw_value,
        source_index=pos,
        value_index=value_start - pos,
    )


def parse_stylesheet(css: str) -> Stylesheet:
    """Scan CSS text into a ``Stylesheet``.

    Args:
        css: Raw stylesheet (or inline style) text.

    Returns:
        Stylesheet whose declarations are in source order.
    """
    declarations: list[Declaration] = []
    pos = 0
    while pos < len(css):
        end, terminator = _scan_statement(css, pos)
        if terminator != "{":
            decl = _parse_declaration(css, pos, end)
            if decl is not None:
                declarations.append(decl)
        pos = end + 1
    return Stylesheet(css, declarations)
