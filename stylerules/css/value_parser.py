"""
CSS declaration value parser.

Splits a declaration value into a tree of nodes (words, strings, dividers,
spaces, comments, functions) that serializes back to the exact input text.
Nodes are mutable: assigning a new ``value`` to a node and calling
``ParsedValue.to_string()`` substitutes the new text in place while every
other character of the original value is kept verbatim.

Node types:
    - "word": any run of characters that is not one of the other types
      (``200``, ``50%``, ``$hue``, ``#fff``)
    - "string": quoted text; ``value`` excludes the quotes
    - "div": one of ``,`` ``/`` ``:`` with surrounding whitespace kept in
      ``before``/``after``
    - "space": whitespace between other nodes
    - "comment": ``/* ... */``; ``value`` excludes the delimiters
    - "function": ``name(...)``; ``value`` is the name, children in ``nodes``
    - "unicode-range": ``U+0025-00FF``

Every node records ``source_index``/``source_end_index`` relative to the
start of the parsed text. The parser never raises: unclosed functions,
strings and comments are flagged with ``unclosed`` and serialize back
without the missing delimiter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional


# =============================================================================
# Node Types
# =============================================================================

WORD = "word"
STRING = "string"
DIV = "div"
SPACE = "space"
COMMENT = "comment"
FUNCTION = "function"
UNICODE_RANGE = "unicode-range"

_WHITESPACE = frozenset(" \t\n\r\f")
_QUOTES = frozenset("'\"")
_DIV_CHARS = frozenset(",/:")
_WORD_STOP = _WHITESPACE | _QUOTES | _DIV_CHARS | frozenset("()")

_UNICODE_RANGE_RE = re.compile(r"^[uU]\+[0-9a-fA-F?]{1,6}(?:-[0-9a-fA-F]{1,6})?$")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]*\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass
class ValueNode:
    """A single node of a parsed value.

    Only the attributes relevant to a node's ``type`` are meaningful; the
    others keep their defaults.
    """

    type: str
    value: str
    source_index: int = 0
    source_end_index: int = 0
    before: str = ""
    after: str = ""
    quote: str = ""
    unclosed: bool = False
    nodes: list["ValueNode"] = field(default_factory=list)


class Dimension(NamedTuple):
    """Numeric prefix and unit suffix of a token (``"30deg"`` -> ``("30", "deg")``)."""

    number: str
    unit: str


# =============================================================================
# Parsing
# =============================================================================


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> list[ValueNode]:
        return self._parse_nodes(depth=0)

    def _parse_nodes(self, depth: int) -> list[ValueNode]:
        text = self.text
        tokens: list[ValueNode] = []

        while self.pos < len(text):
            char = text[self.pos]

            if char == ")" and depth > 0:
                break

            if char in _WHITESPACE:
                tokens.append(self._read_space())
            elif char in _QUOTES:
                tokens.append(self._read_string())
            elif text.startswith("/*", self.pos):
                tokens.append(self._read_comment())
            elif char in _DIV_CHARS:
                tokens.append(
                    ValueNode(DIV, char, self.pos, self.pos + 1)
                )
                self.pos += 1
            elif char == "(":
                tokens.append(self._read_function("", self.pos))
            elif char == ")":
                # Stray closing paren at top level
                tokens.append(ValueNode(WORD, char, self.pos, self.pos + 1))
                self.pos += 1
            else:
                start = self.pos
                word = self._read_word()
                if self.pos < len(text) and text[self.pos] == "(":
                    tokens.append(self._read_function(word, start))
                elif _UNICODE_RANGE_RE.match(word):
                    tokens.append(ValueNode(UNICODE_RANGE, word, start, self.pos))
                else:
                    tokens.append(ValueNode(WORD, word, start, self.pos))

        return _attach_div_whitespace(tokens)

    def _read_space(self) -> ValueNode:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1
        return ValueNode(SPACE, self.text[start:self.pos], start, self.pos)

    def _read_string(self) -> ValueNode:
        text = self.text
        start = self.pos
        quote = text[start]
        self.pos += 1
        while self.pos < len(text):
            char = text[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            if char == quote:
                node = ValueNode(STRING, text[start + 1:self.pos], start, self.pos + 1, quote=quote)
                self.pos += 1
                return node
            self.pos += 1

        self.pos = len(text)
        return ValueNode(STRING, text[start + 1:], start, self.pos, quote=quote, unclosed=True)

    def _read_comment(self) -> ValueNode:
        text = self.text
        start = self.pos
        end = text.find("*/", start + 2)
        if end == -1:
            self.pos = len(text)
            return ValueNode(COMMENT, text[start + 2:], start, self.pos, unclosed=True)
        self.pos = end + 2
        return ValueNode(COMMENT, text[start + 2:end], start, self.pos)

    def _read_word(self) -> str:
        text = self.text
        start = self.pos
        while self.pos < len(text):
            char = text[self.pos]
            if char == "\\":
                self.pos = min(self.pos + 2, len(text))
                continue
            if char in _WORD_STOP or text.startswith("/*", self.pos):
                break
            self.pos += 1
        return text[start:self.pos]

    def _read_function(self, name: str, start: int) -> ValueNode:
        # self.pos is at the opening paren
        self.pos += 1
        node = ValueNode(FUNCTION, name, start)

        if name.lower() == "url" and not self._next_is_quote():
            self._read_url_body(node)
        else:
            children = self._parse_nodes(depth=1)
            if children and children[0].type == SPACE:
                node.before = children.pop(0).value
            if children and children[-1].type == SPACE:
                node.after = children.pop().value
            node.nodes = children

        if self.pos < len(self.text) and self.text[self.pos] == ")":
            self.pos += 1
        else:
            node.unclosed = True
        node.source_end_index = self.pos
        return node

    def _next_is_quote(self) -> bool:
        pos = self.pos
        while pos < len(self.text) and self.text[pos] in _WHITESPACE:
            pos += 1
        return pos < len(self.text) and self.text[pos] in _QUOTES

    def _read_url_body(self, node: ValueNode) -> None:
        """Keep an unquoted url() argument as one raw word."""
        text = self.text
        start = self.pos
        pos = start
        while pos < len(text) and text[pos] != ")":
            pos += 2 if text[pos] == "\\" else 1
        pos = min(pos, len(text))
        body = text[start:pos]
        self.pos = pos

        stripped = body.lstrip()
        node.before = body[:len(body) - len(stripped)]
        content = stripped.rstrip()
        node.after = stripped[len(content):]
        if content:
            content_start = start + len(node.before)
            node.nodes = [ValueNode(WORD, content, content_start, content_start + len(content))]


def _attach_div_whitespace(tokens: list[ValueNode]) -> list[ValueNode]:
    """Fold whitespace next to dividers into the divider's before/after."""
    result: list[ValueNode] = []
    for node in tokens:
        if node.type == DIV and result and result[-1].type == SPACE:
            space = result.pop()
            node.before = space.value
            node.source_index = space.source_index
        elif node.type == SPACE and result and result[-1].type == DIV and not result[-1].after:
            result[-1].after = node.value
            result[-1].source_end_index = node.source_end_index
            continue
        result.append(node)
    return result


# =============================================================================
# Serialization and Traversal
# =============================================================================


def stringify(nodes: list[ValueNode]) -> str:
    """Serialize a node list back to CSS text."""
    return "".join(_stringify_node(node) for node in nodes)


def _stringify_node(node: ValueNode) -> str:
    if node.type == STRING:
        return node.quote + node.value + ("" if node.unclosed else node.quote)
    if node.type == COMMENT:
        return "/*" + node.value + ("" if node.unclosed else "*/")
    if node.type == DIV:
        return node.before + node.value + node.after
    if node.type == FUNCTION:
        closing = "" if node.unclosed else ")"
        return f"{node.value}({node.before}{stringify(node.nodes)}{node.after}{closing}"
    return node.value


Visitor = Callable[[ValueNode, int, list[ValueNode]], Optional[bool]]


def walk(nodes: list[ValueNode], callback: Visitor) -> None:
    """Visit every node depth-first.

    The callback receives ``(node, index, siblings)``. Returning ``False``
    from the callback skips the children of that node.
    """
    for index, node in enumerate(nodes):
        if callback(node, index, nodes) is False:
            continue
        if node.type == FUNCTION and node.nodes:
            walk(node.nodes, callback)


class ParsedValue:
    """A mutable parse tree for one declaration value."""

    def __init__(self, text: str) -> None:
        self.nodes = _Parser(text).parse()

    def walk(self, callback: Visitor) -> None:
        walk(self.nodes, callback)

    def to_string(self) -> str:
        return stringify(self.nodes)


def parse_value(text: str) -> ParsedValue:
    """Parse a declaration value into a mutable ``ParsedValue``."""
    return ParsedValue(text)


# =============================================================================
# Units
# =============================================================================


def unit(text: str) -> Optional[Dimension]:
    """Split a token into its numeric prefix and unit suffix.

    Args:
        text: Token text such as ``"30"``, ``"30deg"``, ``"-1.5e3rad"``.

    Returns:
        ``Dimension(number, unit)`` with ``unit == ""`` for bare numbers, or
        None if the text does not start like a CSS number.
    """
    match = _NUMBER_RE.match(text)
    if match is None:
        return None
    return Dimension(match.group(), text[match.end():])
