# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Shallow, error-tolerant parsing of the leading node of a Dart file.

Tag lookup only needs the shape of the very first top-level node of a
test file: whether it is an ``import`` directive, which annotations sit in
front of it, and what their arguments look like. This module provides
exactly that without a full Dart grammar:

    @Tags(['smoke', 'slow'])
    import 'package:patrol/patrol.dart';

parses into::

    LeadingNode(
        kind=NodeKind.IMPORT,
        annotations=(
            Annotation(
                name="Tags",
                arguments=(
                    ListLiteral(elements=(
                        StringLiteral("smoke"), StringLiteral("slow"),
                    )),
                ),
            ),
        ),
    )

Tokenization is lazy, so only the leading part of the source is ever
scanned. Unterminated strings and comments simply run to the end of their
line or of the input. DartSyntaxError is raised when the leading
annotations cannot be read at all, or when list literals or string
interpolations nest deeper than MAX_NESTING_DEPTH.

Argument expressions are classified, not understood. List literals and
string literals are recognised; anything else (identifiers, calls,
collection ``if``/``for`` elements, maps) becomes an OtherExpression.
Strings containing ``$`` interpolation and adjacent string literals are
kept but flagged as not simple, matching what a Dart analyzer reports as
a plain string literal.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Union

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER_PATTERN = re.compile(
    r"0[xX][0-9a-fA-F]+|(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?"
)
_WHITESPACE_PATTERN = re.compile(r"\s+")
_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")
_BLANK_FIRST_LINE_PATTERN = re.compile(r"[ \t]*\r?\n")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_OPENING = {"(": ")", "[": "]", "{": "}"}
_CLOSING = frozenset(_OPENING.values())

# Deeper nesting of list literals or string interpolations is a syntax error
MAX_NESTING_DEPTH = 64


class DartSyntaxError(ValueError):
    """Raised when the leading node of a Dart source cannot be parsed.

    Attributes:
        line: 1-based line where parsing gave up
    """

    def __init__(self, message: str, line: int) -> None:
        self.line = line
        super().__init__(f"line {line}: {message}")


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    SCRIPT_TAG = "script_tag"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    For strings, ``value`` holds the decoded contents and ``interpolated``
    tells whether ``$`` interpolation occurred.
    """

    kind: TokenKind
    text: str
    line: int
    value: str | None = None
    interpolated: bool = False

    def is_punctuation(self, char: str) -> bool:
        return self.kind is TokenKind.PUNCTUATION and self.text == char


class NodeKind(str, Enum):
    """Kind of the first top-level node in a compilation unit."""

    SCRIPT_TAG = "script_tag"
    IMPORT = "import"
    EXPORT = "export"
    LIBRARY = "library"
    PART = "part"
    DECLARATION = "declaration"


@dataclass(frozen=True)
class StringLiteral:
    value: str
    is_simple: bool = True


@dataclass(frozen=True)
class ListLiteral:
    elements: tuple["Expression", ...]


@dataclass(frozen=True)
class NamedArgument:
    name: str
    value: "Expression"


@dataclass(frozen=True)
class OtherExpression:
    text: str


Expression = Union[StringLiteral, ListLiteral, NamedArgument, OtherExpression]


@dataclass(frozen=True)
class Annotation:
    """An ``@name(...)`` annotation.

    ``arguments`` is None when the annotation has no argument list at all,
    as in ``@override``.
    """

    name: str
    arguments: tuple[Expression, ...] | None = None


@dataclass(frozen=True)
class LeadingNode:
    kind: NodeKind
    annotations: tuple[Annotation, ...] = ()
    line: int = 1


_DIRECTIVE_KEYWORDS = {
    "import": NodeKind.IMPORT,
    "export": NodeKind.EXPORT,
    "library": NodeKind.LIBRARY,
    "part": NodeKind.PART,
}


class _Tokenizer:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._line = 1
        self._line_pos = 0
        self._interpolation_depth = 0

    def _line_at(self, pos: int) -> int:
        self._line += self.source.count("\n", self._line_pos, pos)
        self._line_pos = pos
        return self._line

    def _skip_trivia(self) -> None:
        source = self.source
        while self.pos < len(source):
            match = _WHITESPACE_PATTERN.match(source, self.pos)
            if match:
                self.pos = match.end()
            elif source.startswith("//", self.pos):
                end = source.find("\n", self.pos)
                self.pos = len(source) if end == -1 else end
            elif source.startswith("/*", self.pos):
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        # Dart block comments nest
        source = self.source
        depth = 0
        while self.pos < len(source):
            if source.startswith("/*", self.pos):
                depth += 1
                self.pos += 2
            elif source.startswith("*/", self.pos):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            else:
                self.pos += 1

    def _read_escape(self, chars: list[str]) -> None:
        source = self.source
        self.pos += 1
        if self.pos >= len(source):
            return
        char = source[self.pos]
        self.pos += 1
        if char == "x":
            match = _HEX_PATTERN.match(source[self.pos : self.pos + 2])
            if match and len(match.group()) == 2:
                chars.append(chr(int(match.group(), 16)))
                self.pos += 2
                return
        elif char == "u":
            if source.startswith("{", self.pos):
                end = source.find("}", self.pos)
                digits = source[self.pos + 1 : end] if end != -1 else ""
                if _HEX_PATTERN.fullmatch(digits) and int(digits, 16) <= 0x10FFFF:
                    chars.append(chr(int(digits, 16)))
                    self.pos = end + 1
                    return
            else:
                match = _HEX_PATTERN.match(source[self.pos : self.pos + 4])
                if match and len(match.group()) == 4:
                    chars.append(chr(int(match.group(), 16)))
                    self.pos += 4
                    return
        chars.append(_SIMPLE_ESCAPES.get(char, char))

    def _skip_interpolation(self) -> None:
        """Skip ``${...}`` starting at the opening brace."""
        if self._interpolation_depth >= MAX_NESTING_DEPTH:
            raise DartSyntaxError(
                "string interpolation nested too deeply", self._line_at(self.pos)
            )
        self._interpolation_depth += 1
        try:
            self._skip_braces()
        finally:
            self._interpolation_depth -= 1

    def _skip_braces(self) -> None:
        source = self.source
        depth = 0
        while self.pos < len(source):
            char = source[self.pos]
            if char in "'\"":
                self._read_string(raw=False)
                continue
            if char == "r" and source[self.pos + 1 : self.pos + 2] in ("'", '"'):
                self._read_string(raw=True)
                continue
            self.pos += 1
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return

    def _read_string(self, raw: bool) -> tuple[str, bool]:
        source = self.source
        if raw:
            self.pos += 1
        quote = source[self.pos]
        triple = source.startswith(quote * 3, self.pos)
        delimiter = quote * 3 if triple else quote
        self.pos += len(delimiter)

        if triple:
            # A first line holding only blanks is not part of the value
            match = _BLANK_FIRST_LINE_PATTERN.match(source, self.pos)
            if match:
                self.pos = match.end()

        chars: list[str] = []
        interpolated = False
        while self.pos < len(source):
            if source.startswith(delimiter, self.pos):
                self.pos += len(delimiter)
                break
            char = source[self.pos]
            if char == "\n" and not triple:
                break
            if raw:
                chars.append(char)
                self.pos += 1
            elif char == "\\":
                self._read_escape(chars)
            elif char == "$":
                interpolated = True
                self.pos += 1
                if source.startswith("{", self.pos):
                    self._skip_interpolation()
                else:
                    match = _IDENTIFIER_PATTERN.match(source, self.pos)
                    if match:
                        self.pos = match.end()
            else:
                chars.append(char)
                self.pos += 1
        return "".join(chars), interpolated

    def tokens(self) -> Iterator[Token]:
        source = self.source
        if source.startswith("\ufeff"):
            self.pos = 1

        if source.startswith("#!", self.pos):
            end = source.find("\n", self.pos)
            end = len(source) if end == -1 else end
            yield Token(TokenKind.SCRIPT_TAG, source[self.pos : end], 1)
            self.pos = end

        while True:
            self._skip_trivia()
            start = self.pos
            if start >= len(source):
                yield Token(TokenKind.EOF, "", self._line_at(start))
                return

            char = source[start]
            next_char = source[start + 1 : start + 2]
            if char in "'\"" or (char == "r" and next_char in ("'", '"')):
                value, interpolated = self._read_string(raw=char == "r")
                yield Token(
                    TokenKind.STRING,
                    source[start : self.pos],
                    self._line_at(start),
                    value=value,
                    interpolated=interpolated,
                )
                continue

            match = _IDENTIFIER_PATTERN.match(source, start)
            if match:
                self.pos = match.end()
                yield Token(TokenKind.IDENTIFIER, match.group(), self._line_at(start))
                continue

            match = _NUMBER_PATTERN.match(source, start)
            if match:
                self.pos = match.end()
                yield Token(TokenKind.NUMBER, match.group(), self._line_at(start))
                continue

            self.pos += 1
            yield Token(TokenKind.PUNCTUATION, char, self._line_at(start))


def tokenize(source: str) -> Iterator[Token]:
    """Lazily tokenize Dart source, skipping whitespace and comments."""
    return _Tokenizer(source).tokens()


class _Parser:
    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._buffer: list[Token] = []
        self._list_depth = 0

    def _peek(self, offset: int = 0) -> Token:
        while len(self._buffer) <= offset:
            token = next(self._tokens, None)
            if token is None:
                # Keep returning the final EOF token
                if self._buffer:
                    token = self._buffer[-1]
                else:
                    token = Token(TokenKind.EOF, "", 1)
            self._buffer.append(token)
        return self._buffer[offset]

    def _advance(self) -> Token:
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            self._buffer.pop(0)
        return token

    def _expect(self, char: str) -> Token:
        token = self._peek()
        if not token.is_punctuation(char):
            raise DartSyntaxError(
                f"expected '{char}', found '{token.text or 'end of input'}'",
                token.line,
            )
        return self._advance()

    def parse_leading_node(self) -> LeadingNode | None:
        first = self._peek()
        if first.kind is TokenKind.EOF:
            return None
        if first.kind is TokenKind.SCRIPT_TAG:
            return LeadingNode(NodeKind.SCRIPT_TAG, line=first.line)

        annotations: list[Annotation] = []
        while self._peek().is_punctuation("@"):
            annotations.append(self._parse_annotation())

        token = self._peek()
        if token.kind is TokenKind.EOF:
            raise DartSyntaxError(
                "annotation is not followed by a directive or declaration",
                token.line,
            )
        kind = NodeKind.DECLARATION
        if token.kind is TokenKind.IDENTIFIER:
            kind = _DIRECTIVE_KEYWORDS.get(token.text, NodeKind.DECLARATION)
        return LeadingNode(kind, tuple(annotations), line=first.line)

    def _parse_annotation(self) -> Annotation:
        self._expect("@")
        token = self._advance()
        if token.kind is not TokenKind.IDENTIFIER:
            raise DartSyntaxError("expected annotation name", token.line)
        name = token.text
        while self._peek().is_punctuation(".") and (
            self._peek(1).kind is TokenKind.IDENTIFIER
        ):
            self._advance()
            name = f"{name}.{self._advance().text}"

        if self._peek().is_punctuation("<"):
            self._skip_type_arguments()

        arguments = None
        if self._peek().is_punctuation("("):
            arguments = self._parse_arguments()
        return Annotation(name, arguments)

    def _skip_type_arguments(self) -> None:
        depth = 0
        while True:
            token = self._advance()
            if token.kind is TokenKind.EOF:
                raise DartSyntaxError("unterminated type arguments", token.line)
            if token.is_punctuation("<"):
                depth += 1
            elif token.is_punctuation(">"):
                depth -= 1
                if depth == 0:
                    return

    def _parse_arguments(self) -> tuple[Expression, ...]:
        self._expect("(")
        arguments: list[Expression] = []
        while not self._peek().is_punctuation(")"):
            arguments.append(self._parse_argument())
            if self._peek().is_punctuation(","):
                self._advance()
            elif not self._peek().is_punctuation(")"):
                token = self._peek()
                raise DartSyntaxError(
                    f"expected ',' or ')', found '{token.text or 'end of input'}'",
                    token.line,
                )
        self._expect(")")
        return tuple(arguments)

    def _parse_argument(self) -> Expression:
        if self._peek().kind is TokenKind.IDENTIFIER and self._peek(1).is_punctuation(
            ":"
        ):
            name = self._advance().text
            self._advance()
            return NamedArgument(name, self._parse_expression())
        return self._parse_expression()

    def _at_expression_end(self) -> bool:
        token = self._peek()
        return token.kind is TokenKind.EOF or (
            token.kind is TokenKind.PUNCTUATION and token.text in {",", *_CLOSING}
        )

    def _parse_expression(self) -> Expression:
        token = self._peek()
        expression: Expression | None = None
        consumed: list[Token] = []

        if token.kind is TokenKind.STRING:
            strings: list[Token] = []
            while self._peek().kind is TokenKind.STRING:
                strings.append(self._advance())
            consumed.extend(strings)
            expression = StringLiteral(
                "".join(s.value or "" for s in strings),
                is_simple=len(strings) == 1 and not strings[0].interpolated,
            )
        elif (
            token.kind is TokenKind.IDENTIFIER
            and token.text == "const"
            and (self._peek(1).is_punctuation("[") or self._peek(1).is_punctuation("<"))
        ):
            consumed.append(self._advance())
            expression = self._parse_collection(consumed)
        elif token.is_punctuation("[") or token.is_punctuation("<"):
            expression = self._parse_collection(consumed)

        if expression is not None and self._at_expression_end():
            return expression
        return OtherExpression(self._skip_expression(consumed))

    def _parse_collection(self, consumed: list[Token]) -> Expression | None:
        """Parse ``<T>[...]`` or ``[...]``; other collections yield None."""
        if self._peek().is_punctuation("<"):
            self._skip_type_arguments()
            consumed.append(Token(TokenKind.PUNCTUATION, "<...>", self._peek().line))
            if not self._peek().is_punctuation("["):
                return None

        if self._list_depth >= MAX_NESTING_DEPTH:
            raise DartSyntaxError("list literal nested too deeply", self._peek().line)
        self._list_depth += 1
        try:
            return self._parse_list_elements(consumed)
        finally:
            self._list_depth -= 1

    def _parse_list_elements(self, consumed: list[Token]) -> ListLiteral:
        consumed.append(self._expect("["))
        elements: list[Expression] = []
        while not self._peek().is_punctuation("]"):
            if self._peek().kind is TokenKind.EOF:
                raise DartSyntaxError("unterminated list literal", self._peek().line)
            elements.append(self._parse_expression())
            if self._peek().is_punctuation(","):
                self._advance()
            elif not self._peek().is_punctuation("]"):
                token = self._peek()
                raise DartSyntaxError(
                    f"expected ',' or ']', found '{token.text or 'end of input'}'",
                    token.line,
                )
        consumed.append(self._expect("]"))
        return ListLiteral(tuple(elements))

    def _skip_expression(self, consumed: list[Token]) -> str:
        """Consume the rest of an expression and return its source text."""
        stack: list[str] = []
        parts = [token.text for token in consumed]
        while True:
            token = self._peek()
            if token.kind is TokenKind.EOF:
                raise DartSyntaxError("unexpected end of input", token.line)
            if token.kind is TokenKind.PUNCTUATION:
                if not stack and token.text in {",", *_CLOSING}:
                    break
                if token.text in _OPENING:
                    stack.append(_OPENING[token.text])
                elif token.text in _CLOSING:
                    if token.text != stack[-1]:
                        raise DartSyntaxError(
                            f"unbalanced '{token.text}'", token.line
                        )
                    stack.pop()
            parts.append(self._advance().text)
        return " ".join(parts)


def parse_leading_node(source: str) -> LeadingNode | None:
    """Parse the first top-level node of a Dart compilation unit.

    Args:
        source: Full Dart source text

    Returns:
        The leading node, or None when the source has no tokens at all
        (empty, or only whitespace and comments).

    Raises:
        DartSyntaxError: If the leading annotations are malformed
    """
    return _Parser(tokenize(source)).parse_leading_node()
