"""Token model shared by the lexer and the parser.

TokenKind values are the terminal names used in grammar.lark, so a Token can be
handed to lark as-is. Keywords and punctuation carry a leading underscore there,
which keeps them out of the parse tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lark import Token as LarkToken


class TokenKind(str, Enum):
    """Closed set of token classes produced by the lexer."""

    # Keywords
    TEST = "_TEST"
    EXPECT = "_EXPECT"
    STATUS = "_STATUS"
    BODY = "_BODY"
    CONTAINS = "_CONTAINS"
    HEADER = "_HEADER"
    IN = "_IN"

    # HTTP methods
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    INTEGER = "INTEGER"

    # Punctuation
    LBRACE = "_LBRACE"
    RBRACE = "_RBRACE"
    SEMICOLON = "_SEMICOLON"
    EQUALS = "_EQUALS"
    RANGE = "_RANGE"

    EOF = "$END"

    @property
    def is_keyword(self) -> bool:
        return self in _KEYWORDS

    @property
    def is_method(self) -> bool:
        return self in _METHODS

    @property
    def is_punctuation(self) -> bool:
        return self in _PUNCTUATION

    @property
    def display(self) -> str:
        """Human-readable form used in diagnostics."""
        return _DISPLAY[self]


_KEYWORDS = frozenset(
    {
        TokenKind.TEST,
        TokenKind.EXPECT,
        TokenKind.STATUS,
        TokenKind.BODY,
        TokenKind.CONTAINS,
        TokenKind.HEADER,
        TokenKind.IN,
    }
)

_METHODS = frozenset({TokenKind.GET, TokenKind.POST, TokenKind.PUT, TokenKind.DELETE})

_PUNCTUATION = frozenset(
    {
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.SEMICOLON,
        TokenKind.EQUALS,
        TokenKind.RANGE,
    }
)

_DISPLAY = {
    TokenKind.TEST: "'test'",
    TokenKind.EXPECT: "'expect'",
    TokenKind.STATUS: "'status'",
    TokenKind.BODY: "'body'",
    TokenKind.CONTAINS: "'contains'",
    TokenKind.HEADER: "'header'",
    TokenKind.IN: "'in'",
    TokenKind.GET: "'GET'",
    TokenKind.POST: "'POST'",
    TokenKind.PUT: "'PUT'",
    TokenKind.DELETE: "'DELETE'",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.STRING: "string literal",
    TokenKind.INTEGER: "integer literal",
    TokenKind.LBRACE: "'{'",
    TokenKind.RBRACE: "'}'",
    TokenKind.SEMICOLON: "';'",
    TokenKind.EQUALS: "'='",
    TokenKind.RANGE: "'..'",
    TokenKind.EOF: "end of input",
}


@dataclass(frozen=True)
class Token:
    """A classified run of source characters. Line and column are 1-based."""

    kind: TokenKind
    text: str
    line: int
    column: int

    def to_lark(self) -> LarkToken:
        """Convert to a lark token for the interactive parser."""
        return LarkToken(self.kind.value, self.text, line=self.line, column=self.column)

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text!r}) at {self.line}:{self.column}"
