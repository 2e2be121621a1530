"""TestLang++ parser - turns a token stream into a syntax tree.

Tokens from the Lexer are fed one at a time into lark's interactive LALR(1)
parser, which stops at the first token the grammar cannot accept. The parse
tree is then converted into frozen tree models with a Transformer.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from lark import Transformer
from lark.exceptions import UnexpectedToken

from testlang.compiler.grammar import get_grammar
from testlang.compiler.lexer import Lexer
from testlang.compiler.tokens import Token, TokenKind
from testlang.compiler.tree import (
    BodyContains,
    HeaderEquals,
    HttpMethod,
    Program,
    Request,
    StatusEquals,
    StatusInRange,
    TestBlock,
)
from testlang.diagnostics import ParseError


class ProgramBuilder(Transformer[Any, Any]):
    """Transform the lark parse tree into tree models."""

    # =========================================================================
    # Document structure
    # =========================================================================

    def start(self, items: list[Any]) -> Program:
        """Root document - every test block in order."""
        return Program(tests=tuple(items))

    def test(self, items: list[Any]) -> TestBlock:
        """test Name { statements }"""
        name, *statements = items
        requests = tuple(s for s in statements if isinstance(s, Request))
        assertions = tuple(s for s in statements if not isinstance(s, Request))
        return TestBlock(name=name, requests=requests, assertions=assertions)

    # =========================================================================
    # Requests
    # =========================================================================

    def request(self, items: list[Any]) -> Request:
        """METHOD "path";"""
        method, path = items
        return Request(method=method, path=path)

    def method(self, items: list[Any]) -> HttpMethod:
        return HttpMethod(str(items[0]))

    # =========================================================================
    # Assertions
    # =========================================================================

    def status_equals(self, items: list[Any]) -> StatusEquals:
        """status = code"""
        return StatusEquals(code=items[0])

    def status_in_range(self, items: list[Any]) -> StatusInRange:
        """status in min..max"""
        low, high = items
        return StatusInRange(min=low, max=high)

    def body_contains(self, items: list[Any]) -> BodyContains:
        """body contains "text" """
        return BodyContains(text=items[0])

    def header_equals(self, items: list[Any]) -> HeaderEquals:
        """header "Name" = "value" """
        name, value = items
        return HeaderEquals(name=name, value=value)

    # =========================================================================
    # Terminals
    # =========================================================================

    def STRING(self, token: Any) -> str:
        """Remove quotes from string."""
        return str(token)[1:-1]

    def INTEGER(self, token: Any) -> int:
        return int(token)

    def IDENTIFIER(self, token: Any) -> str:
        return str(token)


class Parser:
    """Parser over a token sequence (usually a Lexer)."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = tokens

    def parse(self) -> Program:
        """Consume the tokens and build a Program.

        Raises:
            ParseError: On the first token the grammar does not accept.
            LexError: If the underlying Lexer fails while being consumed.
        """
        interactive = get_grammar().parse_interactive()
        last: Token | None = None

        for token in self._tokens:
            if token.kind is TokenKind.EOF:
                return self._finish(interactive, token)
            self._feed(interactive, token)
            last = token

        # Sequence ended without an EOF token; close it right after the last one
        if last is None:
            end = Token(kind=TokenKind.EOF, text="", line=1, column=1)
        else:
            end = Token(kind=TokenKind.EOF, text="", line=last.line, column=last.column + len(last.text))
        return self._finish(interactive, end)

    def _feed(self, interactive: Any, token: Token) -> Any:
        try:
            return interactive.feed_token(token.to_lark())
        except UnexpectedToken as e:
            raise ParseError(token, _expected_kinds(e.expected)) from None

    def _finish(self, interactive: Any, end: Token) -> Program:
        tree = self._feed(interactive, end)
        return ProgramBuilder().transform(tree)


def _expected_kinds(names: Iterable[str]) -> frozenset[TokenKind]:
    return frozenset(TokenKind(name) for name in names)


def parse(source: str) -> Program:
    """Lex and parse TestLang++ source text into a Program."""
    return Parser(Lexer(source)).parse()
