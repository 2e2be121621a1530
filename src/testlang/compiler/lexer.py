"""TestLang++ lexer - turns source text into a lazy stream of tokens."""

from __future__ import annotations

from collections.abc import Iterator

from lark.exceptions import UnexpectedCharacters

from testlang.compiler.grammar import get_grammar
from testlang.compiler.tokens import Token, TokenKind
from testlang.diagnostics import LexError


class Lexer:
    """Forward-only token iterator over one source document.

    Whitespace and `//` comments are skipped. The stream always ends with a
    single EOF token; once exhausted it stays exhausted, so re-scanning needs a
    new Lexer.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._stream: Iterator[object] | None = None
        self._done = False

    def __iter__(self) -> Lexer:
        return self

    def __next__(self) -> Token:
        if self._done:
            raise StopIteration

        if self._stream is None:
            self._stream = get_grammar().lex(self.source)

        try:
            raw = next(self._stream)
        except StopIteration:
            self._done = True
            return self._end_token()
        except UnexpectedCharacters as e:
            self._done = True
            raise self._lex_error(e.line, e.column) from None

        return Token(
            kind=TokenKind(raw.type),  # type: ignore[attr-defined]
            text=str(raw),
            line=raw.line,  # type: ignore[attr-defined]
            column=raw.column,  # type: ignore[attr-defined]
        )

    def _end_token(self) -> Token:
        """EOF sits just after the last character of the source."""
        line = self.source.count("\n") + 1
        column = len(self.source) - self.source.rfind("\n")
        return Token(kind=TokenKind.EOF, text="", line=line, column=column)

    def _lex_error(self, line: int, column: int) -> LexError:
        rest = self.source.split("\n")[line - 1][column - 1 :].rstrip("\r")
        if rest.startswith('"'):
            return LexError(line, column, rest, reason="unterminated string literal")
        return LexError(line, column, rest[:1], reason="unexpected character")


def tokenize(source: str) -> list[Token]:
    """Lex a whole document, including the trailing EOF token."""
    return list(Lexer(source))
