"""Shared lark grammar for the lexer and the parser."""

from pathlib import Path

from lark import Lark

# Load grammar from file adjacent to this module
GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Module-level instance; the grammar is immutable once built
_grammar: Lark | None = None


def get_grammar() -> Lark:
    """Get or create the module-level Lark instance.

    The basic lexer keeps tokenization context-free, so Lark.lex() yields the
    same token stream the LALR parser is built against.
    """
    global _grammar
    if _grammar is None:
        _grammar = Lark(
            GRAMMAR_PATH.read_text(encoding="utf-8"),
            parser="lalr",
            lexer="basic",
        )
    return _grammar
