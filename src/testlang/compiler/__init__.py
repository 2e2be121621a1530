"""TestLang++ compiler front end - lexing, parsing and validation."""

from testlang.compiler.lexer import Lexer, tokenize
from testlang.compiler.parser import Parser, ProgramBuilder, parse
from testlang.compiler.tokens import Token, TokenKind
from testlang.compiler.tree import (
    Assertion,
    BodyContains,
    HeaderEquals,
    HttpMethod,
    Program,
    Request,
    StatusEquals,
    StatusInRange,
    TestBlock,
)
from testlang.compiler.validator import MIN_ASSERTIONS, validate

__all__ = [
    # Tokens
    "Token",
    "TokenKind",
    # Tree models
    "Assertion",
    "BodyContains",
    "HeaderEquals",
    "HttpMethod",
    "Program",
    "Request",
    "StatusEquals",
    "StatusInRange",
    "TestBlock",
    # Stages
    "Lexer",
    "tokenize",
    "Parser",
    "ProgramBuilder",
    "parse",
    "MIN_ASSERTIONS",
    "validate",
]
