"""Diagnostics for the TestLang++ compiler.

Every failure is raised as a CompileError subclass tagged with the stage that
produced it. The structured data is available as a Diagnostic value so callers
can render it however they like; nothing here knows about colors or consoles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from testlang.compiler.tokens import Token, TokenKind


class Stage(str, Enum):
    """Compilation stage a diagnostic originates from."""

    LEX = "lex"
    PARSE = "parse"
    VALIDATE = "validate"
    CODEGEN = "codegen"


@dataclass(frozen=True)
class Diagnostic:
    """A single compilation failure as plain data."""

    stage: Stage
    message: str
    line: int | None = None
    column: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str | None:
        """'line:column' when a position is known."""
        if self.line is None:
            return None
        if self.column is None:
            return str(self.line)
        return f"{self.line}:{self.column}"


class CompileError(Exception):
    """Base class for all compilation failures."""

    stage: Stage

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.line}:{self.column}: {self.message}"

    def details(self) -> dict[str, Any]:
        """Stage-specific fields. Override in subclass."""
        return {}

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(
            stage=self.stage,
            message=self.message,
            line=self.line,
            column=self.column,
            details=self.details(),
        )


class LexError(CompileError):
    """Raised when the source contains a character sequence that is not a token."""

    stage = Stage.LEX

    def __init__(
        self,
        line: int,
        column: int,
        offending_text: str,
        reason: str = "unexpected character",
    ):
        self.offending_text = offending_text
        self.reason = reason
        super().__init__(f"{reason} {offending_text!r}", line, column)

    def details(self) -> dict[str, Any]:
        return {"offending_text": self.offending_text, "reason": self.reason}


class SourceReadError(LexError):
    """Raised when the input document cannot be read or decoded as UTF-8."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        CompileError.__init__(self, f"could not read {self.path}: {cause}")
        self.offending_text = ""
        self.reason = "unreadable source"

    def details(self) -> dict[str, Any]:
        return {"path": str(self.path), "cause": str(self.cause)}


class ParseError(CompileError):
    """Raised when the token sequence does not match the grammar.

    `expected` holds the token kinds that would have been accepted at the
    position of `actual`.
    """

    stage = Stage.PARSE

    def __init__(self, actual: Token, expected: frozenset[TokenKind]):
        self.actual = actual
        self.expected = expected
        wanted = ", ".join(sorted(kind.display for kind in expected)) or "nothing"
        found = repr(actual.text) if actual.text else actual.kind.display
        super().__init__(
            f"expected {wanted} but found {found}",
            actual.line,
            actual.column,
        )

    def details(self) -> dict[str, Any]:
        return {
            "expected": sorted(kind.display for kind in self.expected),
            "actual": self.actual.text or self.actual.kind.display,
        }


class SemanticErrorKind(str, Enum):
    """Structural rule a program violated."""

    NO_TESTS = "no_tests"
    EMPTY_TEST = "empty_test"
    INSUFFICIENT_ASSERTIONS = "insufficient_assertions"


class SemanticError(CompileError):
    """Raised when a syntactically valid program breaks a structural rule."""

    stage = Stage.VALIDATE

    def __init__(
        self,
        kind: SemanticErrorKind,
        test_name: str | None = None,
        count: int | None = None,
    ):
        self.kind = kind
        self.test_name = test_name
        self.count = count

        match kind:
            case SemanticErrorKind.NO_TESTS:
                message = "no test blocks found in the program"
            case SemanticErrorKind.EMPTY_TEST:
                message = f"test {test_name!r} contains no HTTP request"
            case SemanticErrorKind.INSUFFICIENT_ASSERTIONS:
                message = f"test {test_name!r} has {count} assertion(s), at least 2 are required"

        super().__init__(message)

    @classmethod
    def no_tests(cls) -> SemanticError:
        return cls(SemanticErrorKind.NO_TESTS)

    @classmethod
    def empty_test(cls, test_name: str) -> SemanticError:
        return cls(SemanticErrorKind.EMPTY_TEST, test_name=test_name)

    @classmethod
    def insufficient_assertions(cls, test_name: str, count: int) -> SemanticError:
        return cls(SemanticErrorKind.INSUFFICIENT_ASSERTIONS, test_name=test_name, count=count)

    def details(self) -> dict[str, Any]:
        details: dict[str, Any] = {"kind": self.kind.value}
        if self.test_name is not None:
            details["test_name"] = self.test_name
        if self.count is not None:
            details["count"] = self.count
        return details


class CodeGenError(CompileError):
    """Raised when the generated document cannot be written."""

    stage = Stage.CODEGEN

    def __init__(self, path: Path | str, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"could not write {self.path}: {cause}")

    def details(self) -> dict[str, Any]:
        return {"path": str(self.path), "cause": str(self.cause)}
