"""Semantic checks the grammar cannot express."""

from testlang.compiler.tree import Program
from testlang.diagnostics import SemanticError

# A single check rarely says much about an endpoint
MIN_ASSERTIONS = 2


def validate(program: Program) -> Program:
    """Return the program unchanged if it is well-formed.

    Tests are checked in source order and the first failing rule wins:
    no tests at all, then per test an empty request list, then fewer than
    MIN_ASSERTIONS assertions.

    Raises:
        SemanticError: Describing the first violation found.
    """
    if not program.tests:
        raise SemanticError.no_tests()

    for test in program.tests:
        if not test.requests:
            raise SemanticError.empty_test(test.name)
        if len(test.assertions) < MIN_ASSERTIONS:
            raise SemanticError.insufficient_assertions(test.name, len(test.assertions))

    return program
