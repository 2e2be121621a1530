"""Tests for the TestLang++ parser."""

import pytest

from testlang.compiler.lexer import tokenize
from testlang.compiler.parser import Parser, parse
from testlang.compiler.tokens import Token, TokenKind
from testlang.compiler.tree import (
    BodyContains,
    HeaderEquals,
    HttpMethod,
    Program,
    Request,
    StatusEquals,
    StatusInRange,
)
from testlang.diagnostics import LexError, ParseError, Stage

from tests.samples import LOGIN_SOURCE, SIMPLE_SOURCE


class TestProgramStructure:
    """Shape of the tree built from valid source."""

    def test_simple_test_block(self):
        program = parse(SIMPLE_SOURCE)

        assert len(program.tests) == 1
        test = program.tests[0]
        assert test.name == "A"
        assert test.requests == (Request(method=HttpMethod.GET, path="/x"),)
        assert test.assertions == (StatusEquals(code=200), BodyContains(text="ok"))

    def test_empty_source_is_empty_program(self):
        assert parse("") == Program(tests=())
        assert parse("// only a comment\n") == Program(tests=())

    def test_tests_keep_source_order(self):
        program = parse(LOGIN_SOURCE)
        assert [t.name for t in program.tests] == ["Login", "ListUsers"]

    def test_all_assertion_variants(self):
        program = parse(
            """
            test Everything {
                DELETE "/api/items/1";
                expect status = 204;
                expect status in 200..299;
                expect body contains "";
                expect header "X-Request-Id" = "abc";
            }
            """
        )
        assert program.tests[0].assertions == (
            StatusEquals(code=204),
            StatusInRange(min=200, max=299),
            BodyContains(text=""),
            HeaderEquals(name="X-Request-Id", value="abc"),
        )

    def test_all_methods(self):
        program = parse(
            'test M { GET "/a"; POST "/b"; PUT "/c"; DELETE "/d"; '
            "expect status = 200; expect status = 200; }"
        )
        assert [r.method for r in program.tests[0].requests] == [
            HttpMethod.GET,
            HttpMethod.POST,
            HttpMethod.PUT,
            HttpMethod.DELETE,
        ]

    def test_interleaved_statements_keep_relative_order(self):
        program = parse(
            """
            test Flow {
                POST "/login";
                expect status = 200;
                GET "/me";
                expect body contains "name";
                PUT "/me";
            }
            """
        )
        test = program.tests[0]
        assert [r.path for r in test.requests] == ["/login", "/me", "/me"]
        assert [r.method for r in test.requests] == [HttpMethod.POST, HttpMethod.GET, HttpMethod.PUT]
        assert test.assertions == (StatusEquals(code=200), BodyContains(text="name"))

    def test_empty_test_body_is_grammatical(self):
        program = parse("test Empty { }")
        assert program.tests[0].requests == ()
        assert program.tests[0].assertions == ()

    def test_duplicate_names_are_kept(self):
        program = parse("test A { } test A { }")
        assert [t.name for t in program.tests] == ["A", "A"]

    def test_tree_is_frozen(self):
        program = parse(SIMPLE_SOURCE)
        with pytest.raises(Exception):
            program.tests[0].name = "B"  # type: ignore[misc]

    def test_tree_dumps_to_json(self):
        dumped = parse(SIMPLE_SOURCE).model_dump()
        assert dumped["tests"][0]["assertions"][0] == {"kind": "status_equals", "code": 200}


class TestParserInput:
    def test_accepts_token_list(self):
        assert Parser(tokenize(SIMPLE_SOURCE)).parse() == parse(SIMPLE_SOURCE)

    def test_token_sequence_without_eof_is_closed(self):
        tokens = tokenize(SIMPLE_SOURCE)[:-1]
        assert Parser(tokens).parse() == parse(SIMPLE_SOURCE)

    def test_empty_token_sequence(self):
        assert Parser([]).parse() == Program(tests=())

    def test_lex_errors_propagate(self):
        with pytest.raises(LexError):
            parse("test A { GET % }")


class TestSyntaxErrors:
    def test_missing_statement_separator(self):
        with pytest.raises(ParseError) as exc_info:
            parse('test D { GET "/y" expect status = 200; }')

        error = exc_info.value
        assert (error.line, error.column) == (1, 19)
        assert error.expected == frozenset({TokenKind.SEMICOLON})
        assert error.actual.kind == TokenKind.EXPECT
        assert error.diagnostic.stage == Stage.PARSE
        assert "';'" in str(error)

    def test_missing_closing_brace_reports_end_of_input(self):
        source = 'test A {\n    GET "/x";\n    expect status = 200;\n'
        with pytest.raises(ParseError) as exc_info:
            parse(source)

        error = exc_info.value
        assert error.actual.kind == TokenKind.EOF
        assert TokenKind.RBRACE in error.expected
        assert error.line == 4

    def test_unknown_statement_start(self):
        with pytest.raises(ParseError) as exc_info:
            parse("test A { status = 200; }")

        error = exc_info.value
        assert error.actual.kind == TokenKind.STATUS
        assert error.expected >= {TokenKind.GET, TokenKind.EXPECT, TokenKind.RBRACE}

    def test_lowercase_method_is_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse('test A { get "/x"; }')
        assert exc_info.value.actual == Token(TokenKind.IDENTIFIER, "get", 1, 10)

    def test_test_requires_name(self):
        with pytest.raises(ParseError) as exc_info:
            parse("test { }")
        assert exc_info.value.expected == frozenset({TokenKind.IDENTIFIER})

    def test_range_requires_operator(self):
        with pytest.raises(ParseError) as exc_info:
            parse("test A { expect status in 200 299; }")
        assert exc_info.value.expected == frozenset({TokenKind.RANGE})

    def test_request_path_must_be_string(self):
        with pytest.raises(ParseError) as exc_info:
            parse("test A { GET 200; }")
        assert exc_info.value.expected == frozenset({TokenKind.STRING})

    def test_top_level_statement_is_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse('GET "/x";')
        assert exc_info.value.actual.kind == TokenKind.GET
        assert exc_info.value.expected == frozenset({TokenKind.TEST, TokenKind.EOF})

    def test_details_are_structured(self):
        with pytest.raises(ParseError) as exc_info:
            parse("test A { expect body = 1; }")
        details = exc_info.value.diagnostic.details
        assert details["expected"] == ["'contains'"]
        assert details["actual"] == "="
