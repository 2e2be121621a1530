"""Tests for the TestLang++ lexer."""

import pytest

from testlang.compiler.lexer import Lexer, tokenize
from testlang.compiler.tokens import Token, TokenKind
from testlang.diagnostics import LexError, Stage

# ###############
# Test Helpers
# ###############


def _tokens_no_eof(source: str) -> list[Token]:
    result = tokenize(source)
    assert result[-1].kind == TokenKind.EOF
    return result[:-1]


def _kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in _tokens_no_eof(source)]


def _texts(source: str) -> list[str]:
    return [tok.text for tok in _tokens_no_eof(source)]


# ###############
# EOF Handling
# ###############


class TestEof:
    def test_empty_source_produces_only_eof(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].text == ""
        assert (tokens[0].line, tokens[0].column) == (1, 1)

    def test_whitespace_and_comments_produce_only_eof(self):
        tokens = tokenize("  \t\n// nothing here\n\n")
        assert [t.kind for t in tokens] == [TokenKind.EOF]

    def test_eof_positioned_after_last_character(self):
        assert tokenize("test")[-1].column == 5
        eof = tokenize("test\n")[-1]
        assert (eof.line, eof.column) == (2, 1)


# ###############
# Token Classes
# ###############


class TestTokenClasses:
    def test_keywords(self):
        assert _kinds("test expect status body contains header in") == [
            TokenKind.TEST,
            TokenKind.EXPECT,
            TokenKind.STATUS,
            TokenKind.BODY,
            TokenKind.CONTAINS,
            TokenKind.HEADER,
            TokenKind.IN,
        ]
        assert all(kind.is_keyword for kind in _kinds("test expect in"))

    def test_http_methods(self):
        kinds = _kinds("GET POST PUT DELETE")
        assert kinds == [TokenKind.GET, TokenKind.POST, TokenKind.PUT, TokenKind.DELETE]
        assert all(kind.is_method for kind in kinds)

    def test_reserved_words_are_case_sensitive(self):
        assert _kinds("get Test EXPECT") == [TokenKind.IDENTIFIER] * 3

    def test_words_starting_with_keywords_are_identifiers(self):
        assert _kinds("testing index GETTER") == [TokenKind.IDENTIFIER] * 3
        assert _texts("testing index GETTER") == ["testing", "index", "GETTER"]

    def test_identifier_with_digits_and_underscores(self):
        assert _kinds("_login_2") == [TokenKind.IDENTIFIER]

    def test_string_literal_keeps_quotes_in_text(self):
        tokens = _tokens_no_eof('"/api/users?id=1"')
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == '"/api/users?id=1"'

    def test_empty_string_literal(self):
        assert _texts('""') == ['""']

    def test_string_literal_does_not_process_escapes(self):
        assert _texts(r'"a\b"') == [r'"a\b"']

    def test_integer_literal_is_maximal_digit_run(self):
        assert _kinds("200 404") == [TokenKind.INTEGER, TokenKind.INTEGER]
        assert _texts("12345") == ["12345"]

    def test_punctuation(self):
        kinds = _kinds("{ } ; = ..")
        assert kinds == [
            TokenKind.LBRACE,
            TokenKind.RBRACE,
            TokenKind.SEMICOLON,
            TokenKind.EQUALS,
            TokenKind.RANGE,
        ]
        assert all(kind.is_punctuation for kind in kinds)

    def test_range_operator_between_integers(self):
        assert _kinds("200..299") == [TokenKind.INTEGER, TokenKind.RANGE, TokenKind.INTEGER]
        assert _texts("200..299") == ["200", "..", "299"]


# ###############
# Positions
# ###############


class TestPositions:
    def test_line_and_column_are_one_based(self):
        tokens = _tokens_no_eof('test A {\n  GET "/x";\n}')
        positions = [(t.text, t.line, t.column) for t in tokens]
        assert positions == [
            ("test", 1, 1),
            ("A", 1, 6),
            ("{", 1, 8),
            ("GET", 2, 3),
            ('"/x"', 2, 7),
            (";", 2, 11),
            ("}", 3, 1),
        ]

    def test_comments_do_not_shift_following_lines(self):
        tokens = _tokens_no_eof("// header comment\ntest // trailing\nA")
        assert [(t.line, t.column) for t in tokens] == [(2, 1), (3, 1)]


# ###############
# Errors
# ###############


class TestLexErrors:
    def test_unrecognized_character(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('test A { GET "/x"; @ }')
        error = exc_info.value
        assert (error.line, error.column) == (1, 20)
        assert error.offending_text == "@"
        assert error.reason == "unexpected character"
        assert error.diagnostic.stage == Stage.LEX

    def test_single_dot_is_not_a_token(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("200.299")
        assert exc_info.value.column == 4
        assert exc_info.value.offending_text == "."

    def test_unterminated_string(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('GET "/x;\n')
        error = exc_info.value
        assert error.reason == "unterminated string literal"
        assert (error.line, error.column) == (1, 5)
        assert error.offending_text == '"/x;'

    def test_string_cannot_span_lines(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('"abc\ndef"')
        assert exc_info.value.line == 1

    def test_error_on_later_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("test A {\n  GET # }")
        assert (exc_info.value.line, exc_info.value.column) == (2, 7)


# ###############
# Stream Contract
# ###############


class TestStream:
    def test_lexer_is_lazy(self):
        lexer = Lexer("test A { $")
        assert next(lexer).kind == TokenKind.TEST
        assert next(lexer).kind == TokenKind.IDENTIFIER
        assert next(lexer).kind == TokenKind.LBRACE
        with pytest.raises(LexError):
            next(lexer)

    def test_lexer_is_not_restartable(self):
        lexer = Lexer("test A")
        assert len(list(lexer)) == 3
        assert list(lexer) == []

    def test_fresh_lexer_rescans(self):
        source = 'GET "/x";'
        assert tokenize(source) == tokenize(source)

    def test_tokens_are_immutable(self):
        token = tokenize("test")[0]
        with pytest.raises(AttributeError):
            token.text = "other"  # type: ignore[misc]
