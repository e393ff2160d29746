import pytest

from quill.errors import UnexpectedCharacter
from quill.lexer import tokenize
from quill.tokens import Token, TokenType


def kinds(source):
    return [(t.type, t.value) for t in tokenize(source)]


def test_declaration_tokens():
    assert kinds("let x = 5 + (4 / 3);") == [
        (TokenType.LET, 'let'),
        (TokenType.IDENTIFIER, 'x'),
        (TokenType.EQUALS, '='),
        (TokenType.NUMBER, '5'),
        (TokenType.BINARY_OPERATOR, '+'),
        (TokenType.LEFT_PAREN, '('),
        (TokenType.NUMBER, '4'),
        (TokenType.BINARY_OPERATOR, '/'),
        (TokenType.NUMBER, '3'),
        (TokenType.RIGHT_PAREN, ')'),
        (TokenType.SEMICOLON, ';'),
        (TokenType.EOF, ''),
    ]


def test_empty_source_is_only_eof():
    assert tokenize("") == [Token(TokenType.EOF, '')]
    assert tokenize(" \t\r\n ") == [Token(TokenType.EOF, '')]


def test_punctuation():
    types = [t.type for t in tokenize("(){}[]:;,=.")]
    assert types == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
        TokenType.COLON, TokenType.SEMICOLON, TokenType.COMMA,
        TokenType.EQUALS, TokenType.DOT, TokenType.EOF,
    ]


def test_operators():
    assert [t.value for t in tokenize("+ - * / %")[:-1]] == ['+', '-', '*', '/', '%']
    assert all(t.type == TokenType.BINARY_OPERATOR for t in tokenize("+-*/%")[:-1])


def test_keywords_and_reserved_words():
    types = [t.type for t in tokenize("let const fn struct enum return if else")[:-1]]
    assert types == [
        TokenType.LET, TokenType.CONST, TokenType.FN, TokenType.STRUCT,
        TokenType.ENUM, TokenType.RETURN, TokenType.IF, TokenType.ELSE,
    ]


def test_identifiers_take_letters_and_underscores():
    assert kinds("foo_bar lets") == [
        (TokenType.IDENTIFIER, 'foo_bar'),
        (TokenType.IDENTIFIER, 'lets'),
        (TokenType.EOF, ''),
    ]


def test_digits_end_an_identifier():
    assert kinds("x1") == [
        (TokenType.IDENTIFIER, 'x'),
        (TokenType.NUMBER, '1'),
        (TokenType.EOF, ''),
    ]


def test_number_is_maximal_digit_run():
    assert kinds("12345") == [(TokenType.NUMBER, '12345'), (TokenType.EOF, '')]


def test_line_comment_stops_before_newline():
    tokens = tokenize("// this is a comment!\nlet")
    assert tokens[0] == Token(TokenType.COMMENT, ' this is a comment!')
    assert tokens[1].type == TokenType.LET


def test_block_comment():
    assert kinds("/* a * b\n c */ 1") == [
        (TokenType.COMMENT, ' a * b\n c '),
        (TokenType.NUMBER, '1'),
        (TokenType.EOF, ''),
    ]


def test_block_comments_do_not_nest():
    assert kinds("/* outer /* inner */ x") == [
        (TokenType.COMMENT, ' outer /* inner '),
        (TokenType.IDENTIFIER, 'x'),
        (TokenType.EOF, ''),
    ]


def test_unterminated_block_comment_runs_to_end():
    assert kinds("1 /* never closed") == [
        (TokenType.NUMBER, '1'),
        (TokenType.COMMENT, ' never closed'),
        (TokenType.EOF, ''),
    ]


def test_unexpected_character():
    with pytest.raises(UnexpectedCharacter) as exc:
        tokenize("let x = 5 $ 3;")
    assert exc.value.char == '$'
    assert (exc.value.line, exc.value.column) == (1, 11)


def test_leading_underscore_is_rejected():
    with pytest.raises(UnexpectedCharacter):
        tokenize("_x")


def test_positions_are_tracked():
    tokens = tokenize("let a;\n  a")
    last = tokens[-2]
    assert (last.line, last.column) == (2, 3)
