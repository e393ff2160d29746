"""Lexer for the Quill language.

`tokenize` performs a single left-to-right scan over the source text and
returns the full token list, always terminated by an EOF token.
"""

from __future__ import annotations

from typing import List

from .errors import UnexpectedCharacter
from .tokens import KEYWORDS, PUNCTUATION, Token, TokenType

OPERATORS = {'+', '-', '*', '%'}


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Whitespace is skipped. `/` starts a line comment (`//`), a block
    comment (`/* ... */`) or is the division operator. An unterminated
    block comment runs to the end of the input. Numbers are runs of decimal
    digits; identifiers start with a letter and continue with letters or
    underscores.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    while i < length:
        c = source[i]
        if c.isspace():
            advance()
            continue
        if c in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[c], c, line, col))
            advance()
            continue
        if c in OPERATORS:
            tokens.append(Token(TokenType.BINARY_OPERATOR, c, line, col))
            advance()
            continue
        if c == '/':
            start_line, start_col = line, col
            nxt = source[i + 1] if i + 1 < length else ''
            if nxt == '/':
                advance(2)
                start_i = i
                while i < length and source[i] != '\n':
                    advance()
                tokens.append(Token(TokenType.COMMENT, source[start_i:i], start_line, start_col))
                continue
            if nxt == '*':
                advance(2)
                start_i = i
                end = source.find('*/', i)
                if end == -1:
                    # unterminated: the comment swallows the rest of the input
                    advance(length - i)
                    tokens.append(Token(TokenType.COMMENT, source[start_i:], start_line, start_col))
                else:
                    advance(end - i)
                    tokens.append(Token(TokenType.COMMENT, source[start_i:end], start_line, start_col))
                    advance(2)
                continue
            tokens.append(Token(TokenType.BINARY_OPERATOR, c, line, col))
            advance()
            continue
        if c.isdecimal():
            start_col = col
            start_i = i
            while i < length and source[i].isdecimal():
                advance()
            tokens.append(Token(TokenType.NUMBER, source[start_i:i], line, start_col))
            continue
        if c.isalpha():
            start_col = col
            start_i = i
            while i < length and (source[i].isalpha() or source[i] == '_'):
                advance()
            value = source[start_i:i]
            tokens.append(Token(KEYWORDS.get(value, TokenType.IDENTIFIER), value, line, start_col))
            continue
        raise UnexpectedCharacter(c, line, col)
    tokens.append(Token(TokenType.EOF, '', line, col))
    return tokens
