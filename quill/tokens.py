"""Token definitions shared by the lexer and the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict


class TokenType(Enum):
    IDENTIFIER = auto()
    NUMBER = auto()
    BINARY_OPERATOR = auto()
    COMMENT = auto()

    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()
    EQUALS = auto()
    DOT = auto()

    # Keywords. struct, enum, return, if and else are reserved only.
    LET = auto()
    CONST = auto()
    FN = auto()
    STRUCT = auto()
    ENUM = auto()
    RETURN = auto()
    IF = auto()
    ELSE = auto()

    EOF = auto()


KEYWORDS: Dict[str, TokenType] = {
    'let': TokenType.LET,
    'const': TokenType.CONST,
    'fn': TokenType.FN,
    'struct': TokenType.STRUCT,
    'enum': TokenType.ENUM,
    'return': TokenType.RETURN,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
}

PUNCTUATION: Dict[str, TokenType] = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    '[': TokenType.LEFT_BRACKET,
    ']': TokenType.RIGHT_BRACKET,
    ':': TokenType.COLON,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
    '=': TokenType.EQUALS,
    '.': TokenType.DOT,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    # Source position is informational and does not take part in equality.
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r})"
