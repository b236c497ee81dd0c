"""
Monkey token model
Token kinds, immutable tokens and keyword lookup shared by the lexer and parser
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenKind(Enum):
    """Every lexical unit the lexer can produce"""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "fn"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    """Monkey token: a kind plus the literal source text"""
    kind: TokenKind
    literal: str

    def __str__(self) -> str:
        return f"{self.kind.name}({self.literal!r})"


KEYWORDS: Dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

# Operators and delimiters keyed by their exact text
SYMBOLS: Dict[str, TokenKind] = {
    kind.value: kind for kind in (
        TokenKind.ASSIGN, TokenKind.PLUS, TokenKind.MINUS, TokenKind.BANG,
        TokenKind.ASTERISK, TokenKind.SLASH, TokenKind.LT, TokenKind.GT,
        TokenKind.EQ, TokenKind.NOT_EQ, TokenKind.COMMA, TokenKind.SEMICOLON,
        TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RBRACE,
    )
}


def lookup_ident(text: str) -> TokenKind:
    """Keyword kind for reserved words, IDENT otherwise"""
    return KEYWORDS.get(text, TokenKind.IDENT)


EOF_TOKEN = Token(TokenKind.EOF, "")
