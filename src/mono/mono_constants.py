"""
Token kinds and lookup tables shared by the Mono lexer and parser.

Exports:
    - TokenType: closed enumeration of every lexical category.
    - keywords: reserved words mapped to their token kinds.
    - token_hashmap: operator and delimiter spellings mapped to their kinds.
    - lookup_ident: classify a scanned word as keyword or identifier.
"""

from enum import Enum


class TokenType(str, Enum):
    """Lexical categories of the Mono language.

    Members are ``str`` valued with their own name, so ``TokenType.EOF == "EOF"``.
    """

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "ASSIGN"
    PLUS = "PLUS"
    MINUS = "MINUS"
    BANG = "BANG"
    ASTERISK = "ASTERISK"
    SLASH = "SLASH"
    LT = "LT"
    GT = "GT"
    EQ = "EQ"
    NOT_EQ = "NOT_EQ"

    # Delimiters
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


keywords: dict[str, TokenType] = {
    "let": TokenType.LET,
    "fn": TokenType.FUNCTION,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

token_hashmap: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "==": TokenType.EQ,
    "!": TokenType.BANG,
    "!=": TokenType.NOT_EQ,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# Characters whose meaning depends on whether "=" follows
lookahead_chars: frozenset[str] = frozenset({"=", "!"})

whitespace: frozenset[str] = frozenset({" ", "\t", "\n", "\r"})


def lookup_ident(word: str) -> TokenType:
    """Returns the keyword kind for a reserved word, otherwise ``IDENT``."""
    return keywords.get(word, TokenType.IDENT)


__all__ = [
    "TokenType",
    "keywords",
    "lookahead_chars",
    "lookup_ident",
    "token_hashmap",
    "whitespace",
]
