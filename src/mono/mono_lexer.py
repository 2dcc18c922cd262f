"""
Lexical analyzer for the Mono scripting language.

This module turns raw source text into tokens, one token per call:

Classes:
    CharacterStream: Read cursor over the source with line/column tracking.
    Token: A single immutable token with kind, literal text, and location.
    Lexer: Pull-based scanner producing one Token per ``next_token()`` call.

Features:
    - Skips spaces, tabs, newlines and carriage returns
    - Single-character punctuation and operators
    - One character of look-ahead for ``==`` and ``!=``
    - Identifiers (letters and underscores) classified against the keyword table
    - Unsigned integer literals (a leading ``-`` is its own token)
    - Unknown characters become ``ILLEGAL`` tokens; lexing never raises

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Iterator
from dataclasses import dataclass

from mono.mono_constants import (
    TokenType,
    lookahead_chars,
    lookup_ident,
    token_hashmap,
    whitespace,
)

EOF_CHAR = ""


class CharacterStream:
    """
    Reads characters from a source string while tracking line and column.

    Reading or peeking past the end of the source yields ``EOF_CHAR`` (an
    empty string) instead of raising, so the lexer is total over its input.

    Attributes:
        source (str): The input source string.
        position (int): Index of the current (not yet consumed) character.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the current character.

        Returns:
            str: The consumed character, or ``EOF_CHAR`` at end of input.
        """
        if self.position >= len(self.source):
            return EOF_CHAR
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or ``EOF_CHAR`` if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return EOF_CHAR
        return self.source[index]


@dataclass(frozen=True)
class Token:
    """A single lexical token of the Mono language.

    Attributes:
        type: The token kind.
        literal: The exact source text of the token (empty for EOF).
        line: The 1-based line number where the token starts.
        col: The 1-based column number where the token starts.
    """

    type: TokenType
    literal: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal})"


def is_letter(ch: str) -> bool:
    return ch != EOF_CHAR and (ch.isalpha() or ch == "_")


def is_digit(ch: str) -> bool:
    return ch != EOF_CHAR and ch.isascii() and ch.isdigit()


class Lexer:
    """Lexical analyzer for the Mono language.

    Wraps a CharacterStream (or a plain string) and hands out one Token per
    ``next_token()`` call. Once the input is exhausted every further call
    returns an EOF token.

    Attributes:
        stream (CharacterStream): The source stream being scanned.
    """

    def __init__(self, stream: CharacterStream | str) -> None:
        if isinstance(stream, str):
            stream = CharacterStream(stream)
        self.stream = stream

    @property
    def ch(self) -> str:
        """The character under the cursor, ``EOF_CHAR`` at end of input."""
        return self.stream.peek()

    def peek_char(self) -> str:
        """Returns the character after the current one without consuming anything."""
        return self.stream.peek(1)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while self.ch in whitespace:
            self.advance()

    def read_identifier(self) -> str:
        start = self.stream.position
        while is_letter(self.ch):
            self.advance()
        return self.stream.source[start : self.stream.position]

    def read_number(self) -> str:
        start = self.stream.position
        while is_digit(self.ch):
            self.advance()
        return self.stream.source[start : self.stream.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; ``ILLEGAL`` for unrecognized characters and
            ``EOF`` (repeatedly) once the source is exhausted.
        """
        self.skip_whitespace()

        ch = self.ch
        line, col = self.stream.line, self.stream.column

        if ch == EOF_CHAR:
            return Token(TokenType.EOF, "", line, col)

        # 1. "=" / "!" need one character of look-ahead
        if ch in lookahead_chars:
            self.advance()
            literal = ch
            if self.ch == "=":
                literal += self.advance()
            return Token(token_hashmap[literal], literal, line, col)

        # 2. Single-character punctuation
        if ch in token_hashmap:
            self.advance()
            return Token(token_hashmap[ch], ch, line, col)

        # 3. Identifier or keyword
        if is_letter(ch):
            word = self.read_identifier()
            return Token(lookup_ident(word), word, line, col)

        # 4. Integer literal
        if is_digit(ch):
            return Token(TokenType.INT, self.read_number(), line, col)

        # 5. Unknown character
        return Token(TokenType.ILLEGAL, self.advance(), line, col)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens until (and excluding) the EOF token."""
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok


def tokenize(source: str) -> list[Token]:
    """Tokenizes a whole source string, including the trailing EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens


__all__ = ["EOF_CHAR", "CharacterStream", "Lexer", "Token", "tokenize"]
