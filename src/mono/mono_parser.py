"""
Mono Language Parser

Parses Mono tokens into a ``Program`` syntax tree.

The parser pulls tokens from a ``Lexer`` through a two-token window
(``current_token`` and ``peek_token``). Statements are parsed by recursive
descent; expressions by precedence climbing (Pratt parsing) driven by two
dispatch tables that map token kinds to bound parse methods.

Supported Constructs
--------------------
- Statements:
    * ``let <ident> = <expr>;``
    * ``return <expr>;``
    * ``<expr>;`` (the trailing ``;`` is optional everywhere)
- Expressions:
    * Identifiers, integer literals, ``true`` / ``false``
    * Prefix ``!`` and ``-``
    * Infix ``+ - * / < > == !=``
    * Grouping with ``( ... )``
    * ``if (<cond>) { ... } else { ... }``

Parser Behavior
---------------
- Never raises while parsing. Problems are appended to ``Parser.errors`` and
  the offending statement is dropped; parsing resumes at the next token.
- Callers must check ``errors`` after ``parse_program()``; a non-empty list
  means the unit is invalid even though a partial tree was returned.
- ``parse()`` is the strict convenience entry point: it raises
  ``ParseError`` carrying every diagnostic.

Entry Points
------------
- ``Parser.parse_program()``: Parse a full unit into a ``Program``.
- ``Parser.parse_expression(precedence)``: Parse one expression.
- ``parse(source)``: Lex, parse and raise on diagnostics.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from mono.mono_ast import (
    BlockStatement,
    Boolean,
    Expression,
    ExpressionStatement,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from mono.mono_constants import TokenType
from mono.mono_lexer import CharacterStream, Lexer, Token

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Deepest expression nesting accepted; keeps recursion well inside the
# interpreter's stack limit.
MAX_NESTING = 100


class Precedence(IntEnum):
    """Binding power of operators, lowest to highest."""

    LOWEST = 1
    EQUALITY = 2  # == !=
    RELATIONAL = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # reserved


precedences: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALITY,
    TokenType.NOT_EQ: Precedence.EQUALITY,
    TokenType.LT: Precedence.RELATIONAL,
    TokenType.GT: Precedence.RELATIONAL,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
}

PrefixParseFn = Callable[[], "Expression | None"]
InfixParseFn = Callable[["Expression"], "Expression | None"]


class ParseError(SyntaxError):
    """Raised by ``parse()`` when the parser recorded diagnostics.

    Attributes:
        errors (list[str]): Every diagnostic, in the order it was recorded.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        summary = f"{len(self.errors)} parse error(s)"
        if self.errors:
            summary += ": " + "; ".join(self.errors)
        super().__init__(summary)


class Parser:
    """
    Mono Parser Class

    Turns the token stream of a Lexer into a Program. Each instance owns its
    lexer and is meant for a single parse.

    Attributes
    ----------
    lexer : Lexer
        Token source.
    current_token : Token
        Token under examination.
    peek_token : Token
        The token after ``current_token``.
    errors : list[str]
        Diagnostics recorded so far, in order.
    depth : int
        Number of ``parse_expression`` calls currently active.
    prefix_parse_fns : dict[TokenType, PrefixParseFn]
        Rules for tokens that can start an expression.
    infix_parse_fns : dict[TokenType, InfixParseFn]
        Rules for tokens that can continue an expression.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []
        self.depth = 0

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)

        for kind in precedences:
            self.register_infix(kind, self.parse_infix_expression)

        # Fill current_token and peek_token
        self.current_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    def register_prefix(self, kind: TokenType, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind: TokenType, fn: InfixParseFn) -> None:
        self.infix_parse_fns[kind] = fn

    # ------------------------------------------------------------------
    # Token window
    # ------------------------------------------------------------------

    def next_token(self) -> None:
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, kind: TokenType) -> bool:
        return self.current_token.type == kind

    def peek_token_is(self, kind: TokenType) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenType) -> bool:
        """Advances if the peek token has the given kind, otherwise records an error."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return precedences.get(self.current_token.type, Precedence.LOWEST)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def error(self, tok: Token, message: str) -> None:
        self.errors.append(f"line {tok.line}, col {tok.col}: {message}")

    def peek_error(self, kind: TokenType) -> None:
        self.error(
            self.peek_token,
            f"expected next token to be {kind}, got {self.peek_token.type} instead",
        )

    def no_prefix_parse_fn_error(self, tok: Token) -> None:
        self.error(tok, f"no prefix parse function for {tok.type} found")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse tokens until EOF and return the Program built so far.

        Statements that fail to parse are left out; see ``errors``.
        """
        program = Program()
        while not self.current_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        kind = self.current_token.type
        if kind == TokenType.LET:
            return self.parse_let_statement()
        if kind == TokenType.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        """Parse ``let <ident> = <expr>;``."""
        tok = self.current_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        """Parse ``return <expr>;``."""
        tok = self.current_token
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ReturnStatement(tok, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.current_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ExpressionStatement(tok, expression)

    def parse_block_statement(self) -> BlockStatement | None:
        """Parse ``{ <stmt>* }``; the current token is the opening brace."""
        block = BlockStatement(self.current_token)
        self.next_token()

        while not self.current_token_is(TokenType.RBRACE):
            if self.current_token_is(TokenType.EOF):
                self.error(
                    self.current_token,
                    f"expected next token to be {TokenType.RBRACE}, "
                    f"got {TokenType.EOF} instead",
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()

        return block

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        """Precedence-climbing expression parser.

        Binds operators whose precedence is strictly greater than
        ``precedence``; equal-precedence chains therefore associate left.
        Nesting deeper than ``MAX_NESTING`` is a diagnostic: the rest of the
        statement is skipped and no expression is returned.
        """
        if self.depth >= MAX_NESTING:
            self.error(self.current_token, "expression nested too deeply")
            self.skip_statement()
            return None

        self.depth += 1
        try:
            return self._parse_expression(precedence)
        finally:
            self.depth -= 1

    def skip_statement(self) -> None:
        """Advances to the ``;`` ending the statement, or to the last token before EOF."""
        while not (
            self.peek_token_is(TokenType.SEMICOLON) or self.peek_token_is(TokenType.EOF)
        ):
            self.next_token()
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

    def _parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.current_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.current_token)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression | None:
        return Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        tok = self.current_token
        try:
            value = int(tok.literal)
        except ValueError:
            value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.error(tok, f"could not parse {tok.literal!r} as integer")
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Expression | None:
        return Boolean(self.current_token, self.current_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.current_token
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixExpression(tok, tok.literal, operand)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.current_token
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        """Parse ``if (<cond>) { ... }`` with an optional ``else { ... }``."""
        tok = self.current_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(tok, condition, consequence, alternative)


def parse(source: str) -> Program:
    """Lex and parse ``source``.

    Raises:
        ParseError: If any diagnostic was recorded.
    """
    parser = Parser(Lexer(CharacterStream(source)))
    program = parser.parse_program()
    if parser.errors:
        raise ParseError(parser.errors)
    return program


__all__ = ["ParseError", "Parser", "Precedence", "parse", "precedences"]
