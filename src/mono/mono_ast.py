"""
Defines the abstract syntax tree (AST) node structure for the Mono language.

Statements and expressions are two closed families of node classes:

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expressions:
    Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
    IfExpression

Every node keeps the Token that introduced it and supports:
    token_literal(): the literal text of that token.
    string(): a canonical, deterministic rendering. Operator nodes are fully
        parenthesized, so ``string()`` exposes how precedence was resolved.
    to_dict(): a JSON-serializable representation (see ASTDict).

The Program node is the root and owns every statement. Trees are strictly
tree-shaped; the parser only attaches fully built nodes.

Example:
    >>> Program([ExpressionStatement(tok, InfixExpression(...))]).string()
    '(a + (b * c))'
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypedDict, Union

from mono.mono_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    Serialized form of a node, as produced by ``to_dict()``.

    Fields:
        kind (str): The node tag (e.g. "let", "infix", "identifier").
        literal (str): Literal text of the introducing token.
        line (int): Source line of the introducing token.
        col (int): Source column of the introducing token.
        value (Any): Identifier name, integer, boolean, or nested expression.
        name (ASTDict): Bound identifier of a let statement.
        operator (str): Operator of a prefix or infix expression.
        operand (ASTDict): Operand of a prefix expression.
        left (ASTDict): Left operand of an infix expression.
        right (ASTDict): Right operand of an infix expression.
        expression (ASTDict): Wrapped expression of an expression statement.
        condition (ASTDict): Condition of an if expression.
        consequence (ASTDict): Block taken when the condition holds.
        alternative (ASTDict | None): Optional else block.
        statements (list[ASTDict]): Body of a block or program.
    """

    kind: str
    literal: str
    line: int
    col: int
    value: Any
    name: "ASTDict"
    operator: str
    operand: "ASTDict"
    left: "ASTDict"
    right: "ASTDict"
    expression: "ASTDict"
    condition: "ASTDict"
    consequence: "ASTDict"
    alternative: "ASTDict | None"
    statements: list["ASTDict"]


def _serialize(value: Any) -> Any:
    if isinstance(value, (Node, Program)):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


class Node:
    """
    Base class of every statement and expression node.

    Subclasses set ``kind`` and list their payload attributes in ``_fields``;
    equality, ``repr`` and ``to_dict`` are derived from those.

    Attributes:
        token (Token): The token that introduced this node.
    """

    kind: str = "node"
    _fields: tuple[str, ...] = ()

    def __init__(self, token: Token) -> None:
        self.token = token

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.string()

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({parts})"

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return self.token == other.token and all(
            getattr(self, name) == getattr(other, name) for name in self._fields
        )

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> ASTDict:
        data: dict[str, Any] = {
            "kind": self.kind,
            "literal": self.token.literal,
            "line": self.token.line,
            "col": self.token.col,
        }
        for name in self._fields:
            data[name] = _serialize(getattr(self, name))
        return data  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class Identifier(Node):
    kind = "identifier"
    _fields = ("value",)

    def __init__(self, token: Token, value: str) -> None:
        super().__init__(token)
        self.value = value

    def string(self) -> str:
        return self.value


class IntegerLiteral(Node):
    """A 64-bit signed integer literal; renders as its source text."""

    kind = "integer"
    _fields = ("value",)

    def __init__(self, token: Token, value: int) -> None:
        super().__init__(token)
        self.value = value

    def string(self) -> str:
        return self.token.literal


class Boolean(Node):
    kind = "boolean"
    _fields = ("value",)

    def __init__(self, token: Token, value: bool) -> None:
        super().__init__(token)
        self.value = value

    def string(self) -> str:
        return self.token.literal


class PrefixExpression(Node):
    """Unary operator applied to one operand, rendered ``(<op><operand>)``."""

    kind = "prefix"
    _fields = ("operator", "operand")

    def __init__(self, token: Token, operator: str, operand: Expression) -> None:
        super().__init__(token)
        self.operator = operator
        self.operand = operand

    def string(self) -> str:
        return f"({self.operator}{self.operand.string()})"


class InfixExpression(Node):
    """Binary operator node, rendered ``(<left> <op> <right>)``."""

    kind = "infix"
    _fields = ("left", "operator", "right")

    def __init__(
        self, token: Token, left: Expression, operator: str, right: Expression
    ) -> None:
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    def string(self) -> str:
        return f"({self.left.string()} {self.operator} {self.right.string()})"


class IfExpression(Node):
    """
    Conditional expression ``if (<condition>) { ... } else { ... }``.

    Renders as ``if<condition> <consequence>`` followed by
    ``else <alternative>`` when an else block is present.
    """

    kind = "if"
    _fields = ("condition", "consequence", "alternative")

    def __init__(
        self,
        token: Token,
        condition: Expression,
        consequence: BlockStatement,
        alternative: BlockStatement | None = None,
    ) -> None:
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    def string(self) -> str:
        out = f"if{self.condition.string()} {self.consequence.string()}"
        if self.alternative is not None:
            out += f"else {self.alternative.string()}"
        return out


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class LetStatement(Node):
    kind = "let"
    _fields = ("name", "value")

    def __init__(self, token: Token, name: Identifier, value: Expression) -> None:
        super().__init__(token)
        self.name = name
        self.value = value

    def string(self) -> str:
        return f"{self.token_literal()} {self.name.string()} = {self.value.string()};"


class ReturnStatement(Node):
    kind = "return"
    _fields = ("value",)

    def __init__(self, token: Token, value: Expression) -> None:
        super().__init__(token)
        self.value = value

    def string(self) -> str:
        return f"{self.token_literal()} {self.value.string()};"


class ExpressionStatement(Node):
    """A bare expression used as a statement; token is the expression's first token."""

    kind = "expr_stmt"
    _fields = ("expression",)

    def __init__(self, token: Token, expression: Expression) -> None:
        super().__init__(token)
        self.expression = expression

    def string(self) -> str:
        return self.expression.string()


class BlockStatement(Node):
    """Brace-delimited statement list; token is the opening ``{``."""

    kind = "block"
    _fields = ("statements",)

    def __init__(self, token: Token, statements: list[Statement] | None = None) -> None:
        super().__init__(token)
        self.statements: list[Statement] = statements or []

    def string(self) -> str:
        return "".join(stmt.string() for stmt in self.statements)


Expression = Union[
    Identifier,
    IntegerLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    IfExpression,
]

Statement = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]


class Program:
    """
    Root of a parsed unit: the ordered top-level statements.

    Attributes:
        statements (list[Statement]): Top-level statements in source order.
    """

    kind = "program"

    def __init__(self, statements: list[Statement] | None = None) -> None:
        self.statements: list[Statement] = statements or []

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def string(self) -> str:
        return "".join(stmt.string() for stmt in self.statements)

    def __str__(self) -> str:
        return self.string()

    def __repr__(self) -> str:
        return f"Program(statements={self.statements!r})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Program) and self.statements == other.statements

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self.statements)

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "statements": [stmt.to_dict() for stmt in self.statements],
        }


def walk(node: Program | Statement | Expression) -> Iterator[Program | Node]:
    """Yields ``node`` and all of its descendants in pre-order.

    Raises:
        TypeError: If something other than a Mono node is encountered.
    """
    yield node
    match node:
        case Program() | BlockStatement():
            for stmt in node.statements:
                yield from walk(stmt)
        case LetStatement():
            yield from walk(node.name)
            yield from walk(node.value)
        case ReturnStatement():
            yield from walk(node.value)
        case ExpressionStatement():
            yield from walk(node.expression)
        case PrefixExpression():
            yield from walk(node.operand)
        case InfixExpression():
            yield from walk(node.left)
            yield from walk(node.right)
        case IfExpression():
            yield from walk(node.condition)
            yield from walk(node.consequence)
            if node.alternative is not None:
                yield from walk(node.alternative)
        case Identifier() | IntegerLiteral() | Boolean():
            pass
        case _:
            raise TypeError(f"Not a Mono AST node: {node!r}")


__all__ = [
    "ASTDict",
    "BlockStatement",
    "Boolean",
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
    "walk",
]
