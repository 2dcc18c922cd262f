import json

import hypothesis.strategies as st
import pytest
from hypothesis import given

from mono.mono_ast import (
    BlockStatement,
    Boolean,
    ExpressionStatement,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    walk,
)
from mono.mono_constants import TokenType
from mono.mono_lexer import Token


def ident(name: str) -> Identifier:
    return Identifier(Token(TokenType.IDENT, name), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(Token(TokenType.INT, str(value)), value)


def infix(left: object, op: str, right: object) -> InfixExpression:
    kind = {"+": TokenType.PLUS, "*": TokenType.ASTERISK, "<": TokenType.LT}[op]
    return InfixExpression(Token(kind, op), left, op, right)  # type: ignore[arg-type]


def test_let_statement_string() -> None:
    program = Program(
        [
            LetStatement(
                Token(TokenType.LET, "let"), ident("myVar"), ident("anotherVar")
            )
        ]
    )
    assert program.string() == "let myVar = anotherVar;"
    assert str(program) == "let myVar = anotherVar;"


def test_return_statement_string() -> None:
    stmt = ReturnStatement(Token(TokenType.RETURN, "return"), integer(5))
    assert stmt.string() == "return 5;"
    assert stmt.token_literal() == "return"


def test_expression_statement_renders_inner_expression() -> None:
    stmt = ExpressionStatement(Token(TokenType.IDENT, "a"), ident("a"))
    assert stmt.string() == "a"


def test_leaf_rendering() -> None:
    assert ident("foo").string() == "foo"
    assert integer(42).string() == "42"
    assert Boolean(Token(TokenType.TRUE, "true"), True).string() == "true"
    assert Boolean(Token(TokenType.FALSE, "false"), False).string() == "false"


def test_prefix_and_infix_rendering() -> None:
    neg = PrefixExpression(Token(TokenType.MINUS, "-"), "-", ident("a"))
    assert neg.string() == "(-a)"
    expr = infix(ident("a"), "+", infix(ident("b"), "*", ident("c")))
    assert expr.string() == "(a + (b * c))"


def test_if_expression_rendering() -> None:
    consequence = BlockStatement(
        Token(TokenType.LBRACE, "{"),
        [ExpressionStatement(Token(TokenType.IDENT, "x"), ident("x"))],
    )
    alternative = BlockStatement(
        Token(TokenType.LBRACE, "{"),
        [ExpressionStatement(Token(TokenType.IDENT, "y"), ident("y"))],
    )
    cond = infix(ident("x"), "<", ident("y"))
    tok = Token(TokenType.IF, "if")

    assert IfExpression(tok, cond, consequence).string() == "if(x < y) x"
    assert (
        IfExpression(tok, cond, consequence, alternative).string()
        == "if(x < y) xelse y"
    )


def test_program_concatenates_without_separators() -> None:
    program = Program(
        [
            LetStatement(Token(TokenType.LET, "let"), ident("x"), integer(1)),
            ReturnStatement(Token(TokenType.RETURN, "return"), ident("x")),
        ]
    )
    assert program.string() == "let x = 1;return x;"


def test_program_token_literal() -> None:
    assert Program().token_literal() == ""
    program = Program([ReturnStatement(Token(TokenType.RETURN, "return"), integer(1))])
    assert program.token_literal() == "return"
    assert len(program) == 1


def test_node_equality() -> None:
    assert ident("x") == ident("x")
    assert ident("x") != ident("y")
    assert integer(1) != ident("1")
    assert ident("x") != "x"
    assert Program([ExpressionStatement(Token(TokenType.IDENT, "x"), ident("x"))]) == (
        Program([ExpressionStatement(Token(TokenType.IDENT, "x"), ident("x"))])
    )


def test_node_repr() -> None:
    assert repr(integer(7)) == "IntegerLiteral(value=7)"
    assert repr(Program()) == "Program(statements=[])"


def test_to_dict_is_json_serializable() -> None:
    stmt = LetStatement(
        Token(TokenType.LET, "let", 1, 1),
        Identifier(Token(TokenType.IDENT, "x", 1, 5), "x"),
        infix(integer(1), "+", integer(2)),
    )
    data = Program([stmt]).to_dict()
    assert data["kind"] == "program"
    let = data["statements"][0]
    assert let["kind"] == "let"
    assert let["line"] == 1 and let["col"] == 1
    assert let["name"]["value"] == "x"
    assert let["value"]["kind"] == "infix"
    assert let["value"]["operator"] == "+"
    assert let["value"]["left"]["value"] == 1
    json.dumps(data)


def test_to_dict_optional_alternative() -> None:
    block = BlockStatement(Token(TokenType.LBRACE, "{"), [])
    node = IfExpression(Token(TokenType.IF, "if"), ident("c"), block)
    data = node.to_dict()
    assert data["alternative"] is None
    assert data["consequence"]["statements"] == []


def test_walk_visits_every_node_in_preorder() -> None:
    expr = infix(ident("a"), "+", infix(ident("b"), "*", ident("c")))
    program = Program([ExpressionStatement(Token(TokenType.IDENT, "a"), expr)])
    kinds = [node.kind for node in walk(program)]
    assert kinds == [
        "program",
        "expr_stmt",
        "infix",
        "identifier",
        "infix",
        "identifier",
        "identifier",
    ]


def test_walk_rejects_foreign_objects() -> None:
    with pytest.raises(TypeError):
        list(walk("not a node"))  # type: ignore[arg-type]


@given(st.from_regex(r"[A-Za-z_]{1,12}", fullmatch=True))  # type: ignore[misc]
def test_identifier_renders_its_name(name: str) -> None:
    assert ident(name).string() == name
    assert ident(name).token_literal() == name


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))  # type: ignore[misc]
def test_integer_renders_token_text(value: int) -> None:
    node = IntegerLiteral(Token(TokenType.INT, str(value)), value)
    assert node.string() == str(value)
