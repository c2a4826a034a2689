"""
Tests for the FinnLang parser.
"""
import pytest

from finnlang.exceptions import ParseException
from finnlang.nodes import (
    Arithmetic,
    Assign,
    Call,
    Comparison,
    ExprStmt,
    For,
    FunctionDef,
    If,
    Index,
    IndexAssign,
    IntLiteral,
    Let,
    Logical,
    Print,
    Return,
    Unary,
    Variable,
)
from finnlang.operations import Op

from finnlang.tests.utils import parse_source


def parse_expr(source: str):
    """
    Parse ``source`` as the argument of a woof statement.
    """
    stmt = parse_source(f"woof({source});")[0]
    assert isinstance(stmt, Print)
    return stmt.value


def test_multiplication_binds_tighter_than_addition():
    node = parse_expr("1 + 2 * 3")
    assert isinstance(node, Arithmetic)
    assert node.op == Op.ADD
    assert node.left == IntLiteral(1, 1)
    assert isinstance(node.right, Arithmetic)
    assert node.right.op == Op.MUL


def test_binary_operators_are_left_associative():
    node = parse_expr("10 - 4 - 3")
    assert node.op == Op.SUB
    assert isinstance(node.left, Arithmetic)
    assert node.left.op == Op.SUB
    assert node.right == IntLiteral(3, 1)


def test_logical_precedence():
    node = parse_expr("a || b && c == d")
    assert isinstance(node, Logical)
    assert node.op == Op.OR
    assert isinstance(node.right, Logical)
    assert node.right.op == Op.AND
    assert isinstance(node.right.right, Comparison)
    assert node.right.right.op == Op.EQ


def test_relational_below_equality():
    node = parse_expr("1 < 2 == true")
    assert node.op == Op.EQ
    assert node.left.op == Op.LT


def test_unary_and_indexing():
    node = parse_expr("-xs[1]")
    assert isinstance(node, Unary)
    assert node.op == Op.NEG
    assert isinstance(node.operand, Index)
    assert node.operand.target == Variable("xs", 1)

    node = parse_expr("!!done")
    assert node.op == Op.NOT
    assert node.operand.op == Op.NOT


def test_parenthesized_grouping():
    node = parse_expr("(1 + 2) * 3")
    assert node.op == Op.MUL
    assert node.left.op == Op.ADD


def test_let_with_and_without_type():
    ast = parse_source("let x: int = 5;\nlet y = x;")
    assert ast[0] == Let("x", "int", IntLiteral(5, 1), 1)
    assert ast[1] == Let("y", None, Variable("x", 2), 2)


def test_identifier_statements():
    ast = parse_source("x = 1;\nxs[0] = 2;\nshow(x);")
    assert isinstance(ast[0], Assign)
    assert isinstance(ast[1], IndexAssign)
    assert ast[1].index == IntLiteral(0, 2)
    assert isinstance(ast[2], ExprStmt)
    assert ast[2].call == Call("show", [Variable("x", 3)], 3)


def test_if_elif_else():
    ast = parse_source(
        "if (a) { woof(1); } elif (b) { woof(2); } elif (c) { } else { woof(3); }"
    )
    node = ast[0]
    assert isinstance(node, If)
    assert len(node.then_body) == 1
    assert [cond.name for cond, _ in node.elifs] == ["b", "c"]
    assert node.elifs[1][1] == []
    assert len(node.else_body) == 1


def test_for_header():
    node = parse_source("for (let i = 0; i < 3; i = i + 1) { woof(i); }")[0]
    assert isinstance(node, For)
    assert isinstance(node.init, Let)
    assert isinstance(node.condition, Comparison)
    assert isinstance(node.update, Assign)
    assert len(node.body) == 1


def test_for_header_clauses_are_optional():
    node = parse_source("for (;;) { }")[0]
    assert node.init is None
    assert node.condition is None
    assert node.update is None


def test_function_definition():
    node = parse_source(
        "funct add(a: int, b: double): double {\n"
        "    return a + b;\n"
        "}\n"
    )[0]
    assert isinstance(node, FunctionDef)
    assert node.name == "add"
    assert [(p.name, p.type_name) for p in node.params] == [("a", "int"), ("b", "double")]
    assert node.return_type == "double"
    assert isinstance(node.body[0], Return)
    assert node.body[0].line == 2


def test_function_without_params_or_return_type():
    node = parse_source("funct hello() { woof(\"hi\"); return; }")[0]
    assert node.params == []
    assert node.return_type is None
    assert node.body[1].value is None


@pytest.mark.parametrize(
    "source,expected",
    [
        ("let = 5;", "identifier"),
        ("let x = 5", "';'"),
        ("woof(1 + );", "expression"),
        ("let x: float = 1.0;", "type name"),
        ("x + 1;", "'=', '[' or '(' after identifier"),
        ("if (true) woof(1);", "'{'"),
        ("funct f(a) { }", "':'"),
        ("5;", "statement"),
    ],
)
def test_syntax_errors(source, expected):
    with pytest.raises(ParseException) as excinfo:
        parse_source(source)
    assert expected in excinfo.value.expected
    assert excinfo.value.kind == "syntax"


def test_syntax_error_message():
    with pytest.raises(ParseException) as excinfo:
        parse_source("let x = 1;\nlet y = ;")
    assert str(excinfo.value) == "Expected expression, but got ';' (SEMI) on line 2 in <test>"
    assert excinfo.value.column == 9


def test_return_outside_function_is_rejected():
    with pytest.raises(ParseException) as excinfo:
        parse_source("return 1;")
    assert "only inside a function body" in str(excinfo.value)


def test_missing_input_is_flagged_at_eof():
    with pytest.raises(ParseException) as excinfo:
        parse_source("funct f() {")
    assert excinfo.value.at_eof
    assert excinfo.value.found == "end of input"
    with pytest.raises(ParseException) as excinfo:
        parse_source("let x = 1 2;")
    assert not excinfo.value.at_eof


def test_operator_table_covers_binary_operators():
    from finnlang import operations

    assert operations.__all__ == ["Op", "TOKEN_OPS"]
    assert set(operations.TOKEN_OPS.values()) == set(Op) - {Op.NOT, Op.NEG}
