"""
Expression parsing utilities for FinnLang.

These functions operate on a `finnlang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity. Precedence from lowest to highest:

    ||  &&  == !=  < > <= >=  + -  * / %  unary ! -  indexing  primary


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from typing import TYPE_CHECKING

from finnlang.exceptions import LexicalException
from finnlang.nodes import (
    Arithmetic,
    ArrayLiteral,
    BoolLiteral,
    Call,
    Comparison,
    Expr,
    FloatLiteral,
    Index,
    IntLiteral,
    Logical,
    StringLiteral,
    Unary,
    Variable,
)
from finnlang.operations import Op, TOKEN_OPS
from finnlang.values import INT_MAX, INT_MIN

if TYPE_CHECKING:
    from finnlang.parser import Parser


# ---- Highest precedence ----

def parse_arguments(parser: 'Parser', closing: str) -> list[Expr]:
    """Parse a comma separated list of expressions up to ``closing``."""
    items = []
    if parser.curr_token.type != closing:
        items.append(parser.expr())
        while parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
            items.append(parser.expr())
    parser.eat(closing)
    return items


def parse_factor(parser: 'Parser') -> Expr:
    """Parse a literal, variable, call, array literal or parenthesized expression."""
    tok = parser.curr_token

    if tok.type == 'INT':
        parser.eat('INT')
        if tok.value > INT_MAX:
            raise LexicalException(
                f"Integer literal {tok.value} does not fit in 64 bits",
                tok.line, tok.column, parser.source_file,
            )
        return IntLiteral(tok.value, tok.line)

    if tok.type == 'FLOAT':
        parser.eat('FLOAT')
        return FloatLiteral(tok.value, tok.line)

    if tok.type == 'STRING':
        parser.eat('STRING')
        return StringLiteral(tok.value, tok.line)

    if tok.type in ('TRUE', 'FALSE'):
        parser.eat(tok.type)
        return BoolLiteral(tok.type == 'TRUE', tok.line)

    if tok.type == 'LBRACKET':
        parser.eat('LBRACKET')
        return ArrayLiteral(parse_arguments(parser, 'RBRACKET'), tok.line)

    if tok.type == 'ID':
        parser.eat('ID')
        if parser.curr_token.type == 'LPAREN':
            parser.eat('LPAREN')
            return Call(tok.value, parse_arguments(parser, 'RPAREN'), tok.line)
        return Variable(tok.value, tok.line)

    if tok.type == 'LPAREN':
        parser.eat('LPAREN')
        node = parser.expr()
        parser.eat('RPAREN')
        return node

    raise parser.error("expression")


def parse_postfix(parser: 'Parser') -> Expr:
    """Parse index access such as ``arr[0]`` or ``grid[1][2]``."""
    result = parser.factor()
    while parser.curr_token.type == 'LBRACKET':
        tok = parser.eat('LBRACKET')
        index = parser.expr()
        parser.eat('RBRACKET')
        result = Index(result, index, tok.line)
    return result


def parse_unary(parser: 'Parser') -> Expr:
    """Parse logical not (``!``) and arithmetic negation (``-``)."""
    tok = parser.curr_token
    if tok.type == 'NOT':
        parser.eat('NOT')
        return Unary(Op.NOT, parser.unary(), tok.line)
    if tok.type == 'MINUS':
        parser.eat('MINUS')
        literal = parser.curr_token
        if literal.type == 'INT' and literal.value == INT_MAX + 1:
            parser.eat('INT')
            return IntLiteral(INT_MIN, tok.line)
        return Unary(Op.NEG, parser.unary(), tok.line)
    return parser.postfix()


def parse_term(parser: 'Parser') -> Expr:
    """Parse multiplication, division, and modulus expressions."""
    result = parser.unary()
    while parser.curr_token.type in ('MUL', 'DIV', 'MOD'):
        op_tok = parser.eat(parser.curr_token.type)
        result = Arithmetic(TOKEN_OPS[op_tok.type], result, parser.unary(), op_tok.line)
    return result


def parse_additive(parser: 'Parser') -> Expr:
    """Parse addition and subtraction expressions."""
    result = parser.term()
    while parser.curr_token.type in ('PLUS', 'MINUS'):
        op_tok = parser.eat(parser.curr_token.type)
        result = Arithmetic(TOKEN_OPS[op_tok.type], result, parser.term(), op_tok.line)
    return result


def parse_relational(parser: 'Parser') -> Expr:
    """Parse ordering comparisons (<, >, <=, >=)."""
    result = parser.additive()
    while parser.curr_token.type in ('LT', 'GT', 'LE', 'GE'):
        op_tok = parser.eat(parser.curr_token.type)
        result = Comparison(TOKEN_OPS[op_tok.type], result, parser.additive(), op_tok.line)
    return result


def parse_equality(parser: 'Parser') -> Expr:
    """Parse equality comparisons (==, !=)."""
    result = parser.relational()
    while parser.curr_token.type in ('EQ', 'NE'):
        op_tok = parser.eat(parser.curr_token.type)
        result = Comparison(TOKEN_OPS[op_tok.type], result, parser.relational(), op_tok.line)
    return result


def parse_logical_and(parser: 'Parser') -> Expr:
    """Parse logical AND expressions using '&&'."""
    result = parser.equality()
    while parser.curr_token.type == 'AND':
        tok = parser.eat('AND')
        result = Logical(Op.AND, result, parser.equality(), tok.line)
    return result


def parse_logical_or(parser: 'Parser') -> Expr:
    """Parse logical OR expressions using '||'."""
    result = parser.logical_and()
    while parser.curr_token.type == 'OR':
        tok = parser.eat('OR')
        result = Logical(Op.OR, result, parser.logical_and(), tok.line)
    return result


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> Expr:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.logical_or()
