"""AST node definitions for FinnLang.

The parser produces instances of these classes and the interpreter consumes
them. Statement nodes derive from :class:`Stmt` and expression nodes from
:class:`Expr`. Every node records the source line it started on so runtime
errors can point back at the script.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from finnlang.operations import Op


class Node:
    """Base class for all AST nodes."""
    line: int


class Expr(Node):
    """Base class for expression nodes."""


class Stmt(Node):
    """Base class for statement nodes."""


# ---- Expressions ----

@dataclass(frozen=True)
class IntLiteral(Expr):
    value: int
    line: int


@dataclass(frozen=True)
class FloatLiteral(Expr):
    value: float
    line: int


@dataclass(frozen=True)
class BoolLiteral(Expr):
    value: bool
    line: int


@dataclass(frozen=True)
class StringLiteral(Expr):
    value: str
    line: int


@dataclass(frozen=True)
class ArrayLiteral(Expr):
    elements: list[Expr]
    line: int


@dataclass(frozen=True)
class Variable(Expr):
    name: str
    line: int


@dataclass(frozen=True)
class Call(Expr):
    name: str
    args: list[Expr]
    line: int


@dataclass(frozen=True)
class Index(Expr):
    """``target[index]``"""
    target: Expr
    index: Expr
    line: int


@dataclass(frozen=True)
class Arithmetic(Expr):
    """Binary ``+ - * / %``."""
    op: Op
    left: Expr
    right: Expr
    line: int


@dataclass(frozen=True)
class Comparison(Expr):
    """Binary ``== != < > <= >=``."""
    op: Op
    left: Expr
    right: Expr
    line: int


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting ``&&`` and ``||``."""
    op: Op
    left: Expr
    right: Expr
    line: int


@dataclass(frozen=True)
class Unary(Expr):
    """Logical ``!`` or arithmetic negation."""
    op: Op
    operand: Expr
    line: int


# ---- Statements ----

@dataclass(frozen=True)
class Let(Stmt):
    name: str
    type_name: Optional[str]
    value: Expr
    line: int


@dataclass(frozen=True)
class Assign(Stmt):
    name: str
    value: Expr
    line: int


@dataclass(frozen=True)
class IndexAssign(Stmt):
    """``name[index] = value;``"""
    name: str
    index: Expr
    value: Expr
    line: int


@dataclass(frozen=True)
class Print(Stmt):
    value: Expr
    line: int


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: list[Stmt]
    line: int


@dataclass(frozen=True)
class For(Stmt):
    init: Optional[Stmt]
    condition: Optional[Expr]
    update: Optional[Stmt]
    body: list[Stmt]
    line: int


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_body: list[Stmt]
    elifs: list[tuple[Expr, list[Stmt]]]
    else_body: Optional[list[Stmt]]
    line: int


@dataclass(frozen=True)
class Param:
    name: str
    type_name: str
    line: int


@dataclass(frozen=True)
class FunctionDef(Stmt):
    name: str
    params: list[Param]
    return_type: Optional[str]
    body: list[Stmt]
    line: int


@dataclass(frozen=True)
class Return(Stmt):
    value: Optional[Expr]
    line: int


@dataclass(frozen=True)
class ExprStmt(Stmt):
    """A function call evaluated for its side effects."""
    call: Call
    line: int
