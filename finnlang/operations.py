"""Shared definitions for AST operation identifiers.

This module centralizes the operator names used by the parser and
interpreter to label operator nodes in the abstract syntax tree. Keeping them
in one place prevents the two components from drifting apart when new
operations are added or existing ones are renamed.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    # Comparison
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="

    # Logical
    AND = "&&"
    OR = "||"

    # Unary
    NOT = "!"
    NEG = "neg"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the operator symbol for nicer debug output.
        """
        return "-" if self is Op.NEG else self.value

    def __format__(self, spec: str) -> str:  # pragma: no cover - trivial
        return format(str(self), spec)


# Maps operator token types to their operation.
TOKEN_OPS = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
    'MUL': Op.MUL,
    'DIV': Op.DIV,
    'MOD': Op.MOD,
    'EQ': Op.EQ,
    'NE': Op.NE,
    'LT': Op.LT,
    'GT': Op.GT,
    'LE': Op.LE,
    'GE': Op.GE,
    'AND': Op.AND,
    'OR': Op.OR,
}


__all__ = ["Op", "TOKEN_OPS"]
