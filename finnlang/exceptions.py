"""Errors.

Every failure raised by the lexer, parser or interpreter derives from
:class:`FinnException`. Each carries a ``kind`` tag (``lexical``, ``syntax``,
``runtime``) so that front ends can report failures without inspecting the
exception class.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class FinnException(Exception):
    """
    Base error for FinnLang programs.
    """
    kind = "runtime"
    # True when the error was caused by input ending too early.
    at_eof = False

    def __init__(self, message, line=None, file=None):
        self.detail = message
        self.line = line
        self.file = file
        if line is not None:
            message += f" on line {line}"
        if file is not None:
            message += f" in {file}"
        super().__init__(message)


class LexicalException(FinnException):
    """
    Error for source text that cannot be tokenized.
    """
    kind = "lexical"

    def __init__(self, message, line=None, column=None, file=None, at_eof=False):
        self.column = column
        self.at_eof = at_eof
        if column is not None:
            message += f" at column {column}"
        super().__init__(message, line, file)


class ParseException(FinnException):
    """
    Error for token sequences that do not match the grammar.
    """
    kind = "syntax"

    def __init__(self, expected, found, line=None, file=None, at_eof=False, column=None):
        self.expected = expected
        self.found = found
        self.at_eof = at_eof
        self.column = column
        super().__init__(f"Expected {expected}, but got {found}", line, file)


class RuntimeException(FinnException):
    """
    Error raised while a program is executing.
    """
    kind = "runtime"


class UndefinedVariableException(RuntimeException):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class UndefinedFunctionException(RuntimeException):
    """
    Error for calls to functions that were never defined.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"Undefined function '{name}'", line, file)


class ArityException(RuntimeException):
    """
    Error for calls with the wrong number of arguments.
    """
    def __init__(self, name, expected, got, line=None, file=None):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"Function '{name}' expects {expected} argument{'s' if expected != 1 else ''}, got {got}",
            line,
            file,
        )


class TypeMismatchException(RuntimeException):
    """
    Error for operands of the wrong kind.
    """


class DivisionByZeroException(RuntimeException):
    """
    Error for division or modulo by zero.
    """


class IndexOutOfRangeException(RuntimeException):
    """
    Error for array indexes outside ``[0, length)``.
    """
    def __init__(self, index, length, line=None, file=None):
        self.index = index
        self.length = length
        super().__init__(
            f"Array index {index} out of range for array of length {length}",
            line,
            file,
        )


class IntegerOverflowException(RuntimeException):
    """
    Error for integer results that do not fit in 64 bits.
    """


class UnknownOpException(RuntimeException):
    """
    Error for unknown operations.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"Unknown operation '{op}'", line, file)


class ReturnControlFlow(Exception):
    """
    Control flow handling for return statements.
    """
    def __init__(self, value, line=None):
        super().__init__()
        self.value = value
        self.line = line
