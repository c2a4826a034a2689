"""FinnLang.

A small curly-brace language with a lexer, recursive-descent parser and
tree-walking interpreter. The usual entry point is :func:`run_source`::

    >>> from finnlang import run_source
    >>> run_source('woof("hello");').output
    'hello\\n'


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from finnlang.exceptions import FinnException
from finnlang.interpreter import Interpreter
from finnlang.lexer import Token, tokenize
from finnlang.parser import Parser
from finnlang.runner import RunResult, parse_source, run, run_source

__version__ = "0.1.0"

__all__ = [
    "FinnException",
    "Interpreter",
    "Parser",
    "RunResult",
    "Token",
    "parse_source",
    "run",
    "run_source",
    "tokenize",
]
