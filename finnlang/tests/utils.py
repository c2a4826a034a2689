"""
Utility functions shared across FinnLang tests.
"""
import pytest

from finnlang.interpreter import Interpreter
from finnlang.lexer import tokenize
from finnlang.parser import Parser


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    return Parser(tokenize(source, "<test>"), "<test>").parse()


def run_program(source: str) -> list[str]:
    """
    Run source code and return the printed lines.
    """
    interpreter = Interpreter("<test>")
    interpreter.run(parse_source(source))
    return interpreter.output_text.splitlines()


def run_failing(source: str, exc_type):
    """
    Run source code that must fail and return the raised exception.
    """
    interpreter = Interpreter("<test>")
    with pytest.raises(exc_type) as excinfo:
        interpreter.run(parse_source(source))
    return excinfo.value
