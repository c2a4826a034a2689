"""
Main parser entry point for FinnLang.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`finnlang.parser.expressions` and `finnlang.parser.statements`.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from finnlang.exceptions import ParseException
from finnlang.lexer import Token, TOKEN_LITERALS
from finnlang.nodes import Expr, Stmt

from . import expressions as _expr
from . import statements as _stmt


def describe_token(tok: Token) -> str:
    """
    Describe a token for use in error messages.
    """
    if tok.type == 'EOF':
        return "end of input"
    return f"'{tok.value}' ({tok.type})"


class Parser:
    """FinnLang parser."""

    def __init__(self, tokens: list[Token], file: str = "<string>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with ``EOF``.
            file (str): The name of the script.
        """
        if not tokens or tokens[-1].type != 'EOF':
            line = tokens[-1].line if tokens else 1
            tokens = [*tokens, Token('EOF', None, line)]
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file
        # Number of function bodies enclosing the current position.
        self.function_depth = 0

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` positions ahead without consuming anything.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def error(self, expected: str, tok: Token | None = None) -> ParseException:
        """
        Build a parse error for the expected construct at ``tok``.

        Parameters:
            expected (str): Description of what the grammar required.
            tok (Token): The offending token, defaults to the current token.

        Returns:
            ParseException: The error, ready to be raised.
        """
        tok = tok or self.curr_token
        return ParseException(
            expected,
            describe_token(tok),
            tok.line,
            self.source_file,
            at_eof=tok.type == 'EOF',
            column=tok.column,
        )

    def eat(self, token_type: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.

        Returns:
            Token: The consumed token.

        Raises:
            ParseException: If the token does not match the expected type.
        """
        tok = self.curr_token
        if tok.type != token_type:
            if token_type in TOKEN_LITERALS:
                expected = f"'{TOKEN_LITERALS[token_type]}'"
            elif token_type == 'ID':
                expected = "identifier"
            else:
                expected = token_type
            raise self.error(expected)
        if self.position < len(self.tokens) - 1:
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    # Expression wrappers
    def expr(self) -> Expr:
        """
        Parse a full expression starting from the lowest precedence level.
        """
        return _expr.parse_expr(self)

    def logical_or(self) -> Expr:
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def logical_and(self) -> Expr:
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def equality(self) -> Expr:
        """
        Parse an equality expression using ``==`` or ``!=``.
        """
        return _expr.parse_equality(self)

    def relational(self) -> Expr:
        """
        Parse a relational expression using ``<``, ``>``, ``<=`` or ``>=``.
        """
        return _expr.parse_relational(self)

    def additive(self) -> Expr:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_additive(self)

    def term(self) -> Expr:
        """
        Parse a term in an expression, typically involving multiplication or division.
        """
        return _expr.parse_term(self)

    def unary(self) -> Expr:
        """
        Parse a prefix ``!`` or ``-`` expression.
        """
        return _expr.parse_unary(self)

    def postfix(self) -> Expr:
        """
        Parse a primary expression followed by any number of index accessors.
        """
        return _expr.parse_postfix(self)

    def factor(self) -> Expr:
        """
        Parse a factor expression such as a literal, variable, call, or parenthesized group.
        """
        return _expr.parse_factor(self)

    # Statement wrappers
    def block(self) -> list[Stmt]:
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self) -> Stmt:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_let(self, terminated: bool = True) -> Stmt:
        """
        Parse a ``let`` variable declaration.
        """
        return _stmt.parse_let(self, terminated)

    def parse_type(self) -> str:
        """
        Parse a type annotation name.
        """
        return _stmt.parse_type(self)

    def parse_print(self) -> Stmt:
        """
        Parse a ``woof`` statement used for output.
        """
        return _stmt.parse_print(self)

    def parse_if(self) -> Stmt:
        """
        Parse an ``if`` conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> Stmt:
        """
        Parse a ``while`` loop.
        """
        return _stmt.parse_while(self)

    def parse_for(self) -> Stmt:
        """
        Parse a ``for`` loop.
        """
        return _stmt.parse_for(self)

    def parse_func_def(self) -> Stmt:
        """
        Parse a function definition statement.
        """
        return _stmt.parse_func_def(self)

    def parse_return(self) -> Stmt:
        """
        Parse a ``return`` statement from within a function.
        """
        return _stmt.parse_return(self)

    def parse_identifier_statement(self, terminated: bool = True) -> Stmt:
        """
        Parse a statement that starts with an identifier.
        """
        return _stmt.parse_identifier_statement(self, terminated)

    def parse(self) -> list[Stmt]:
        """
        Parse the full input into a list of statements.
        """
        statements = []
        while self.curr_token.type != 'EOF':
            statements.append(self.statement())
        return statements
