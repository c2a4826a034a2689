"""Lexer for FinnLang.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, value and source position.

Tokens cover literals (integers, floats, strings, booleans), keywords
(``let``, ``woof``, ``funct`` …), operators and delimiters. Line comments
beginning with ``//`` are skipped by the regular expression; block comments
(``/* … */``) may nest, so they are consumed by :func:`_skip_block_comment`
which tracks the nesting depth.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import re

from finnlang.exceptions import LexicalException
from finnlang.values import INT_MAX


class Token:
    """
    Represents a lexical token with a type and value.
    """
    def __init__(self, type_, value, line, column=0):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): The 1-based source line.
            column (int): The 1-based source column.
        """
        self.type = type_
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line})"


KEYWORDS = {
    'let': 'LET',
    'woof': 'WOOF',
    'if': 'IF',
    'elif': 'ELIF',
    'else': 'ELSE',
    'while': 'WHILE',
    'for': 'FOR',
    'funct': 'FUNCT',
    'return': 'RETURN',
    'true': 'TRUE',
    'false': 'FALSE',
}

# Human readable spelling of each fixed token, used in parse errors.
TOKEN_LITERALS = {
    'PLUS': '+',
    'MINUS': '-',
    'MUL': '*',
    'DIV': '/',
    'MOD': '%',
    'EQ': '==',
    'NE': '!=',
    'LE': '<=',
    'GE': '>=',
    'LT': '<',
    'GT': '>',
    'AND': '&&',
    'OR': '||',
    'NOT': '!',
    'ASSIGN': '=',
    'LPAREN': '(',
    'RPAREN': ')',
    'LBRACE': '{',
    'RBRACE': '}',
    'LBRACKET': '[',
    'RBRACKET': ']',
    'COMMA': ',',
    'SEMI': ';',
    'COLON': ':',
    **{kind: word for word, kind in KEYWORDS.items()},
}

token_specification: list[tuple[str, str]] = [
    # Comments
    ('LINE_COMMENT',  r'//[^\n]*'),
    ('BLOCK_COMMENT', r'/\*'),

    # Literals
    ('FLOAT',     r'\d+\.\d*'),
    ('INT',       r'\d+'),
    ('STRING',    r'"[^"]*"'),
    ('OPEN_STRING', r'"[^"]*'),

    # Identifiers and keywords
    ('ID',        r'[A-Za-z_][A-Za-z0-9_]*'),

    # Two-character operators
    ('EQ',        r'=='),
    ('NE',        r'!='),
    ('LE',        r'<='),
    ('GE',        r'>='),
    ('AND',       r'&&'),
    ('OR',        r'\|\|'),

    # Single-character operators
    ('ASSIGN',    r'='),
    ('LT',        r'<'),
    ('GT',        r'>'),
    ('NOT',       r'!'),
    ('PLUS',      r'\+'),
    ('MINUS',     r'-'),
    ('MUL',       r'\*'),
    ('DIV',       r'/'),
    ('MOD',       r'%'),

    # Delimiters
    ('LPAREN',    r'\('),
    ('RPAREN',    r'\)'),
    ('LBRACE',    r'\{'),
    ('RBRACE',    r'\}'),
    ('LBRACKET',  r'\['),
    ('RBRACKET',  r'\]'),
    ('COMMA',     r','),
    ('SEMI',      r';'),
    ('COLON',     r':'),

    # Miscellaneous
    ('NEWLINE',   r'\n'),
    ('SKIP',      r'[ \t\r\f\v]+'),
    ('MISMATCH',  r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
)
_COMMENT_DELIMITER = re.compile(r'/\*|\*/|\n')


def _skip_block_comment(code: str, pos: int, line: int, column: int, file: str | None) -> tuple[int, int, int | None]:
    """
    Consume a block comment that may contain nested block comments.

    Parameters:
        code (str): The full source code.
        pos (int): Offset just after the opening ``/*``.
        line (int): The line on which the comment opened.
        column (int): The column at which the comment opened.
        file (str | None): Script name for error messages.

    Returns:
        tuple: The offset after the closing ``*/``, the current line number and
        the offset at which that line starts.

    Raises:
        LexicalException: If the comment is never closed.
    """
    start_line = line
    depth = 1
    line_start = None
    for match_obj in _COMMENT_DELIMITER.finditer(code, pos):
        delimiter = match_obj.group()
        if delimiter == '\n':
            line += 1
            line_start = match_obj.end()
        elif delimiter == '/*':
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                return match_obj.end(), line, line_start
    raise LexicalException(
        "Unterminated block comment", start_line, column, file, at_eof=True
    )


def tokenize(code: str, file: str | None = None) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str | None): Script name used in error messages.

    Returns:
        list[Token]: A list of Token instances terminated by an ``EOF`` token.

    Raises:
        LexicalException: If an unexpected character is encountered.
    """
    tokens = []
    line_num = 1
    line_start = 0
    pos = 0

    while pos < len(code):
        match_obj = TOKEN_REGEX.match(code, pos)
        kind = match_obj.lastgroup
        value = match_obj.group()
        column = pos - line_start + 1
        pos = match_obj.end()

        if kind == 'NEWLINE':
            line_num += 1
            line_start = pos
            continue
        if kind in ('SKIP', 'LINE_COMMENT'):
            continue
        if kind == 'BLOCK_COMMENT':
            pos, line_num, new_line_start = _skip_block_comment(code, pos, line_num, column, file)
            if new_line_start is not None:
                line_start = new_line_start
            continue
        if kind == 'MISMATCH':
            raise LexicalException(
                f"Unexpected character {value!r}", line_num, column, file
            )
        if kind == 'OPEN_STRING':
            raise LexicalException(
                "Unterminated string literal", line_num, column, file, at_eof=True
            )

        if kind == 'INT':
            number = int(value)
            # One past INT_MAX is only valid as the operand of unary minus,
            # which the parser checks.
            if number > INT_MAX + 1:
                raise LexicalException(
                    f"Integer literal {value} does not fit in 64 bits",
                    line_num, column, file,
                )
            tokens.append(Token('INT', number, line_num, column))
        elif kind == 'FLOAT':
            tokens.append(Token('FLOAT', float(value), line_num, column))
        elif kind == 'STRING':
            tokens.append(Token('STRING', value[1:-1], line_num, column))
            line_count = value.count('\n')
            if line_count:
                line_num += line_count
                line_start = match_obj.start() + value.rfind('\n') + 1
        elif kind == 'ID':
            tokens.append(Token(KEYWORDS.get(value, 'ID'), value, line_num, column))
        else:
            tokens.append(Token(kind, value, line_num, column))

    tokens.append(Token('EOF', None, line_num, pos - line_start + 1))
    return tokens
