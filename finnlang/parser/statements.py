"""Statement parsing utilities for FinnLang.

These functions operate on a `finnlang.parser.parser.Parser` instance and
handle the various statement forms in the language such as declarations,
conditionals, loops, and function definitions.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from typing import TYPE_CHECKING

from finnlang.nodes import (
    Assign,
    ExprStmt,
    For,
    FunctionDef,
    If,
    IndexAssign,
    Let,
    Param,
    Print,
    Return,
    Stmt,
    While,
)
from finnlang.values import TYPE_NAMES

if TYPE_CHECKING:
    from finnlang.parser import Parser


def parse_block(parser: 'Parser') -> list[Stmt]:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* }

    Args:
        parser: The parser instance.

    Returns:
        list: The statements inside the block.
    """
    parser.eat('LBRACE')
    statements = []
    while parser.curr_token.type not in ('RBRACE', 'EOF'):
        statements.append(parser.statement())
    parser.eat('RBRACE')
    return statements


def parse_statement(parser: 'Parser') -> Stmt:
    """
    Parse a single statement, dispatching on its leading token.

    Args:
        parser: The parser instance.

    Returns:
        Stmt: The statement node.
    """
    tok = parser.curr_token
    if tok.type == 'LET':
        return parser.parse_let()
    elif tok.type == 'WOOF':
        return parser.parse_print()
    elif tok.type == 'IF':
        return parser.parse_if()
    elif tok.type == 'WHILE':
        return parser.parse_while()
    elif tok.type == 'FOR':
        return parser.parse_for()
    elif tok.type == 'FUNCT':
        return parser.parse_func_def()
    elif tok.type == 'RETURN':
        return parser.parse_return()
    elif tok.type == 'ID':
        return parser.parse_identifier_statement()
    raise parser.error("statement")


def parse_type(parser: 'Parser') -> str:
    """
    Parse a type annotation.

    Syntax:
        int | bool | string | double | array

    Args:
        parser: The parser instance.

    Returns:
        str: The type name.
    """
    tok = parser.curr_token
    if tok.type != 'ID' or tok.value not in TYPE_NAMES:
        raise parser.error("type name (" + ", ".join(sorted(TYPE_NAMES)) + ")")
    parser.eat('ID')
    return tok.value


def parse_let(parser: 'Parser', terminated: bool = True) -> Let:
    """
    Parse a ``let`` variable declaration.

    Syntax:
        let <identifier> (: <type>)? = <expression> ;

    Args:
        parser: The parser instance.
        terminated: Whether the trailing ``;`` belongs to this statement.
            ``for`` headers pass ``False`` and consume the separator themselves.

    Returns:
        Let: The declaration node.
    """
    tok = parser.eat('LET')
    name = parser.eat('ID').value
    type_name = None
    if parser.curr_token.type == 'COLON':
        parser.eat('COLON')
        type_name = parser.parse_type()
    parser.eat('ASSIGN')
    value = parser.expr()
    if terminated:
        parser.eat('SEMI')
    return Let(name, type_name, value, tok.line)


def parse_identifier_statement(parser: 'Parser', terminated: bool = True) -> Stmt:
    """
    Parse assignment, index assignment or a call statement.

    The token after the identifier decides which form applies: ``=`` is an
    assignment, ``[`` an index assignment and ``(`` a function call.

    Syntax:
        <identifier> = <expression> ;
        <identifier> [ <expression> ] = <expression> ;
        <identifier> ( <arguments> ) ;

    Args:
        parser: The parser instance.
        terminated: Whether the trailing ``;`` belongs to this statement.

    Returns:
        Stmt: An ``Assign``, ``IndexAssign`` or ``ExprStmt`` node.
    """
    id_tok = parser.curr_token
    lookahead = parser.peek().type

    if lookahead == 'ASSIGN':
        parser.eat('ID')
        parser.eat('ASSIGN')
        node = Assign(id_tok.value, parser.expr(), id_tok.line)
    elif lookahead == 'LBRACKET':
        parser.eat('ID')
        parser.eat('LBRACKET')
        index = parser.expr()
        parser.eat('RBRACKET')
        parser.eat('ASSIGN')
        node = IndexAssign(id_tok.value, index, parser.expr(), id_tok.line)
    elif lookahead == 'LPAREN' and terminated:
        node = ExprStmt(parser.factor(), id_tok.line)
    else:
        raise parser.error(
            "'=', '[' or '(' after identifier" if terminated else "'=' or '[' after identifier",
            parser.peek(),
        )

    if terminated:
        parser.eat('SEMI')
    return node


def parse_print(parser: 'Parser') -> Print:
    """
    Parse a ``woof`` statement.

    Syntax:
        woof ( <expression> ) ;

    Args:
        parser: The parser instance.

    Returns:
        Print: The print node.
    """
    tok = parser.eat('WOOF')
    parser.eat('LPAREN')
    value = parser.expr()
    parser.eat('RPAREN')
    parser.eat('SEMI')
    return Print(value, tok.line)


def _parse_condition(parser: 'Parser'):
    parser.eat('LPAREN')
    condition = parser.expr()
    parser.eat('RPAREN')
    return condition


def parse_if(parser: 'Parser') -> If:
    """
    Parse a conditional ``if`` statement with optional elif and else blocks.

    Syntax:
        if ( <condition> ) { <block> }
        elif ( <condition> ) { <block> }
        else { <block> }

    Args:
        parser: The parser instance.

    Returns:
        If: The conditional node with its elif branches in source order.
    """
    tok = parser.eat('IF')
    condition = _parse_condition(parser)
    then_body = parser.block()

    elifs = []
    while parser.curr_token.type == 'ELIF':
        parser.eat('ELIF')
        elif_condition = _parse_condition(parser)
        elifs.append((elif_condition, parser.block()))

    else_body = None
    if parser.curr_token.type == 'ELSE':
        parser.eat('ELSE')
        else_body = parser.block()

    return If(condition, then_body, elifs, else_body, tok.line)


def parse_while(parser: 'Parser') -> While:
    """
    Parse a ``while`` loop.

    Syntax:
        while ( <condition> ) { <block> }

    Args:
        parser: The parser instance.

    Returns:
        While: The loop node.
    """
    tok = parser.eat('WHILE')
    condition = _parse_condition(parser)
    return While(condition, parser.block(), tok.line)


def parse_for(parser: 'Parser') -> For:
    """
    Parse a ``for`` loop. Each header clause is optional but both ``;``
    separators are required.

    Syntax:
        for ( <init>? ; <condition>? ; <update>? ) { <block> }

    Args:
        parser: The parser instance.

    Returns:
        For: The loop node.
    """
    tok = parser.eat('FOR')
    parser.eat('LPAREN')

    init = None
    if parser.curr_token.type == 'LET':
        init = parser.parse_let(terminated=False)
    elif parser.curr_token.type == 'ID':
        init = parser.parse_identifier_statement(terminated=False)
    elif parser.curr_token.type != 'SEMI':
        raise parser.error("'let', assignment or ';' in for loop header")
    parser.eat('SEMI')

    condition = None
    if parser.curr_token.type != 'SEMI':
        condition = parser.expr()
    parser.eat('SEMI')

    update = None
    if parser.curr_token.type == 'ID':
        update = parser.parse_identifier_statement(terminated=False)
    elif parser.curr_token.type != 'RPAREN':
        raise parser.error("assignment or ')' in for loop header")
    parser.eat('RPAREN')

    return For(init, condition, update, parser.block(), tok.line)


def parse_func_def(parser: 'Parser') -> FunctionDef:
    """
    Parse a function definition.

    Syntax:
        funct <name>(<param>: <type>, ...) (: <type>)? { <block> }

    Args:
        parser: The parser instance.

    Returns:
        FunctionDef: The definition node.
    """
    start_tok = parser.eat('FUNCT')
    name = parser.eat('ID').value
    parser.eat('LPAREN')
    params = []
    if parser.curr_token.type != 'RPAREN':
        while True:
            param_tok = parser.eat('ID')
            parser.eat('COLON')
            params.append(Param(param_tok.value, parser.parse_type(), param_tok.line))
            if parser.curr_token.type != 'COMMA':
                break
            parser.eat('COMMA')
    parser.eat('RPAREN')

    return_type = None
    if parser.curr_token.type == 'COLON':
        parser.eat('COLON')
        return_type = parser.parse_type()

    parser.function_depth += 1
    try:
        body = parser.block()
    finally:
        parser.function_depth -= 1
    return FunctionDef(name, params, return_type, body, start_tok.line)


def parse_return(parser: 'Parser') -> Return:
    """
    Parse a ``return`` statement.

    Syntax:
        return <expression>? ;

    Args:
        parser: The parser instance.

    Returns:
        Return: The return node.
    """
    tok = parser.curr_token
    if parser.function_depth == 0:
        raise parser.error("'return' only inside a function body")
    parser.eat('RETURN')
    value = None
    if parser.curr_token.type != 'SEMI':
        value = parser.expr()
    parser.eat('SEMI')
    return Return(value, tok.line)
