"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
arithmetic, variables, arrays, function definitions and calls, conditionals, loops, and output
statements.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down, recursive manner.
Statements are executed via the `execute()` method, and expressions are evaluated using
`eval_expr()`. Both methods dispatch on the node classes defined in `finnlang.nodes`.

2. Environment
The interpreter maintains two dictionaries:
    - `vars`: the active variable environment (scope).
    - `functions`: a function table mapping names to their definitions.
A function call replaces `vars` with a fresh environment holding only the call's parameters
and restores the caller's environment afterwards. Functions never see the caller's variables;
the function table is shared by every call in a run.

3. Expression Evaluation
Operands are checked for their kind before every operation. `+` concatenates when either
side is a string, integers and doubles mix by promoting to double, and integer results are
kept within the signed 64-bit range. `&&` and `||` short-circuit.

4. Control Flow
Control constructs include:
- `if`/`elif`/`else`: the first branch whose condition is true runs.
- `while` and `for`: loop while a boolean condition holds.
- `return`: unwinds to the enclosing call through `ReturnControlFlow`.

5. Output
`woof` renders a value and records it as a line of output. Output is collected in `output`
and, when a stream is given, written to it as it is produced.

6. Error Handling
Runtime errors, such as undefined variables, arity mismatches, operands of the wrong kind or
division by zero, are raised as typed exceptions with line numbers and file context. The first
error aborts the run.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
from typing import TextIO

from finnlang.exceptions import (
    ArityException,
    DivisionByZeroException,
    IndexOutOfRangeException,
    IntegerOverflowException,
    ReturnControlFlow,
    RuntimeException,
    TypeMismatchException,
    UndefinedFunctionException,
    UndefinedVariableException,
    UnknownOpException,
)
from finnlang.nodes import (
    Arithmetic,
    ArrayLiteral,
    Assign,
    BoolLiteral,
    Call,
    Comparison,
    ExprStmt,
    FloatLiteral,
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
    StringLiteral,
    Unary,
    Variable,
    While,
)
from finnlang.operations import Op
from finnlang.values import (
    comparable,
    fits_int64,
    is_int,
    is_number,
    kind_of,
    render,
    values_equal,
)


class Interpreter:
    """Tree-walk interpreter for FinnLang."""

    def __init__(self, file: str = "<string>", stream: TextIO | None = None):
        """
        Initialize the interpreter.

        Parameters:
            file (str): The script name used in error messages.
            stream (TextIO | None): Optional stream receiving output as it is produced.
        """
        self.vars = {}
        self.functions = {}
        self.output: list[str] = []
        self.stream = stream
        self.file = file

    @property
    def output_text(self) -> str:
        """
        All output produced so far.
        """
        return ''.join(self.output)

    def run(self, statements: list) -> str:
        """
        Execute a whole program and return its output.

        Raises:
            RuntimeException: If the program fails.
        """
        try:
            self.execute(statements)
        except ReturnControlFlow as ret:
            raise RuntimeException(
                "'return' outside of a function body", ret.line, self.file
            ) from None
        return self.output_text

    def _format_expr(self, node) -> str:
        """
        Convert an expression node back to readable source for error messages.

        Args:
            node: An expression node.

        Returns:
            str: A string representation of the expression.
        """
        match node:
            case IntLiteral(value=value) | FloatLiteral(value=value):
                return render(value)
            case BoolLiteral(value=value):
                return render(value)
            case StringLiteral(value=value):
                return f'"{value}"'
            case ArrayLiteral(elements=elements):
                return '[' + ', '.join(self._format_expr(e) for e in elements) + ']'
            case Variable(name=name):
                return name
            case Call(name=name, args=args):
                return f"{name}({', '.join(self._format_expr(a) for a in args)})"
            case Index(target=target, index=index):
                return f"{self._format_expr(target)}[{self._format_expr(index)}]"
            case Arithmetic(op=op, left=left, right=right) \
                    | Comparison(op=op, left=left, right=right) \
                    | Logical(op=op, left=left, right=right):
                return f"({self._format_expr(left)} {op} {self._format_expr(right)})"
            case Unary(op=op, operand=operand):
                return f"{op}{self._format_expr(operand)}"
            case _:
                return f"<{type(node).__name__}>"

    def emit(self, text: str) -> None:
        """
        Record a line of program output.
        """
        line = text + '\n'
        self.output.append(line)
        if self.stream is not None:
            self.stream.write(line)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _check_int(self, value: int, op, line: int) -> int:
        if not fits_int64(value):
            raise IntegerOverflowException(
                f"Integer overflow in '{op}'", line, self.file
            )
        return value

    def _mismatch(self, op, lhs, rhs, line: int) -> TypeMismatchException:
        return TypeMismatchException(
            f"Unsupported operand kinds for '{op}': {kind_of(lhs)} and {kind_of(rhs)}",
            line,
            self.file,
        )

    def _arithmetic(self, node: Arithmetic, lhs, rhs):
        """
        Apply ``+ - * / %`` to two evaluated operands.
        """
        op, line = node.op, node.line

        if op == Op.ADD and (isinstance(lhs, str) or isinstance(rhs, str)):
            return render(lhs) + render(rhs)
        if not (is_number(lhs) and is_number(rhs)):
            raise self._mismatch(op, lhs, rhs, line)

        if is_int(lhs) and is_int(rhs):
            match op:
                case Op.ADD:
                    return self._check_int(lhs + rhs, op, line)
                case Op.SUB:
                    return self._check_int(lhs - rhs, op, line)
                case Op.MUL:
                    return self._check_int(lhs * rhs, op, line)
                case Op.DIV | Op.MOD:
                    if rhs == 0:
                        raise DivisionByZeroException(
                            "Division by zero" if op == Op.DIV else "Modulo by zero",
                            line,
                            self.file,
                        )
                    # Integer division truncates toward zero.
                    quotient = abs(lhs) // abs(rhs)
                    if (lhs < 0) != (rhs < 0):
                        quotient = -quotient
                    if op == Op.DIV:
                        return self._check_int(quotient, op, line)
                    return lhs - rhs * quotient
                case _:
                    raise UnknownOpException(op, line, self.file)

        lhs, rhs = float(lhs), float(rhs)
        match op:
            case Op.ADD:
                return lhs + rhs
            case Op.SUB:
                return lhs - rhs
            case Op.MUL:
                return lhs * rhs
            case Op.DIV:
                if rhs == 0.0:
                    raise DivisionByZeroException("Division by zero", line, self.file)
                return lhs / rhs
            case Op.MOD:
                if rhs == 0.0:
                    raise DivisionByZeroException("Modulo by zero", line, self.file)
                return math.fmod(lhs, rhs)
            case _:
                raise UnknownOpException(op, line, self.file)

    def _comparison(self, node: Comparison, lhs, rhs) -> bool:
        """
        Apply ``== != < > <= >=`` to two evaluated operands.
        """
        op, line = node.op, node.line

        if op in (Op.EQ, Op.NE):
            if not comparable(lhs, rhs):
                raise TypeMismatchException(
                    f"Cannot compare {kind_of(lhs)} and {kind_of(rhs)} with '{op}'",
                    line,
                    self.file,
                )
            equal = values_equal(lhs, rhs)
            return equal if op == Op.EQ else not equal

        if not (is_number(lhs) and is_number(rhs)):
            raise self._mismatch(op, lhs, rhs, line)
        if not (is_int(lhs) and is_int(rhs)):
            lhs, rhs = float(lhs), float(rhs)
        match op:
            case Op.LT:
                return lhs < rhs
            case Op.GT:
                return lhs > rhs
            case Op.LE:
                return lhs <= rhs
            case Op.GE:
                return lhs >= rhs
            case _:
                raise UnknownOpException(op, line, self.file)

    def _require_bool(self, value, what: str, node) -> bool:
        if not isinstance(value, bool):
            raise TypeMismatchException(
                f"{what} must be bool, got {kind_of(value)} from {self._format_expr(node)}",
                node.line,
                self.file,
            )
        return value

    def _logical(self, node: Logical) -> bool:
        """
        Evaluate ``&&`` or ``||``, skipping the right operand when the left decides.
        """
        lhs = self._require_bool(self.eval_expr(node.left), f"Left operand of '{node.op}'", node.left)
        if node.op == Op.AND:
            if not lhs:
                return False
        elif node.op == Op.OR:
            if lhs:
                return True
        else:
            raise UnknownOpException(node.op, node.line, self.file)
        return self._require_bool(self.eval_expr(node.right), f"Right operand of '{node.op}'", node.right)

    def _unary(self, node: Unary):
        operand = self.eval_expr(node.operand)
        match node.op:
            case Op.NOT:
                return not self._require_bool(operand, "Operand of '!'", node.operand)
            case Op.NEG:
                if is_int(operand):
                    return self._check_int(-operand, node.op, node.line)
                if isinstance(operand, float):
                    return -operand
                raise TypeMismatchException(
                    f"Unary minus requires a numeric operand, got {kind_of(operand)}",
                    node.line,
                    self.file,
                )
            case _:
                raise UnknownOpException(node.op, node.line, self.file)

    def _index(self, array, index, line: int):
        """
        Validate an array access and return the checked index.
        """
        if not isinstance(array, list):
            raise TypeMismatchException(
                f"Cannot index into {kind_of(array)}", line, self.file
            )
        if not is_int(index):
            raise TypeMismatchException(
                f"Array index must be int, got {kind_of(index)}", line, self.file
            )
        if not 0 <= index < len(array):
            raise IndexOutOfRangeException(index, len(array), line, self.file)
        return index

    def call_function(self, node: Call):
        """
        Call a user-defined function.

        The callee runs in a fresh environment holding only its parameters.

        Parameters:
            node (Call): The call expression.

        Returns:
            The returned value, or ``None`` if the body finished without one.

        Raises:
            UndefinedFunctionException: If no function of that name exists.
            ArityException: If the argument count does not match.
        """
        func = self.functions.get(node.name)
        if func is None:
            raise UndefinedFunctionException(node.name, node.line, self.file)
        if len(node.args) != len(func.params):
            raise ArityException(
                node.name, len(func.params), len(node.args), node.line, self.file
            )

        args = [self.eval_expr(arg) for arg in node.args]

        saved_vars = self.vars
        self.vars = {param.name: value for param, value in zip(func.params, args)}
        try:
            self.execute(func.body)
            result = None
        except ReturnControlFlow as ret:
            result = ret.value
        finally:
            self.vars = saved_vars

        return result

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (Expr): An expression node.

        Returns:
            The evaluated runtime value.

        Raises:
            UndefinedVariableException: If a variable is referenced that has not been defined.
            TypeMismatchException: If an operand has the wrong kind.
            RuntimeException: For any other runtime failure.
        """
        match node:
            # Literals
            case IntLiteral(value=value) | FloatLiteral(value=value) \
                    | BoolLiteral(value=value) | StringLiteral(value=value):
                return value
            case ArrayLiteral(elements=elements):
                return [self.eval_expr(element) for element in elements]

            # Variables
            case Variable(name=name, line=line):
                if name in self.vars:
                    return self.vars[name]
                raise UndefinedVariableException(name, line, self.file)

            # Indexes
            case Index(target=target, index=index, line=line):
                array = self.eval_expr(target)
                position = self._index(array, self.eval_expr(index), line)
                return array[position]

            # Operators
            case Arithmetic(left=left, right=right):
                lhs = self.eval_expr(left)
                rhs = self.eval_expr(right)
                return self._arithmetic(node, lhs, rhs)
            case Comparison(left=left, right=right):
                lhs = self.eval_expr(left)
                rhs = self.eval_expr(right)
                return self._comparison(node, lhs, rhs)
            case Logical():
                return self._logical(node)
            case Unary():
                return self._unary(node)

            # Function calls
            case Call(name=name, line=line):
                result = self.call_function(node)
                if result is None:
                    raise TypeMismatchException(
                        f"Function '{name}' did not return a value", line, self.file
                    )
                return result

        raise RuntimeException(f"Invalid expression node: {node!r}", None, self.file)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _loop_condition(self, node) -> bool:
        return self._require_bool(self.eval_expr(node), "Loop condition", node)

    def execute(self, statements: list):
        """
        Executes a list of statements.

        Parameters:
            statements (list): Statement nodes in source order.

        Raises:
            RuntimeException: For runtime failures.
            ReturnControlFlow: When a ``return`` statement runs.
        """
        for stmt in statements:
            match stmt:
                case Let(name=name, value=value):
                    self.vars[name] = self.eval_expr(value)

                case Assign(name=name, value=value, line=line):
                    if name not in self.vars:
                        raise UndefinedVariableException(name, line, self.file)
                    self.vars[name] = self.eval_expr(value)

                case IndexAssign(name=name, index=index, value=value, line=line):
                    if name not in self.vars:
                        raise UndefinedVariableException(name, line, self.file)
                    array = self.vars[name]
                    position = self._index(array, self.eval_expr(index), line)
                    new_value = self.eval_expr(value)
                    # Arrays behave as values: rebind to an updated copy.
                    updated = list(array)
                    updated[position] = new_value
                    self.vars[name] = updated

                case Print(value=value):
                    self.emit(render(self.eval_expr(value)))

                case While(condition=condition, body=body):
                    while self._loop_condition(condition):
                        self.execute(body)

                case For(init=init, condition=condition, update=update, body=body):
                    if init is not None:
                        self.execute([init])
                    while condition is None or self._loop_condition(condition):
                        self.execute(body)
                        if update is not None:
                            self.execute([update])

                case If(condition=condition, then_body=then_body, elifs=elifs, else_body=else_body):
                    if self._require_bool(self.eval_expr(condition), "If condition", condition):
                        self.execute(then_body)
                        continue
                    for elif_condition, elif_body in elifs:
                        if self._require_bool(self.eval_expr(elif_condition), "Elif condition", elif_condition):
                            self.execute(elif_body)
                            break
                    else:
                        if else_body is not None:
                            self.execute(else_body)

                case FunctionDef(name=name):
                    # Redefinition replaces the previous definition.
                    self.functions[name] = stmt

                case Return(value=value, line=line):
                    result = self.eval_expr(value) if value is not None else None
                    raise ReturnControlFlow(result, line)

                case ExprStmt(call=call):
                    self.call_function(call)

                case _:
                    raise RuntimeException(
                        f"Unknown statement type: {type(stmt).__name__}",
                        getattr(stmt, 'line', None),
                        self.file,
                    )
