"""Tree-walking evaluator for the adso language.

An Evaluator owns all interpreter state: the scope chain, the operand stack that carries expression results up to
their consumers, and the output stream that built-ins write to. Separate Evaluators never share state.

Each call activation goes through Entered -> (argument bound)? -> ExecutingBody -> Returned | Completed -> ScopePopped.
A 'return' unwinds to its call boundary through the Return signal, which is not an error and never leaves `call`.
"""

import sys
from dataclasses import dataclass
from typing import Callable, Optional

from adso.lang.error import (ArityOrTypeError, IntegerOverflowError, NotCallableError, OperandTypeError,
                             RecursionDepthError)
from adso.lang.grammar import BinExpr, FnCall, FnCallSt, FnDef, Ident, IfSt, NumberLit, ReturnSt
from adso.lang.lexical import INT_MAX, INT_MIN
from adso.lang.scope import ROOT, ScopeChain

VOID = "void"


@dataclass(frozen=True)
class Int:
    value: int
    type_name = "int"

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Bool:
    value: bool
    type_name = "bool"

    def __str__(self):
        return "true" if self.value else "false"


VALUES = (Int, Bool)


@dataclass(frozen=True)
class Builtin:
    """Native function. callback receives the Evaluator and the (possibly None) argument Value."""
    name: str
    param_type: Optional[str]
    callback: Callable


def _print(evaluator, arg):
    evaluator.output.write(f"{arg.value}\n")


BUILTINS = [Builtin("print", "int", _print)]


def type_name(value):
    return value.type_name if value is not None else VOID


class Return(Exception):
    """Carries the value of a 'return' statement up to the enclosing call."""

    def __init__(self, value):
        super().__init__()
        self.value = value


class Evaluator:
    """Executes Programs. Reusable: each run starts from whatever the root scope holds."""
    MAX_CALL_DEPTH = 100

    def __init__(self, output=None, builtins=None):
        self.output = output if output is not None else sys.stdout
        self.scopes = ScopeChain()
        self.stack = []

        for builtin in BUILTINS if builtins is None else builtins:
            self.scopes.define(builtin.name, builtin)

    def register(self, program, error_handler=None):
        """Binds every FnDef of program in the root scope. Redefinitions are reported to error_handler, if given."""
        root = self.scopes.scopes[ROOT].bindings
        for fn_def in program.body:
            previous = root.get(fn_def.name)
            if error_handler is not None and isinstance(previous, Builtin):
                error_handler.warn("'{}' shadows a built-in function", fn_def.name,
                                   line=fn_def.line, column=fn_def.column)
            elif error_handler is not None and isinstance(previous, FnDef):
                error_handler.warn("'{}' redefined (first defined on line {})", (fn_def.name, previous.line),
                                   line=fn_def.line, column=fn_def.column)
            root[fn_def.name] = fn_def

    def run(self, program, error_handler=None):
        """Registers program's functions, then calls main with no argument."""
        self.register(program, error_handler)
        self.evaluate(FnCall("main", None))

    # --- expressions ---

    def evaluate(self, expr):
        """Evaluates expr and returns its Value, or None if it produced nothing (a void call)."""
        depth = len(self.stack)
        self.eval_expr(expr)
        return self.stack.pop() if len(self.stack) > depth else None

    def eval_expr(self, expr):
        """Pushes the value of expr onto the operand stack. Void calls push nothing."""
        if isinstance(expr, NumberLit):
            self.stack.append(Int(expr.value))

        elif isinstance(expr, Ident):
            self.stack.append(self.lookup_value(expr))

        elif isinstance(expr, FnCall):
            self.call(expr)

        elif isinstance(expr, BinExpr):
            left = self.operand(expr.op, expr.left)
            right = self.operand(expr.op, expr.right)
            self.stack.append(self.apply(expr, left, right))

        else:
            raise AssertionError(f"unknown expression {expr!r}")

    def lookup_value(self, ident):
        binding = self.scopes.lookup(ident.name, ident.line, ident.column)
        if not isinstance(binding, VALUES):
            raise OperandTypeError(ident.name, "a value", "a function", ident.line, ident.column)
        return binding

    def operand(self, op, expr):
        """Evaluates an operand of op, which must be an Int."""
        value = self.evaluate(expr)
        if not isinstance(value, Int):
            raise OperandTypeError(op, Int.type_name, type_name(value), expr.line, expr.column)
        return value.value

    @staticmethod
    def apply(expr, left, right):
        if expr.op == "<":
            return Bool(left < right)
        elif expr.op == "*":
            result = left * right
        elif expr.op == "-":
            result = left - right
        else:
            raise AssertionError(f"unknown operator {expr.op!r}")

        if not INT_MIN <= result <= INT_MAX:
            raise IntegerOverflowError(str(expr), expr.line, expr.column)
        return Int(result)

    # --- statements ---

    def exec_stmt(self, stmt):
        if isinstance(stmt, IfSt):
            condition = self.evaluate(stmt.condition)
            if not isinstance(condition, Bool):
                raise OperandTypeError("if", Bool.type_name, type_name(condition),
                                       stmt.condition.line, stmt.condition.column)
            if condition.value:
                self.exec_body(stmt.body)

        elif isinstance(stmt, ReturnSt):
            raise Return(self.evaluate(stmt.value))

        elif isinstance(stmt, FnCallSt):
            self.evaluate(stmt.call)

        else:
            raise AssertionError(f"unknown statement {stmt!r}")

    def exec_body(self, body):
        for stmt in body:
            self.exec_stmt(stmt)

    # --- calls ---

    def call(self, fn_call):
        """Calls the function named by fn_call, pushing its result (if any) onto the operand stack."""
        callee = self.scopes.lookup(fn_call.name, fn_call.line, fn_call.column)
        if not isinstance(callee, (FnDef, Builtin)):
            raise NotCallableError(fn_call.name, fn_call.line, fn_call.column)

        arg = self.evaluate(fn_call.arg) if fn_call.arg is not None else None

        expected = callee.param_type if callee.param_type is not None else VOID
        if expected != type_name(arg):
            raise ArityOrTypeError(fn_call.name, expected, type_name(arg), fn_call.line, fn_call.column)

        if self.scopes.depth >= Evaluator.MAX_CALL_DEPTH:
            raise RecursionDepthError(fn_call.name, Evaluator.MAX_CALL_DEPTH, fn_call.line, fn_call.column)

        self.scopes.push_child(parent=ROOT)
        try:
            if isinstance(callee, Builtin):
                callee.callback(self, arg)
            else:
                if arg is not None:
                    self.scopes.define(callee.param_name, arg)
                try:
                    self.exec_body(callee.body)
                except Return as signal:
                    if signal.value is not None:
                        self.stack.append(signal.value)
        finally:
            self.scopes.pop()
