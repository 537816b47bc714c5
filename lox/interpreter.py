"""Interpreter for the Lox language.

This module evaluates resolved Lox syntax trees directly: `execute`
runs statements and `evaluate` computes expression values, each
dispatching on the node type. Scopes are `Environment` frames chained to
their lexically enclosing frame; functions capture the frame they were
defined in, which is what makes closures work. Variable references the
resolver pinned to a local scope are read a fixed number of frames out;
everything else is a global and is looked up by name in `globals`.

`run_source` strings the whole pipeline together (scan, parse, resolve,
execute) and stops at the first stage that reports an error.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional, TextIO

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Call, AnonymousFunction, Stmt, Expression, Print, Var, Block, If,
    While, Function, Return,
)
from .builtin_function import native_functions
from .environment import Environment
from .errors import LoxRuntimeError, ReturnSignal
from .functions import LoxCallable, LoxFunction, LoxAnonymousFunction
from .parser import Parser
from .reporter import ErrorReporter
from .resolver import Resolver
from .scanner import scan_tokens
from .tokens import Token, TokenType

# enough Python frames for Lox recursion a few thousand calls deep
RECURSION_LIMIT = 10000


def is_truthy(value: Any) -> bool:
    # only nil and false are falsy; 0 and "" are truthy
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    # Python treats True == 1.0; Lox values of different types are never equal
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    text = repr(value)
    if 'e' in text:
        # 1e+20 -> 1.0E20, 1.5e-07 -> 1.5E-7
        mantissa, exponent = text.split('e')
        if '.' not in mantissa:
            mantissa += '.0'
        return f"{mantissa}E{int(exponent)}"
    if text.endswith('.0'):
        text = text[:-2]
    return text


def stringify(value: Any) -> str:
    """Convert a Lox value to the text `print` shows for it."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    return repr(value)


class Interpreter:
    """Core interpreter that executes a resolved Lox AST."""
    def __init__(self, reporter: Optional[ErrorReporter] = None, out: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out
        self.globals = Environment()
        # distance to the declaring scope, keyed by expression node identity;
        # a REPL session keeps every line's entries for its whole lifetime
        self.locals: Dict[Expr, int] = {}
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None
        for native in native_functions():
            self.globals.define(native.name, native)
        raise_recursion_limit()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def resolve(self, expr: Expr, depth: int):
        self.locals[expr] = depth

    # Public API
    def interpret(self, statements: List[Stmt]):
        """Run top-level statements until they finish or one fails.

        A runtime error stops the run and is reported; output printed
        before it stays printed.
        """
        try:
            for stmt in statements:
                self.execute(stmt, self.globals)
        except LoxRuntimeError as e:
            if self.debug_level >= 1:
                self.debug(f"runtime error at line {e.token.line}: {e.message}")
            self.reporter.runtime_error(e)

    def execute_block(self, statements: List[Stmt], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expression, env)
            print(stringify(value), file=self.out)
            return None
        if isinstance(node, Var):
            value = None
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name.lexeme} = {stringify(value)}")
            return None
        if isinstance(node, Block):
            # a new frame for the block; the caller's frame is untouched on any exit
            return self.execute_block(node.statements, Environment(parent=env))
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.then_branch, env)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env)
            return None
        if isinstance(node, While):
            while is_truthy(self.evaluate(node.condition, env)):
                result = self.execute(node.body, env)
                if isinstance(result, ReturnSignal):
                    return result
            return None
        if isinstance(node, Function):
            env.define(node.name.lexeme, LoxFunction(node, env))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme}")
            return None
        if isinstance(node, Return):
            value = None
            if node.value is not None:
                value = self.evaluate(node.value, env)
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return self.look_up_variable(node.name, node, env)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            distance = self.locals.get(node)
            if distance is not None:
                env.assign_at(distance, node.name.lexeme, value)
            else:
                self.globals.assign(node.name, value)
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            operand = self.evaluate(node.right, env)
            if node.operator.type == TokenType.BANG:
                return not is_truthy(operand)
            if node.operator.type == TokenType.MINUS:
                self.check_number_operand(node.operator, operand)
                return -operand
            if node.operator.type == TokenType.PLUS:
                self.check_number_operand(node.operator, operand)
                return operand
            raise LoxRuntimeError(node.operator, f"Unsupported unary operator '{node.operator.lexeme}'.")
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.binary_op(node.operator, left, right)
        if isinstance(node, Call):
            return self.call(node, env)
        if isinstance(node, AnonymousFunction):
            return LoxAnonymousFunction(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def look_up_variable(self, name: Token, expr: Expr, env: Environment) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return env.get_at(distance, name)
        # the resolver left it unbound, so it can only be a global
        return self.globals.get(name)

    def call(self, node: Call, env: Environment) -> Any:
        callee = self.evaluate(node.callee, env)
        arguments = [self.evaluate(argument, env) for argument in node.arguments]
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(node.paren, "Can only call functions.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(node.paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        if self.debug_level >= 3:
            self.debug(f"call {callee!r} with ({', '.join(stringify(a) for a in arguments)})")
        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise LoxRuntimeError(node.paren, "Stack overflow.") from None

    def binary_op(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if isinstance(left, str) or isinstance(right, str):
                return stringify(left) + stringify(right)
            if isinstance(left, float) and isinstance(right, float):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be two numbers or at least one string.")
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        self.check_number_operands(operator, left, right)
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.STAR:
            return left * right
        if op == TokenType.SLASH:
            if right == 0:
                raise LoxRuntimeError(operator, "Divide by zero attempted.")
            return left / right
        if op == TokenType.GREATER:
            return left > right
        if op == TokenType.GREATER_EQUAL:
            return left >= right
        if op == TokenType.LESS:
            return left < right
        if op == TokenType.LESS_EQUAL:
            return left <= right
        raise LoxRuntimeError(operator, f"Unsupported binary operator '{operator.lexeme}'.")

    def check_number_operand(self, operator: Token, operand: Any):
        if isinstance(operand, float):
            return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def check_number_operands(self, operator: Token, left: Any, right: Any):
        if isinstance(left, float) and isinstance(right, float):
            return
        raise LoxRuntimeError(operator, "Operands must be numbers.")


def raise_recursion_limit():
    # every Lox call nests several Python frames
    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)


def run_source(source: str, interpreter: Interpreter) -> None:
    """Scan, parse, resolve and execute `source` with `interpreter`.

    Each stage runs only if every earlier one finished without reporting
    an error; the outcome is left in `interpreter.reporter`'s flags. The
    interpreter's globals persist, so calling this repeatedly behaves
    like successive REPL lines.
    """
    reporter = interpreter.reporter
    tokens = scan_tokens(source, reporter)
    statements = Parser(tokens, reporter).parse()
    if reporter.had_error:
        return
    if interpreter.debug_level >= 1:
        interpreter.debug(f"parsed {len(statements)} statements")
    Resolver(interpreter).resolve(statements)
    if reporter.had_error:
        return
    if interpreter.debug_level >= 1:
        interpreter.debug(f"resolved {len(interpreter.locals)} local references")
    interpreter.interpret(statements)


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Convenience function to run a Lox program from a source string."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        run_source(source, interpreter)
    finally:
        interpreter.close()
    return interpreter
