"""Static scope resolution for Lox programs.

The resolver walks the syntax tree once, before anything runs, and
mirrors the scopes the interpreter will create: one per block and one
per function call. For every variable read or assignment that refers to
a local, it tells the interpreter how many scopes out the declaration
lives. References it cannot find in any scope are left alone; the
interpreter looks those up by name at run time, which lets functions
refer to globals that are only defined later (or on a later REPL line).

It also rejects two programs that are well-formed but meaningless: a
variable read in its own initializer, and a `return` outside a function.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Dict, List, Optional

from .ast import (
    Expr, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Call, AnonymousFunction, Stmt, Expression, Print, Var, Block, If,
    While, Function, Return,
)
from .tokens import Token

if TYPE_CHECKING:
    from .interpreter import Interpreter


class FunctionType(enum.Enum):
    NONE = 'none'
    FUNCTION = 'function'
    ANONYMOUS = 'anonymous'


class Resolver:
    def __init__(self, interpreter: 'Interpreter'):
        self.interpreter = interpreter
        self.reporter = interpreter.reporter
        # innermost scope last; False means declared but not yet initialized
        self.scopes: List[Dict[str, bool]] = []
        # global names are tracked only to catch `var a = a;` at top level;
        # they never get a distance
        self.globals: Dict[str, bool] = {name: True for name in interpreter.globals.values}
        self.current_function = FunctionType.NONE

    def resolve(self, statements: List[Stmt]):
        for stmt in statements:
            self.resolve_stmt(stmt)

    def resolve_stmt(self, node: Stmt):
        if isinstance(node, Block):
            self.begin_scope()
            self.resolve(node.statements)
            self.end_scope()
            return
        if isinstance(node, Var):
            self.declare(node.name)
            if node.initializer is not None:
                self.resolve_expr(node.initializer)
            self.define(node.name)
            return
        if isinstance(node, Function):
            # defined before the body so the function can call itself
            self.declare(node.name)
            self.define(node.name)
            self.resolve_function(node.params, node.body, FunctionType.FUNCTION)
            return
        if isinstance(node, Expression):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, Print):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, If):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.then_branch)
            if node.else_branch is not None:
                self.resolve_stmt(node.else_branch)
            return
        if isinstance(node, While):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.body)
            return
        if isinstance(node, Return):
            if self.current_function == FunctionType.NONE:
                self.reporter.token_error(node.keyword, "Can't return from top-level code.")
            if node.value is not None:
                self.resolve_expr(node.value)
            return
        raise NotImplementedError(f"resolve: unexpected statement type {type(node)}")

    def resolve_expr(self, node: Expr):
        if isinstance(node, Variable):
            self.resolve_variable(node)
            return
        if isinstance(node, Assign):
            self.resolve_expr(node.value)
            self.resolve_local(node, node.name)
            return
        if isinstance(node, Binary):
            self.resolve_expr(node.left)
            self.resolve_expr(node.right)
            return
        if isinstance(node, Logical):
            self.resolve_expr(node.left)
            self.resolve_expr(node.right)
            return
        if isinstance(node, Unary):
            self.resolve_expr(node.right)
            return
        if isinstance(node, Grouping):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, Call):
            self.resolve_expr(node.callee)
            for argument in node.arguments:
                self.resolve_expr(argument)
            return
        if isinstance(node, AnonymousFunction):
            self.resolve_function(node.params, node.body, FunctionType.ANONYMOUS)
            return
        if isinstance(node, Literal):
            return
        raise NotImplementedError(f"resolve: unexpected expression type {type(node)}")

    def resolve_function(self, params: List[Token], body: Block, function_type: FunctionType):
        enclosing_function = self.current_function
        self.current_function = function_type
        self.begin_scope()
        for param in params:
            self.declare(param)
            self.define(param)
        # the body shares the parameters' scope, as the call frame does at run time
        self.resolve(body.statements)
        self.end_scope()
        self.current_function = enclosing_function

    def resolve_variable(self, expr: Variable):
        name = expr.name
        if self.scopes and self.scopes[-1].get(name.lexeme) is False:
            # read inside its own initializer: only an enclosing binding can mean anything
            if not self.resolve_local(expr, name, skip=1) and self.globals.get(name.lexeme) is not True:
                self.reporter.token_error(name, "Cannot use variable name in its own initializer.")
            return
        if not self.scopes and self.globals.get(name.lexeme) is False:
            self.reporter.token_error(name, "Cannot use variable name in its own initializer.")
            return
        self.resolve_local(expr, name)

    def resolve_local(self, expr: Expr, name: Token, skip: int = 0) -> bool:
        for i in range(len(self.scopes) - 1 - skip, -1, -1):
            if name.lexeme in self.scopes[i]:
                distance = len(self.scopes) - 1 - i
                self.interpreter.resolve(expr, distance)
                if self.interpreter.debug_level >= 2:
                    self.interpreter.debug(f"resolve {name.lexeme} (line {name.line}) at distance {distance}")
                return True
        # not found: a global, looked up by name at run time
        return False

    def declare(self, name: Token):
        if not self.scopes:
            self.globals.setdefault(name.lexeme, False)
            return
        self.scopes[-1][name.lexeme] = False

    def define(self, name: Token):
        if not self.scopes:
            self.globals[name.lexeme] = True
            return
        self.scopes[-1][name.lexeme] = True

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()
