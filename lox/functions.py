"""Callable values for the Lox runtime.

Anything a Lox program can call implements `LoxCallable`: it reports
how many arguments it takes and runs given an interpreter and the
already-evaluated arguments. The interpreter checks the argument count
before calling, so `call` always receives exactly `arity()` values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from .ast import AnonymousFunction, Block, Function
from .environment import Environment
from .errors import ReturnSignal
from .tokens import Token

if TYPE_CHECKING:
    from .interpreter import Interpreter


class LoxCallable:
    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        raise NotImplementedError


class LoxFunction(LoxCallable):
    """A user-defined function closed over its defining environment."""
    def __init__(self, declaration: Function, closure: Environment):
        self.name: Optional[str] = declaration.name.lexeme
        self.params: List[Token] = declaration.params
        self.body: Block = declaration.body
        self.closure = closure

    def arity(self) -> int:
        return len(self.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        # A fresh frame per call, parented at the closure rather than the caller
        env = Environment(parent=self.closure)
        for param, argument in zip(self.params, arguments):
            env.define(param.lexeme, argument)
        result = interpreter.execute_block(self.body.statements, env)
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


class LoxAnonymousFunction(LoxFunction):
    """A function expression; identical to `LoxFunction` except unnamed."""
    def __init__(self, declaration: AnonymousFunction, closure: Environment):
        self.name = None
        self.params = declaration.params
        self.body = declaration.body
        self.closure = closure

    def __repr__(self) -> str:
        return "<fn>"
