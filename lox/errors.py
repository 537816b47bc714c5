from typing import Any

from lox.tokens import Token


class LoxError(Exception):
    """Base class for errors raised while processing Lox source."""


class ParseError(LoxError):
    """Unwinds the parser to the nearest declaration so it can resynchronize."""


class LoxRuntimeError(LoxError):
    """Exception type used to propagate Lox runtime errors."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ReturnSignal:
    """Result of executing a `return` statement.

    Statement execution hands this back instead of raising it; every
    enclosing statement passes it up until the function call that owns
    it unwraps the value.
    """
    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
