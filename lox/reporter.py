"""Diagnostic sink for the Lox pipeline.

Every stage reports problems through an `ErrorReporter`. The reporter
prints the diagnostic and raises a flag that the driver checks before
moving on to the next stage: a program with a syntax error is never
resolved, and one with a resolve error is never executed.
"""

import sys
from typing import Optional, TextIO

from .errors import LoxRuntimeError
from .tokens import Token, TokenType


class ErrorReporter:
    def __init__(self, err: Optional[TextIO] = None):
        self.err = err
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line: int, message: str):
        self.report(line, '', message)

    def token_error(self, token: Token, message: str):
        if token.type == TokenType.EOF:
            self.report(token.line, ' at end', message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line: int, where: str, message: str):
        print(f"[line {line}] Error{where}: {message}", file=self.err or sys.stderr)
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError):
        print(f"{error.message}\n[line {error.token.line}]", file=self.err or sys.stderr)
        self.had_runtime_error = True

    def reset(self):
        """Clear both flags; used between independent REPL inputs."""
        self.had_error = False
        self.had_runtime_error = False
