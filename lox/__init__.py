# Lox language package
# This package provides a scanner, parser, resolver and tree-walking interpreter for Lox.
from .interpreter import run_program, run_source, Interpreter
from .parser import parse_program
from .reporter import ErrorReporter
from .errors import LoxError, LoxRuntimeError

__all__ = [
    'run_program',
    'run_source',
    'parse_program',
    'Interpreter',
    'ErrorReporter',
    'LoxError',
    'LoxRuntimeError',
]
