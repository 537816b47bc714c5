"""Abstract Syntax Tree (AST) definitions for the Lox language.

The parser builds these nodes and both the resolver and the interpreter
walk them. There are two closed families: `Expr` nodes produce values
and `Stmt` nodes perform effects. Nodes are frozen and compare by
identity, so an expression node can key the interpreter's table of
resolved scope distances even when two nodes look alike.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Any

from .tokens import Token


@dataclass(frozen=True, eq=False)
class Expr:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    value: Any  # float, str, bool or None (nil)


@dataclass(frozen=True, eq=False)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Logical(Expr):
    left: Expr
    operator: Token  # AND or OR
    right: Expr


@dataclass(frozen=True, eq=False)
class Variable(Expr):
    name: Token


@dataclass(frozen=True, eq=False)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True, eq=False)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used to locate runtime errors
    arguments: List[Expr]


@dataclass(frozen=True, eq=False)
class AnonymousFunction(Expr):
    params: List[Token]
    body: 'Block'


@dataclass(frozen=True, eq=False)
class Stmt:
    """Base class for all statement nodes."""
    pass


@dataclass(frozen=True, eq=False)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True, eq=False)
class Block(Stmt):
    statements: List[Stmt]


@dataclass(frozen=True, eq=False)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True, eq=False)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True, eq=False)
class Function(Stmt):
    name: Token
    params: List[Token]
    body: Block


@dataclass(frozen=True, eq=False)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]
