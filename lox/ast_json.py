"""JSON serialization for the Lox AST.

This module converts Lox AST dataclasses into plain Python dict/list
structures suitable for JSON encoding. The driver uses it to dump what
the parser built (`--emit-ast`); it is a debugging aid and there is no
reverse direction.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Literal,
    Grouping,
    Unary,
    Binary,
    Logical,
    Variable,
    Assign,
    Call,
    AnonymousFunction,
    Expression,
    Print,
    Var,
    Block,
    If,
    While,
    Function,
    Return,
)


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, float, str, bool)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Statements
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Print):
        return {"type": "Print", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name.lexeme, "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": node.name.lexeme,
            "params": [p.lexeme for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Return):
        return {"type": "Return", "line": node.keyword.line, "value": ast_to_obj(node.value)}

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": node.operator.lexeme, "right": ast_to_obj(node.right)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "operator": node.operator.lexeme,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "operator": node.operator.lexeme,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name.lexeme}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name.lexeme, "value": ast_to_obj(node.value)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, AnonymousFunction):
        return {
            "type": "AnonymousFunction",
            "params": [p.lexeme for p in node.params],
            "body": ast_to_obj(node.body),
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")
