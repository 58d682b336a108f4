"""JSON serialization/deserialization for the YOLOL AST.

This module converts between YOLOL AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types. Numbers are stored as their decimal
text so no precision is lost to JSON floats.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    Line,
    Comment,
    Goto,
    If,
    Assignment,
    ExpressionStatement,
    ValueExpr,
    UnaryOp,
    BinaryOp,
    NumberValue,
    StringValue,
    Identifier,
    Group,
    Operator,
)
from .types import YololNumber


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "lines": [ast_to_obj(line) for line in node.lines]}
    if isinstance(node, Line):
        return {"type": "Line", "statements": [ast_to_obj(s) for s in node.statements]}

    # Statements
    if isinstance(node, Comment):
        return {"type": "Comment", "text": node.text}
    if isinstance(node, Goto):
        return {"type": "Goto", "expr": ast_to_obj(node.expr)}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "body": [ast_to_obj(s) for s in node.body],
            "else_body": None if node.else_body is None else [ast_to_obj(s) for s in node.else_body],
        }
    if isinstance(node, Assignment):
        return {
            "type": "Assignment",
            "target": ast_to_obj(node.target),
            "op": node.op.value,
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expr": ast_to_obj(node.expr)}

    # Expressions
    if isinstance(node, ValueExpr):
        return {"type": "ValueExpr", "value": ast_to_obj(node.value)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op.value, "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op.value, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}

    # Values
    if isinstance(node, NumberValue):
        return {"type": "Number", "value": str(node.number)}
    if isinstance(node, StringValue):
        return {"type": "String", "value": node.text}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name, "is_global": node.is_global}
    if isinstance(node, Group):
        return {"type": "Group", "expr": ast_to_obj(node.expr)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(lines=[ast_from_obj(line) for line in obj["lines"]])
    if t == "Line":
        return Line(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Comment":
        return Comment(text=obj["text"])
    if t == "Goto":
        return Goto(expr=ast_from_obj(obj["expr"]))
    if t == "If":
        else_body = obj.get("else_body")
        return If(
            condition=ast_from_obj(obj["condition"]),
            body=[ast_from_obj(s) for s in obj["body"]],
            else_body=None if else_body is None else [ast_from_obj(s) for s in else_body],
        )
    if t == "Assignment":
        return Assignment(
            target=ast_from_obj(obj["target"]),
            op=Operator(obj["op"]),
            expr=ast_from_obj(obj["expr"]),
        )
    if t == "ExpressionStatement":
        return ExpressionStatement(expr=ast_from_obj(obj["expr"]))
    if t == "ValueExpr":
        return ValueExpr(value=ast_from_obj(obj["value"]))
    if t == "UnaryOp":
        return UnaryOp(op=Operator(obj["op"]), operand=ast_from_obj(obj["operand"]))
    if t == "BinaryOp":
        return BinaryOp(op=Operator(obj["op"]), left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Number":
        return NumberValue(number=YololNumber.parse(obj["value"]))
    if t == "String":
        return StringValue(text=obj["value"])
    if t == "Identifier":
        return Identifier(name=obj["name"], is_global=bool(obj.get("is_global", False)))
    if t == "Group":
        return Group(expr=ast_from_obj(obj["expr"]))

    raise ValueError(f"Unknown AST node type: {t}")

