"""JSON serialization/deserialization for the Bella AST.

This module converts between Bella AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes an
object tagged with its class name under "type", so a program built by an
external front end can be handed to the interpreter as a JSON document.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    Block,
    VariableDeclaration,
    FunctionDeclaration,
    Assignment,
    PrintStatement,
    WhileStatement,
    Numeral,
    BooleanLiteral,
    Identifier,
    UnaryExpression,
    BinaryExpression,
    ConditionalExpression,
    ArrayLiteral,
    SubscriptExpression,
    Call,
)


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, int, float, str)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    if isinstance(node, Program):
        return {"type": "Program", "block": ast_to_obj(node.block)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": ast_to_obj(node.statements)}
    if isinstance(node, VariableDeclaration):
        return {"type": "VariableDeclaration", "id": ast_to_obj(node.id), "expression": ast_to_obj(node.expression)}
    if isinstance(node, FunctionDeclaration):
        return {
            "type": "FunctionDeclaration",
            "id": ast_to_obj(node.id),
            "parameters": ast_to_obj(node.parameters),
            "expression": ast_to_obj(node.expression),
        }
    if isinstance(node, Assignment):
        return {"type": "Assignment", "id": ast_to_obj(node.id), "expression": ast_to_obj(node.expression)}
    if isinstance(node, PrintStatement):
        return {"type": "PrintStatement", "expression": ast_to_obj(node.expression)}
    if isinstance(node, WhileStatement):
        return {"type": "WhileStatement", "expression": ast_to_obj(node.expression), "block": ast_to_obj(node.block)}
    if isinstance(node, Numeral):
        return {"type": "Numeral", "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, UnaryExpression):
        return {"type": "UnaryExpression", "operator": node.operator, "expression": ast_to_obj(node.expression)}
    if isinstance(node, BinaryExpression):
        return {
            "type": "BinaryExpression",
            "operator": node.operator,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, ConditionalExpression):
        return {
            "type": "ConditionalExpression",
            "test": ast_to_obj(node.test),
            "consequent": ast_to_obj(node.consequent),
            "alternate": ast_to_obj(node.alternate),
        }
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "elements": ast_to_obj(node.elements)}
    if isinstance(node, SubscriptExpression):
        return {"type": "SubscriptExpression", "array": ast_to_obj(node.array), "subscript": ast_to_obj(node.subscript)}
    if isinstance(node, Call):
        return {"type": "Call", "callee": ast_to_obj(node.callee), "args": ast_to_obj(node.args)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(block=ast_from_obj(obj["block"]))
    if t == "Block":
        return Block(statements=ast_from_obj(obj["statements"]))
    if t == "VariableDeclaration":
        return VariableDeclaration(id=ast_from_obj(obj["id"]), expression=ast_from_obj(obj["expression"]))
    if t == "FunctionDeclaration":
        return FunctionDeclaration(
            id=ast_from_obj(obj["id"]),
            parameters=ast_from_obj(obj["parameters"]),
            expression=ast_from_obj(obj["expression"]),
        )
    if t == "Assignment":
        return Assignment(id=ast_from_obj(obj["id"]), expression=ast_from_obj(obj["expression"]))
    if t == "PrintStatement":
        return PrintStatement(expression=ast_from_obj(obj["expression"]))
    if t == "WhileStatement":
        return WhileStatement(expression=ast_from_obj(obj["expression"]), block=ast_from_obj(obj["block"]))
    if t == "Numeral":
        return Numeral(value=obj["value"])
    if t == "BooleanLiteral":
        return BooleanLiteral(value=bool(obj["value"]))
    if t == "Identifier":
        return Identifier(name=obj["name"])
    if t == "UnaryExpression":
        return UnaryExpression(operator=obj["operator"], expression=ast_from_obj(obj["expression"]))
    if t == "BinaryExpression":
        return BinaryExpression(
            operator=obj["operator"],
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "ConditionalExpression":
        return ConditionalExpression(
            test=ast_from_obj(obj["test"]),
            consequent=ast_from_obj(obj["consequent"]),
            alternate=ast_from_obj(obj["alternate"]),
        )
    if t == "ArrayLiteral":
        return ArrayLiteral(elements=ast_from_obj(obj["elements"]))
    if t == "SubscriptExpression":
        return SubscriptExpression(array=ast_from_obj(obj["array"]), subscript=ast_from_obj(obj["subscript"]))
    if t == "Call":
        return Call(callee=ast_from_obj(obj["callee"]), args=ast_from_obj(obj["args"]))

    raise ValueError(f"Unknown AST node type: {t}")
