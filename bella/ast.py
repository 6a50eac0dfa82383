"""Abstract Syntax Tree (AST) definitions for the Bella language.

The AST classes defined in this module represent the structure of a
Bella program. Expression nodes evaluate to a single value; statement
nodes thread an (environment, output) pair. The interpreter walks these
nodes; nothing here evaluates itself except the `Program.run` entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Expression(Node):
    pass


@dataclass
class Statement(Node):
    pass


@dataclass
class Numeral(Expression):
    value: Union[int, float]


@dataclass
class BooleanLiteral(Expression):
    value: bool


@dataclass
class Identifier(Expression):
    name: str


@dataclass
class UnaryExpression(Expression):
    operator: str
    expression: Expression


@dataclass
class BinaryExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass
class ConditionalExpression(Expression):
    test: Expression
    consequent: Expression
    alternate: Expression


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]


@dataclass
class SubscriptExpression(Expression):
    array: Expression
    subscript: Expression


@dataclass
class Call(Expression):
    callee: Identifier
    args: List[Expression]


@dataclass
class VariableDeclaration(Statement):
    id: Identifier
    expression: Expression


@dataclass
class FunctionDeclaration(Statement):
    id: Identifier
    parameters: List[Identifier]
    expression: Expression


@dataclass
class Assignment(Statement):
    id: Identifier
    expression: Expression


@dataclass
class PrintStatement(Statement):
    expression: Expression


@dataclass
class Block(Node):
    statements: List[Statement]


@dataclass
class WhileStatement(Statement):
    expression: Expression
    block: Block


@dataclass
class Program(Node):
    block: Block

    def run(self, debug_level: int = 0) -> List[Any]:
        """Execute the program and return the printed values in order."""
        from .interpreter import Interpreter
        return Interpreter(debug_level=debug_level).run(self)
