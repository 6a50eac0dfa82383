"""Interpreter for the Bella language.

This module walks a Bella AST. Expressions are evaluated against an
environment and produce a single value; statements take an
(environment, output) pair and return the next pair. `Interpreter.run`
seeds the initial environment with the math library and returns the
sequence of printed values.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple
import math

from .std.math import populate_math_environment
from .types import (
    UNDEFINED, UserFunction, is_number, is_truthy, type_name, to_string,
)
from .ast import (
    Program, Block, VariableDeclaration, FunctionDeclaration, Assignment,
    PrintStatement, WhileStatement, Numeral, BooleanLiteral, Identifier,
    UnaryExpression, BinaryExpression, ConditionalExpression, ArrayLiteral,
    SubscriptExpression, Call, Node,
)
from .errors import (
    UndeclaredIdentifier, InvalidOperandType, InvalidOperator,
    DivisionByZero, InvalidSubscript, NotAFunction, ArityMismatch,
)
from .environment import Environment
from .builtin_function import BuiltinFunction

State = Tuple[Environment, List[Any]]

ARITHMETIC_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': lambda a, b: a / b,
    '%': math.fmod,
}

ORDERING_OPS: Dict[str, Callable[[Any, Any], bool]] = {
    '<': lambda a, b: a < b,
    '<=': lambda a, b: a <= b,
    '>': lambda a, b: a > b,
    '>=': lambda a, b: a >= b,
}


class Interpreter:
    """Core interpreter that executes a Bella AST."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 natives: Optional[Dict[str, Any]] = None):
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.runs = 0
        self.natives: Dict[str, Any] = {}
        for name, fn in (natives or {}).items():
            if not isinstance(fn, BuiltinFunction):
                # plain callables take the evaluated argument list
                fn = BuiltinFunction(name, None, fn)
            self.natives[name] = fn

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def initial_environment(self) -> Environment:
        env = populate_math_environment()
        return env.merged(self.natives.items())

    # Public API
    def run(self, program: Program) -> List[Any]:
        if self.debug_level > 0 and self.debug_file:
            # the first run truncates the trace, later runs append to it
            self.debug_fp = open(self.debug_file, 'a' if self.runs else 'w')
        self.runs += 1
        try:
            if self.debug_level >= 1:
                self.debug('run program')
            _, output = self.execute(program.block, (self.initial_environment(), []))
            if self.debug_level >= 1:
                self.debug(f"finished with {len(output)} printed value(s)")
            return output
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Node], state: State) -> State:
        for stmt in statements:
            state = self.execute(stmt, state)
        return state

    def execute(self, node: Node, state: State) -> State:
        env, output = state
        if isinstance(node, VariableDeclaration):
            value = self.evaluate(node.expression, env)
            if self.debug_level >= 2:
                self.debug(f"declare {node.id.name} = {to_string(value)}")
            return env.extended(node.id.name, value), output
        if isinstance(node, FunctionDeclaration):
            func_value = UserFunction(node.parameters, node.expression)
            if self.debug_level >= 2:
                self.debug(f"define function {node.id.name}{func_value!r}")
            return env.extended(node.id.name, func_value), output
        if isinstance(node, Assignment):
            value = self.evaluate(node.expression, env)
            env.set(node.id.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.id.name} = {to_string(value)}")
            return env, output
        if isinstance(node, PrintStatement):
            value = self.evaluate(node.expression, env)
            if self.debug_level >= 2:
                self.debug(f"print {to_string(value)}")
            return env, output + [value]
        if isinstance(node, WhileStatement):
            # the condition always sees the environment the loop started with
            while True:
                cond = self.evaluate(node.expression, env)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)}")
                if not is_truthy(cond):
                    break
                state = self.execute(node.block, state)
            return state
        if isinstance(node, Block):
            return self.execute_block(node.statements, state)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Numeral):
            # every Bella number is a double
            return float(node.value)
        if isinstance(node, BooleanLiteral):
            return node.value
        if isinstance(node, Identifier):
            return env.get(node.name)
        if isinstance(node, UnaryExpression):
            operand = self.evaluate(node.expression, env)
            return self.apply_unary_op(node.operator, operand)
        if isinstance(node, BinaryExpression):
            # both operands are always evaluated; && and || do not short-circuit
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            if self.debug_level >= 3:
                self.debug(f"binary {to_string(left)} {node.operator} {to_string(right)}")
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, ConditionalExpression):
            if is_truthy(self.evaluate(node.test, env)):
                return self.evaluate(node.consequent, env)
            return self.evaluate(node.alternate, env)
        if isinstance(node, ArrayLiteral):
            return [self.evaluate(el, env) for el in node.elements]
        if isinstance(node, SubscriptExpression):
            target = self.evaluate(node.array, env)
            index = self.evaluate(node.subscript, env)
            if not isinstance(target, list) or not is_number(index):
                raise InvalidSubscript(
                    f'Invalid subscript expression: cannot index {type_name(target)} with {type_name(index)}')
            return self.read_element(target, index)
        if isinstance(node, Call):
            func = env.lookup(node.callee.name)
            args = [self.evaluate(arg, env) for arg in node.args]
            if func is None:
                raise UndeclaredIdentifier(f"Identifier '{node.callee.name}' was undeclared")
            return self.call_function(node.callee.name, func, args, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def read_element(self, items: List[Any], index: Any) -> Any:
        # non-integral and out-of-range reads give undefined, never wrap around
        if isinstance(index, float):
            if not index.is_integer():
                return UNDEFINED
            index = int(index)
        if 0 <= index < len(items):
            return items[index]
        return UNDEFINED

    def call_function(self, name: str, func: Any, args: List[Any], env: Environment) -> Any:
        if self.debug_level >= 2:
            self.debug(f"call {name}({', '.join(to_string(a) for a in args)})")
        if isinstance(func, BuiltinFunction):
            # natives take whatever arguments they are given
            return func.fn(args)
        if isinstance(func, UserFunction):
            if len(args) != len(func.parameters):
                raise ArityMismatch(
                    f"{name} expects {len(func.parameters)} arguments, got {len(args)}")
            # the body runs in a copy of the caller's environment plus the parameters
            call_env = env.merged(zip(func.parameter_names, args))
            return self.evaluate(func.body, call_env)
        raise NotAFunction(f"'{name}' is not a function, got {type_name(func)}")

    def apply_unary_op(self, op: str, operand: Any) -> Any:
        if op == '-':
            if not is_number(operand):
                raise InvalidOperandType(f"Invalid operand type for '-' operator: {type_name(operand)}")
            return -operand
        if op == '!':
            return not is_truthy(operand)
        raise InvalidOperator(f"Invalid unary operator '{op}'")

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op in ARITHMETIC_OPS or op in ORDERING_OPS:
            if not (is_number(a) and is_number(b)):
                raise InvalidOperandType(
                    f"Invalid operand types for '{op}' operator: {type_name(a)} and {type_name(b)}")
            if op in ('/', '%') and b == 0:
                raise DivisionByZero(f"Division by zero in '{op}'")
            if op in ARITHMETIC_OPS:
                return ARITHMETIC_OPS[op](a, b)
            return ORDERING_OPS[op](a, b)
        if op in ('==', '!='):
            if type_name(a) != type_name(b):
                raise InvalidOperandType(
                    f"Invalid operand types for '{op}' operator: {type_name(a)} and {type_name(b)}")
            eq = self.equal_values(a, b)
            return eq if op == '==' else not eq
        if op == '&&':
            return is_truthy(a) and is_truthy(b)
        if op == '||':
            return is_truthy(a) or is_truthy(b)
        raise InvalidOperator(f"Invalid binary operator '{op}'")

    def equal_values(self, a: Any, b: Any) -> bool:
        # scalars compare by value, arrays and functions by identity
        if isinstance(a, (list, BuiltinFunction, UserFunction)):
            return a is b
        return a == b


def run_program(program: Program, debug_level: int = 0) -> List[Any]:
    """Convenience function to run a Bella program and return its output."""
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program)


def interpret(program: Program) -> List[Any]:
    return program.run()
