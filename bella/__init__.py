# Bella language package
# This package provides a tree-walking interpreter for Bella programs.
from .interpreter import run_program, interpret, Interpreter
from .errors import (
    BellaError, UndeclaredIdentifier, InvalidOperandType, InvalidOperator,
    DivisionByZero, InvalidSubscript, NotAFunction, ArityMismatch,
)

__all__ = [
    'run_program',
    'interpret',
    'Interpreter',
    'BellaError',
    'UndeclaredIdentifier',
    'InvalidOperandType',
    'InvalidOperator',
    'DivisionByZero',
    'InvalidSubscript',
    'NotAFunction',
    'ArityMismatch',
]
