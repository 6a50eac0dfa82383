"""Runtime value model for Bella.

Bella values are plain Python objects wherever possible: numbers are
`int`/`float`, booleans are `bool` and arrays are `list`. Functions use
the records defined here (`UserFunction`) and in `builtin_function`
(`BuiltinFunction`). The helpers in this module classify values, apply
the truthiness rule and render values for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List
import math

from .builtin_function import BuiltinFunction


class Undefined:
    """Marker for an absent value (an out-of-range subscript read)."""
    def __repr__(self) -> str:
        return 'undefined'


UNDEFINED = Undefined()


@dataclass
class ErrorVal:
    """Payload of a Bella runtime error.

    `name` is the failure kind (e.g. 'DivisionByZero') and `message`
    the human readable detail.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


@dataclass(eq=False)
class UserFunction:
    """A user-defined function: parameter identifiers plus a body expression.

    No environment is captured. The body is evaluated against the
    caller's environment extended with the parameter bindings, so two
    function values are only equal when they are the same object.
    """
    parameters: List[Any]
    body: Any

    @property
    def parameter_names(self) -> List[str]:
        return [p.name for p in self.parameters]

    def __repr__(self) -> str:
        return f"<function ({', '.join(self.parameter_names)})>"


def is_number(value: Any) -> bool:
    # bool is a subclass of int but is its own kind in Bella
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_function(value: Any) -> bool:
    return isinstance(value, (BuiltinFunction, UserFunction))


def type_name(value: Any) -> str:
    """Return the Bella kind name of a runtime value."""
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, list):
        return 'array'
    if is_function(value):
        return 'function'
    if isinstance(value, Undefined):
        return 'undefined'
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if is_number(value):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, Undefined):
        return False
    # arrays (even empty ones) and functions are truthy
    return True


def to_string(value: Any) -> str:
    """Render a value the way the command line prints it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, list):
        return '[' + ', '.join(to_string(item) for item in value) + ']'
    if isinstance(value, Undefined):
        return 'undefined'
    return repr(value)
