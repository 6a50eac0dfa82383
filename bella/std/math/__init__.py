from .basic_math import BasicMath
from bella.builtin_function import BuiltinFunction
from bella.errors import InvalidOperandType
from bella.environment import Environment
from bella.types import is_number, type_name
from typing import List, Any
import math


def populate_math_environment() -> Environment:
    basic_math = BasicMath()
    math_env = Environment()

    def numeric_args(name: str, args: List[Any]) -> List[Any]:
        for arg in args:
            if not is_number(arg):
                raise InvalidOperandType(f'{name} expects numeric arguments, got {type_name(arg)}')
        return args

    def first_arg(name: str, args: List[Any]) -> Any:
        # extra arguments are ignored and a missing one reads as NaN
        if not args:
            return math.nan
        return numeric_args(name, args[:1])[0]

    def std_sqrt(args: List[Any]) -> Any:
        return basic_math.sqrt(first_arg('sqrt', args))

    def std_sin(args: List[Any]) -> Any:
        return basic_math.sin(first_arg('sin', args))

    def std_cos(args: List[Any]) -> Any:
        return basic_math.cos(first_arg('cos', args))

    def std_ln(args: List[Any]) -> Any:
        return basic_math.ln(first_arg('ln', args))

    def std_exp(args: List[Any]) -> Any:
        return basic_math.exp(first_arg('exp', args))

    def std_hypot(args: List[Any]) -> Any:
        return basic_math.hypot(*numeric_args('hypot', args))

    math_env.values['pi'] = basic_math.pi
    math_env.values['sqrt'] = BuiltinFunction('sqrt', 1, std_sqrt)
    math_env.values['sin'] = BuiltinFunction('sin', 1, std_sin)
    math_env.values['cos'] = BuiltinFunction('cos', 1, std_cos)
    math_env.values['ln'] = BuiltinFunction('ln', 1, std_ln)
    math_env.values['exp'] = BuiltinFunction('exp', 1, std_exp)
    math_env.values['hypot'] = BuiltinFunction('hypot', None, std_hypot)
    return math_env
