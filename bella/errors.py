from bella.types import ErrorVal


class BellaError(RuntimeError):
    """Exception type used to propagate Bella runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"BellaError: {err.name}: {err.message}")
        self.err = err


class _KindError(BellaError):
    kind = 'RuntimeError'

    def __init__(self, message: str):
        super().__init__(ErrorVal(self.kind, message))


class UndeclaredIdentifier(_KindError):
    kind = 'UndeclaredIdentifier'


class InvalidOperandType(_KindError):
    kind = 'InvalidOperandType'


class InvalidOperator(_KindError):
    kind = 'InvalidOperator'


class DivisionByZero(_KindError):
    kind = 'DivisionByZero'


class InvalidSubscript(_KindError):
    kind = 'InvalidSubscript'


class NotAFunction(_KindError):
    kind = 'NotAFunction'


class ArityMismatch(_KindError):
    kind = 'ArityMismatch'
