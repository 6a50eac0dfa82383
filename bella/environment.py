from typing import Any, Dict, Iterable, Optional, Tuple
from bella.errors import UndeclaredIdentifier
from bella.types import Undefined


class Environment:
    """Maps identifiers to values.

    Declarations never touch an existing environment: `extended` and
    `merged` return a new one holding a copy of the bindings. Assignment
    goes through `set`, which updates this object in place so every
    holder of the same environment sees the change.
    """
    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(values) if values else {}

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self.values)

    def lookup(self, name: str) -> Any:
        """Return the bound value, or None when the name is unbound or absent."""
        value = self.values.get(name)
        if isinstance(value, Undefined):
            return None
        return value

    def get(self, name: str) -> Any:
        value = self.lookup(name)
        if value is None:
            raise UndeclaredIdentifier(f"Identifier '{name}' was undeclared")
        return value

    def extended(self, name: str, value: Any) -> 'Environment':
        return self.merged([(name, value)])

    def merged(self, bindings: Iterable[Tuple[str, Any]]) -> 'Environment':
        env = Environment(self.values)
        env.values.update(bindings)
        return env

    def set(self, name: str, value: Any):
        if name not in self.values:
            raise UndeclaredIdentifier(f"cannot assign to undeclared identifier '{name}'")
        self.values[name] = value
