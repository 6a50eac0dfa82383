from dataclasses import dataclass
from typing import Any, Optional


@dataclass(eq=False)
class BuiltinFunction:
    name: str
    arity: Optional[int]
    fn: Any

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
