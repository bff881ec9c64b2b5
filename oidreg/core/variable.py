"""
Variable — An object identifier paired with an optional value.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .identifiers import ObjectIdentifier


@dataclass(frozen=True)
class Variable:
    """Binding of a resolved identifier to its (optional) data. Never mutated."""
    id: ObjectIdentifier
    data: Optional[Any] = None

    def __post_init__(self):
        if not isinstance(self.id, ObjectIdentifier):
            object.__setattr__(self, "id", ObjectIdentifier.coerce(self.id))

    def __str__(self) -> str:
        if self.data is None:
            return str(self.id)
        return f"{self.id} = {self.data}"
