"""
Object Identifier — Immutable numeric path into the namespace.

An ObjectIdentifier is a non-empty sequence of non-negative arcs,
e.g. 1.3.6.1.2.1.2.2 for IF-MIB::ifTable.

Usage:
    oid = ObjectIdentifier.parse("1.3.6.1")
    row = oid.append(5)          # 1.3.6.1.5
    row.to_numerical()           # (1, 3, 6, 1, 5)
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, Union

from .errors import FormatError, InvalidArgumentError


@dataclass(frozen=True, order=True)
class ObjectIdentifier:
    """Immutable, hashable numeric path. Never empty."""
    arcs: Tuple[int, ...]

    def __post_init__(self):
        if self.arcs is None:
            raise InvalidArgumentError("arcs", "arcs cannot be None")
        values = tuple(self.arcs)
        if not values:
            raise InvalidArgumentError("arcs", "an object identifier needs at least one arc")
        for arc in values:
            if isinstance(arc, bool) or not isinstance(arc, int):
                raise InvalidArgumentError("arcs", f"arc must be an integer, got {arc!r}")
            if arc < 0:
                raise InvalidArgumentError("arcs", f"arc cannot be negative: {arc}")
        object.__setattr__(self, "arcs", values)

    @classmethod
    def parse(cls, dotted: str) -> 'ObjectIdentifier':
        """
        Parse dotted decimal form ("1.3.6.1").

        A single leading dot is tolerated (".1.3.6.1").

        Raises:
            InvalidArgumentError: If dotted is None or empty
            FormatError: If any arc is not a non-negative decimal
        """
        if not dotted:
            raise InvalidArgumentError("dotted")
        text = dotted[1:] if dotted.startswith(".") else dotted
        arcs = []
        for part in text.split("."):
            if not (part.isascii() and part.isdigit()):
                raise FormatError("not a dotted decimal object identifier", dotted)
            arcs.append(int(part))
        return cls(tuple(arcs))

    @classmethod
    def coerce(cls, value: Union['ObjectIdentifier', str, Iterable[int]]) -> 'ObjectIdentifier':
        """Accept an identifier, a dotted string, or a sequence of arcs."""
        if isinstance(value, ObjectIdentifier):
            return value
        if value is None:
            raise InvalidArgumentError("numerical", "numerical cannot be None")
        if isinstance(value, str):
            return cls.parse(value)
        return cls(tuple(value))

    def append(self, arc: int) -> 'ObjectIdentifier':
        """Return a new identifier with arc added as the trailing component."""
        return ObjectIdentifier(self.arcs + (arc,))

    def to_numerical(self) -> Tuple[int, ...]:
        return self.arcs

    def starts_with(self, other: 'ObjectIdentifier') -> bool:
        return self.arcs[:len(other.arcs)] == other.arcs

    @property
    def parent(self) -> 'ObjectIdentifier':
        """Identifier with the last arc removed. Roots have no parent."""
        if len(self.arcs) == 1:
            raise ValueError("a root identifier has no parent")
        return ObjectIdentifier(self.arcs[:-1])

    def __len__(self) -> int:
        return len(self.arcs)

    def __iter__(self) -> Iterator[int]:
        return iter(self.arcs)

    def __getitem__(self, index):
        return self.arcs[index]

    def __str__(self) -> str:
        return ".".join(str(arc) for arc in self.arcs)

    def __repr__(self) -> str:
        return f"ObjectIdentifier('{self}')"
