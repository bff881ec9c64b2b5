"""
Module descriptors — What a parser hands to a tree.

A ModuleDefinition is the compiled form of one definition module: its
name, the modules it imports from, and its object assignments. An
assignment names its parent symbolically; the tree turns parents into
numeric paths when it refreshes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ObjectDefinition:
    """
    One object assignment: `name ::= { parent value }`.

    Attributes:
        name: Object name (e.g., "ifTable")
        parent: Parent reference, either "name" or "MODULE::name"
        value: Arc under the parent
        line: Source line, when the parser knows it
    """
    name: str
    parent: str
    value: int
    line: Optional[int] = None


@dataclass
class ModuleDefinition:
    """A compiled definition module."""
    name: str
    objects: List[ObjectDefinition] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    file_name: str = ""

    def get(self, name: str) -> Optional[ObjectDefinition]:
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.name,
            "imports": list(self.imports),
            "objects": [
                {"name": o.name, "parent": o.parent, "id": o.value}
                for o in self.objects
            ],
        }

    def __len__(self) -> int:
        return len(self.objects)
