"""
Object Tree — Namespace storage consumed by the registry.

DefinitionTree is the contract the registry depends on:
    find(module, name)      -> Node   (ObjectNotFoundError if unknown)
    search(numerical)       -> Node   (ObjectNotFoundError if unknown)
    import_modules(modules)           (stage modules, no reindex)
    refresh()                         (rebuild lookup structures)

ObjectTree is the in-memory implementation shipped with the package.
Imported modules are staged; refresh() rebuilds both indices from the
well-known roots, attaching every definition whose parent is already
known and repeating until a pass makes no progress. Definitions whose
parent never shows up stay pending until a later import supplies it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import InvalidArgumentError, ObjectNotFoundError
from .identifiers import ObjectIdentifier
from .modules import ModuleDefinition, ObjectDefinition

logger = logging.getLogger(__name__)

ROOT_MODULE = "SNMPv2-SMI"

# name -> arc, attached directly under the (unnamed) tree root
WELL_KNOWN_ROOTS = {
    "ccitt": 0,
    "iso": 1,
    "joint-iso-ccitt": 2,
}


@dataclass(eq=False)
class Node:
    """A resolved object in the namespace."""
    module: str
    name: str
    value: int
    numerical: ObjectIdentifier
    parent: Optional['Node'] = None
    children: Dict[int, 'Node'] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Canonical textual form, MODULE::name."""
        return f"{self.module}::{self.name}"

    def get_numerical_form(self) -> ObjectIdentifier:
        return self.numerical

    def __repr__(self) -> str:
        return f"Node({self.text} = {self.numerical})"


class DefinitionTree(ABC):
    """Abstract namespace tree."""

    @abstractmethod
    def find(self, module: str, name: str) -> Node:
        """Look up a node by module and object name."""
        pass

    @abstractmethod
    def search(self, numerical: ObjectIdentifier) -> Node:
        """Look up a node by its exact numeric path."""
        pass

    @abstractmethod
    def import_modules(self, modules: Iterable[ModuleDefinition]) -> None:
        pass

    @abstractmethod
    def refresh(self) -> None:
        """Recompute lookup structures after imports."""
        pass


class ObjectTree(DefinitionTree):
    """In-memory DefinitionTree."""

    def __init__(self):
        self._modules: Dict[str, ModuleDefinition] = {}
        self._by_name: Dict[Tuple[str, str], Node] = {}
        self._by_oid: Dict[ObjectIdentifier, Node] = {}
        self._by_bare_name: Dict[str, List[Node]] = {}
        self._pending: List[Tuple[str, ObjectDefinition]] = []
        self._declared: Dict[str, int] = {}
        self._reset_indices()

    # -------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------

    def find(self, module: str, name: str) -> Node:
        node = self._by_name.get((module, name))
        if node is None:
            raise ObjectNotFoundError(f"{module}::{name}")
        return node

    def search(self, numerical: ObjectIdentifier) -> Node:
        oid = ObjectIdentifier.coerce(numerical)
        node = self._by_oid.get(oid)
        if node is None:
            raise ObjectNotFoundError(str(oid))
        return node

    def import_modules(self, modules: Iterable[ModuleDefinition]) -> None:
        """
        Stage modules for the next refresh().

        A module imported under a name that is already loaded replaces
        the earlier one.
        """
        if modules is None:
            raise InvalidArgumentError("modules", "modules cannot be None")
        for module in modules:
            if module.name in self._modules:
                logger.info(f"Replacing module {module.name}")
            self._modules[module.name] = module

    def refresh(self) -> None:
        self._reset_indices()

        pending = [
            (module.name, obj)
            for module in self._modules.values()
            for obj in module.objects
        ]
        self._declared = {name: 1 for name in WELL_KNOWN_ROOTS}
        for _, obj in pending:
            self._declared[obj.name] = self._declared.get(obj.name, 0) + 1

        progress = True
        while pending and progress:
            progress = False
            remaining = []
            for module_name, obj in pending:
                parent = self._resolve_parent(module_name, obj.parent)
                if parent is None:
                    remaining.append((module_name, obj))
                    continue
                self._attach(module_name, obj, parent)
                progress = True
            pending = remaining

        self._pending = pending
        if pending:
            logger.warning(
                f"{len(pending)} definition(s) have no resolvable parent: "
                + ", ".join(f"{m}::{o.name}" for m, o in pending[:5])
            )
        logger.debug(f"Tree refreshed: {len(self._by_name)} nodes, {len(self._modules)} modules")

    # -------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------

    @property
    def modules(self) -> List[str]:
        return list(self._modules.keys())

    @property
    def pending_count(self) -> int:
        """Definitions left unattached by the last refresh()."""
        return len(self._pending)

    @property
    def root(self) -> Node:
        return self._by_name[(ROOT_MODULE, "iso")]

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, text: str) -> bool:
        module, _, name = text.partition("::")
        return (module, name) in self._by_name

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------

    def _reset_indices(self) -> None:
        self._by_name = {}
        self._by_oid = {}
        self._by_bare_name = {}
        for name, value in WELL_KNOWN_ROOTS.items():
            node = Node(
                module=ROOT_MODULE,
                name=name,
                value=value,
                numerical=ObjectIdentifier((value,)),
            )
            self._index(node)

    def _resolve_parent(self, module_name: str, reference: str) -> Optional[Node]:
        """
        Resolve a parent reference in order:
        explicit MODULE::name, same module, imported modules, unique bare name.
        """
        if "::" in reference:
            module, _, name = reference.partition("::")
            return self._by_name.get((module, name))

        node = self._by_name.get((module_name, reference))
        if node is not None:
            return node

        module = self._modules.get(module_name)
        if module is not None:
            # A local declaration shadows imports even before it is attached
            if module.get(reference) is not None:
                return None
            for imported in module.imports:
                node = self._by_name.get((imported, reference))
                if node is not None:
                    return node

        # Only names declared exactly once anywhere are safe to use bare
        if self._declared.get(reference, 0) != 1:
            return None
        candidates = self._by_bare_name.get(reference, [])
        if len(candidates) == 1:
            return candidates[0]
        return None

    def _attach(self, module_name: str, obj: ObjectDefinition, parent: Node) -> None:
        node = Node(
            module=module_name,
            name=obj.name,
            value=obj.value,
            numerical=parent.numerical.append(obj.value),
            parent=parent,
        )
        existing = parent.children.get(obj.value)
        if existing is None:
            parent.children[obj.value] = node
        elif existing.module != module_name:
            logger.debug(f"{node.text} shares {node.numerical} with {existing.text}")
        self._index(node)

    def _index(self, node: Node) -> None:
        self._by_name[(node.module, node.name)] = node
        # First definition of a numeric path keeps the reverse mapping
        self._by_oid.setdefault(node.numerical, node)
        self._by_bare_name.setdefault(node.name, []).append(node)
