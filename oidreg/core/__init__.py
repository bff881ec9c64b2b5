"""
Core — Identifiers, namespace tree contract, and the registry

Contains:
- Errors: InvalidArgumentError / FormatError / ObjectNotFoundError
- Identifiers: immutable numeric paths
- Modules: compiled module descriptors handed from parser to tree
- Diagnostics: compiler errors/warnings and per-call results
- Events: synchronous change notification
- Tree: DefinitionTree contract and the in-memory ObjectTree
- Registry: translation and compile orchestration
"""

from .errors import RegistryError, InvalidArgumentError, FormatError, ObjectNotFoundError
from .identifiers import ObjectIdentifier
from .modules import ModuleDefinition, ObjectDefinition
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog, CompileResult
from .variable import Variable
from .events import ChangeNotifier, ChangeHandler
from .tree import DefinitionTree, ObjectTree, Node, ROOT_MODULE, WELL_KNOWN_ROOTS
from .registry import ObjectRegistry, is_table_name, TABLE_SUFFIX

__all__ = [
    # Errors
    "RegistryError", "InvalidArgumentError", "FormatError", "ObjectNotFoundError",
    # Identifiers
    "ObjectIdentifier",
    # Modules
    "ModuleDefinition", "ObjectDefinition",
    # Diagnostics
    "Diagnostic", "DiagnosticKind", "DiagnosticLog", "CompileResult",
    # Variables
    "Variable",
    # Events
    "ChangeNotifier", "ChangeHandler",
    # Tree
    "DefinitionTree", "ObjectTree", "Node", "ROOT_MODULE", "WELL_KNOWN_ROOTS",
    # Registry
    "ObjectRegistry", "is_table_name", "TABLE_SUFFIX",
]
