"""
oidreg — Object identifier registry

Translates between MODULE::name[.index] references and numeric object
identifiers, compiles definition files into an in-memory namespace tree,
and tells subscribers when the namespace changes.

Usage:
    from oidreg import DefaultObjectRegistry

    registry = DefaultObjectRegistry()
    registry.compile_folder("mibs", "*.yaml")
    registry.translate("IF-MIB::ifTable")          # ObjectIdentifier('1.3.6.1.2.1.2.2')
    registry.translate_numerical("1.3.6.1.2.1.2.2") # 'IF-MIB::ifTable'
"""

__version__ = "0.1.0"

# Core layer
from .core.errors import RegistryError, InvalidArgumentError, FormatError, ObjectNotFoundError
from .core.identifiers import ObjectIdentifier
from .core.modules import ModuleDefinition, ObjectDefinition
from .core.diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog, CompileResult
from .core.variable import Variable
from .core.events import ChangeNotifier
from .core.tree import DefinitionTree, ObjectTree, Node
from .core.registry import ObjectRegistry, is_table_name

# Parsing layer
from .parsing import DefinitionParser, YamlDefinitionParser

# Config (stays at root)
from .config import Config, ConfigManager, get_config, CompileConfig, DiagnosticsConfig
from .registry import DefaultObjectRegistry

__all__ = [
    # Core
    'RegistryError', 'InvalidArgumentError', 'FormatError', 'ObjectNotFoundError',
    'ObjectIdentifier',
    'ModuleDefinition', 'ObjectDefinition',
    'Diagnostic', 'DiagnosticKind', 'DiagnosticLog', 'CompileResult',
    'Variable',
    'ChangeNotifier',
    'DefinitionTree', 'ObjectTree', 'Node',
    'ObjectRegistry', 'is_table_name',
    # Parsing
    'DefinitionParser', 'YamlDefinitionParser',
    # Config
    'Config', 'ConfigManager', 'get_config', 'CompileConfig', 'DiagnosticsConfig',
    'DefaultObjectRegistry',
]
