"""
Parsing module — Definition files to module descriptors.

- DefinitionParser: the contract the registry compiles through
- YamlDefinitionParser: module descriptions written as YAML

Usage:
    from oidreg.parsing import YamlDefinitionParser

    errors, warnings = [], []
    modules = YamlDefinitionParser().compile("mibs/if-mib.yaml", errors, warnings)
"""

from .base import DefinitionParser
from .yaml_parser import YamlDefinitionParser, dump_module

__all__ = [
    'DefinitionParser',
    'YamlDefinitionParser',
    'dump_module',
]
