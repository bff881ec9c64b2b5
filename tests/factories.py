"""
Test Data Factory — Definition files and collaborator doubles for oidreg tests.

Writes YAML definition modules into tmp_path so tests exercise the real
parser and tree, and provides a SpyParser for orchestration tests that
must observe (or rule out) parser calls.

Usage:
    def test_something(definitions):
        definitions.write_standard()
        registry = definitions.create_registry()
        registry.compile_folder(definitions.root, "*.yaml")
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import yaml

from oidreg.core.diagnostics import Diagnostic
from oidreg.core.modules import ModuleDefinition, ObjectDefinition
from oidreg.core.registry import ObjectRegistry
from oidreg.core.tree import ObjectTree
from oidreg.parsing.base import DefinitionParser
from oidreg.parsing.yaml_parser import YamlDefinitionParser


# (name, parent, id)
SMI_OBJECTS: List[Tuple[str, str, int]] = [
    ("org", "iso", 3),
    ("dod", "org", 6),
    ("internet", "dod", 1),
    ("mgmt", "internet", 2),
    ("mib-2", "mgmt", 1),
    ("system", "mib-2", 1),
    ("enterprises", "internet", 4),
]

IF_MIB_OBJECTS: List[Tuple[str, str, int]] = [
    ("interfaces", "mib-2", 2),
    ("ifNumber", "interfaces", 1),
    ("ifTable", "interfaces", 2),
    ("ifEntry", "ifTable", 1),
    ("ifIndex", "ifEntry", 1),
    ("ifDescr", "ifEntry", 2),
]

# Expected numeric paths for the standard modules
EXPECTED = {
    "SNMPv2-SMI::mib-2": (1, 3, 6, 1, 2, 1),
    "IF-MIB::interfaces": (1, 3, 6, 1, 2, 1, 2),
    "IF-MIB::ifNumber": (1, 3, 6, 1, 2, 1, 2, 1),
    "IF-MIB::ifTable": (1, 3, 6, 1, 2, 1, 2, 2),
    "IF-MIB::ifEntry": (1, 3, 6, 1, 2, 1, 2, 2, 1),
    "IF-MIB::ifDescr": (1, 3, 6, 1, 2, 1, 2, 2, 1, 2),
}


def module_from_tuples(
    name: str,
    objects: Sequence[Tuple[str, str, int]],
    imports: Optional[List[str]] = None,
) -> ModuleDefinition:
    return ModuleDefinition(
        name=name,
        objects=[ObjectDefinition(n, p, v) for n, p, v in objects],
        imports=list(imports or []),
    )


def standard_modules() -> List[ModuleDefinition]:
    return [
        module_from_tuples("SNMPv2-SMI", SMI_OBJECTS),
        module_from_tuples("IF-MIB", IF_MIB_OBJECTS, imports=["SNMPv2-SMI"]),
    ]


class SpyParser(DefinitionParser):
    """
    DefinitionParser double that records every call.

    Returns the modules registered for a file name (by base name), and
    appends any diagnostics registered for it.
    """

    def __init__(self):
        self.calls: List[str] = []
        self._modules: Dict[str, List[ModuleDefinition]] = {}
        self._errors: Dict[str, List[str]] = {}
        self._warnings: Dict[str, List[str]] = {}
        self._failures: Dict[str, Exception] = {}

    def returns(self, file_name: str, *modules: ModuleDefinition) -> 'SpyParser':
        self._modules[Path(file_name).name] = list(modules)
        return self

    def reports(self, file_name: str, errors: Sequence[str] = (), warnings: Sequence[str] = ()) -> 'SpyParser':
        self._errors[Path(file_name).name] = list(errors)
        self._warnings[Path(file_name).name] = list(warnings)
        return self

    def fails(self, file_name: str, exc: Exception) -> 'SpyParser':
        self._failures[Path(file_name).name] = exc
        return self

    def compile(self, file_name, errors, warnings):
        self.calls.append(file_name)
        key = Path(file_name).name
        for message in self._errors.get(key, []):
            errors.append(Diagnostic.error(message, file_name))
        for message in self._warnings.get(key, []):
            warnings.append(Diagnostic.warning(message, file_name))
        if key in self._failures:
            raise self._failures[key]
        return list(self._modules.get(key, []))


class DefinitionFactory:
    """Writes definition files under tmp_path/mibs."""

    def __init__(self, tmp_path: Path):
        self.tmp_path = Path(tmp_path)
        self.root = self.tmp_path / "mibs"
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, file_name: str, content: str) -> Path:
        path = self.root / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_module(
        self,
        module: str,
        objects: Sequence[Tuple[str, str, int]],
        imports: Optional[List[str]] = None,
        file_name: Optional[str] = None,
    ) -> Path:
        data = {
            "module": module,
            "imports": list(imports or []),
            "objects": [{"name": n, "parent": p, "id": v} for n, p, v in objects],
        }
        content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        return self.write(file_name or f"{module.lower()}.yaml", content)

    def write_standard(self) -> List[Path]:
        """Write SNMPv2-SMI and IF-MIB, one file each."""
        return [
            self.write_module("SNMPv2-SMI", SMI_OBJECTS),
            self.write_module("IF-MIB", IF_MIB_OBJECTS, imports=["SNMPv2-SMI"]),
        ]

    def create_registry(self, **kwargs) -> ObjectRegistry:
        return ObjectRegistry(ObjectTree(), YamlDefinitionParser(), **kwargs)
