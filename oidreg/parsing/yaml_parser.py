"""
YAML Definition Parser — Module descriptions written as YAML documents.

Each YAML document in a file describes one module:

    module: IF-MIB
    imports: [SNMPv2-SMI, SNMPv2-MIB]
    objects:
      - name: interfaces
        parent: mib-2
        id: 2
      - name: ifTable
        parent: interfaces
        id: 2

Problems in a document become diagnostics carrying file and line. A bad
object is skipped; a bad document is skipped; the rest of the file still
compiles.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ..core.diagnostics import Diagnostic
from ..core.modules import ModuleDefinition, ObjectDefinition
from .base import DefinitionParser

logger = logging.getLogger(__name__)

_LINE_KEY = "__line__"
_MODULE_KEYS = {"module", "imports", "objects", _LINE_KEY}
_OBJECT_KEYS = {"name", "parent", "id", "description", _LINE_KEY}


class _LineLoader(yaml.SafeLoader):
    """SafeLoader that records the 1-based source line of every mapping."""

    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)
        mapping[_LINE_KEY] = node.start_mark.line + 1
        return mapping


class YamlDefinitionParser(DefinitionParser):
    """DefinitionParser for YAML module descriptions."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def compile(
        self,
        file_name: str,
        errors: List[Diagnostic],
        warnings: List[Diagnostic],
    ) -> List[ModuleDefinition]:
        content = Path(file_name).read_text(encoding=self.encoding)
        modules = self.compile_text(content, errors, warnings, file_name=str(file_name))
        logger.debug(f"Compiled {file_name}: {len(modules)} module(s)")
        return modules

    def compile_text(
        self,
        content: str,
        errors: List[Diagnostic],
        warnings: List[Diagnostic],
        file_name: str = "",
    ) -> List[ModuleDefinition]:
        """Compile definitions from a string. Same rules as compile()."""
        modules: List[ModuleDefinition] = []
        seen = set()

        try:
            for document in yaml.load_all(content, Loader=_LineLoader):
                if document is None:
                    continue
                module = self._build_module(document, errors, warnings, file_name)
                if module is None:
                    continue
                if module.name in seen:
                    warnings.append(Diagnostic.warning(
                        f"module {module.name} defined more than once; keeping the last definition",
                        file_name, document.get(_LINE_KEY),
                    ))
                    modules = [m for m in modules if m.name != module.name]
                seen.add(module.name)
                modules.append(module)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line = mark.line + 1 if mark is not None else None
            problem = getattr(e, "problem", None) or str(e)
            errors.append(Diagnostic.error(f"invalid YAML: {problem}", file_name, line))

        if not modules and not errors:
            warnings.append(Diagnostic.warning("no module definitions found", file_name))
        return modules

    def _build_module(
        self,
        document: Any,
        errors: List[Diagnostic],
        warnings: List[Diagnostic],
        file_name: str,
    ) -> Optional[ModuleDefinition]:
        if not isinstance(document, dict):
            errors.append(Diagnostic.error("a module document must be a mapping", file_name))
            return None

        line = document.get(_LINE_KEY)
        name = document.get("module")
        if not isinstance(name, str) or not name.strip():
            errors.append(Diagnostic.error("missing or empty 'module' name", file_name, line))
            return None
        name = name.strip()
        if "::" in name or "." in name:
            errors.append(Diagnostic.error(f"module name {name!r} cannot contain '::' or '.'", file_name, line))
            return None

        for key in sorted(set(document) - _MODULE_KEYS, key=str):
            warnings.append(Diagnostic.warning(f"{name}: unknown key {key!r} ignored", file_name, line))

        imports = document.get("imports") or []
        if not isinstance(imports, list) or not all(isinstance(i, str) for i in imports):
            warnings.append(Diagnostic.warning(f"{name}: 'imports' must be a list of module names", file_name, line))
            imports = []

        raw_objects = document.get("objects") or []
        if not isinstance(raw_objects, list):
            errors.append(Diagnostic.error(f"{name}: 'objects' must be a list", file_name, line))
            return None

        module = ModuleDefinition(name=name, imports=list(imports), file_name=file_name)
        names = set()
        for raw in raw_objects:
            obj = self._build_object(name, raw, errors, warnings, file_name, line)
            if obj is None:
                continue
            if obj.name in names:
                warnings.append(Diagnostic.warning(
                    f"{name}: duplicate object {obj.name!r} ignored", file_name, obj.line,
                ))
                continue
            names.add(obj.name)
            module.objects.append(obj)
        return module

    def _build_object(
        self,
        module_name: str,
        raw: Any,
        errors: List[Diagnostic],
        warnings: List[Diagnostic],
        file_name: str,
        module_line: Optional[int],
    ) -> Optional[ObjectDefinition]:
        if not isinstance(raw, dict):
            errors.append(Diagnostic.error(f"{module_name}: object entry must be a mapping", file_name, module_line))
            return None

        line = raw.get(_LINE_KEY)
        missing = [key for key in ("name", "parent", "id") if key not in raw]
        if missing:
            errors.append(Diagnostic.error(
                f"{module_name}: object missing {', '.join(missing)}", file_name, line,
            ))
            return None

        obj_name, parent, value = raw["name"], raw["parent"], raw["id"]
        if not isinstance(obj_name, str) or not obj_name or "." in obj_name or "::" in obj_name:
            errors.append(Diagnostic.error(f"{module_name}: invalid object name {obj_name!r}", file_name, line))
            return None
        if not isinstance(parent, str) or not parent:
            errors.append(Diagnostic.error(f"{module_name}::{obj_name}: invalid parent {parent!r}", file_name, line))
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            errors.append(Diagnostic.error(
                f"{module_name}::{obj_name}: id must be a non-negative integer, got {value!r}", file_name, line,
            ))
            return None

        for key in sorted(set(raw) - _OBJECT_KEYS, key=str):
            warnings.append(Diagnostic.warning(f"{module_name}::{obj_name}: unknown key {key!r} ignored", file_name, line))

        return ObjectDefinition(name=obj_name, parent=parent, value=value, line=line)


def dump_module(module: ModuleDefinition) -> str:
    """Render a module back to the YAML form this parser reads."""
    return yaml.dump(module.to_dict(), default_flow_style=False, sort_keys=False)
