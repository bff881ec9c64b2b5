"""
Object Registry — Translation and compile orchestration over a tree.

The registry owns no namespace data of its own. It is handed a
DefinitionTree and a DefinitionParser and provides:
- Translation between MODULE::name[.index] and numeric paths
- A naming heuristic for spotting tables
- Compiling definition files into the tree, one refresh per call
- Synchronous change notification after every refresh

Usage:
    registry = ObjectRegistry(ObjectTree(), YamlDefinitionParser())
    registry.subscribe(lambda: print("namespace changed"))
    result = registry.compile_folder("mibs", "*.yaml")
    oid = registry.translate("IF-MIB::ifDescr.3")

Not thread-safe: callers serialize compile/import/refresh on an instance.
"""

import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .diagnostics import CompileResult, Diagnostic, DiagnosticLog
from .errors import FormatError, InvalidArgumentError
from .events import ChangeHandler, ChangeNotifier
from .identifiers import ObjectIdentifier
from .modules import ModuleDefinition
from .tree import DefinitionTree
from .variable import Variable
from ..parsing.base import DefinitionParser

logger = logging.getLogger(__name__)

TABLE_SUFFIX = "Table"

NumericalLike = Union[ObjectIdentifier, str, Iterable[int]]


def is_table_name(text: str) -> bool:
    """
    Naming heuristic: does a canonical name end with "Table"?

    This follows the SMI naming convention for conceptual tables. It is
    not a structural check: a table not named *Table is missed and an
    ordinary object named *Table is reported as one.
    """
    return text.endswith(TABLE_SUFFIX)


def _require(value: Any, param: str) -> None:
    if value is None:
        raise InvalidArgumentError(param, f"{param} cannot be None")
    if isinstance(value, (str, Path)) and not str(value):
        raise InvalidArgumentError(param)


def _require_text(value: Any, param: str) -> None:
    _require(value, param)
    if not isinstance(value, str):
        raise InvalidArgumentError(param, f"{param} must be a string, got {type(value).__name__}")


def _check_pattern(pattern: str) -> None:
    """A folder pattern matches file names only; it cannot leave the folder."""
    if any(sep in pattern for sep in ("/", "\\")) or ".." in pattern or os.path.isabs(pattern):
        raise InvalidArgumentError("pattern", f"pattern must be a file name pattern, not a path: {pattern}")


class ObjectRegistry:
    """
    Registry over an injected DefinitionTree.

    Diagnostics from every compile call are appended to `diagnostics`,
    which lives as long as the registry unless the owner resets it (or
    constructs the registry with reset_diagnostics_per_compile=True).
    Each compile call also returns its own CompileResult.
    """

    def __init__(
        self,
        tree: DefinitionTree,
        parser: DefinitionParser,
        diagnostics: Optional[DiagnosticLog] = None,
        reset_diagnostics_per_compile: bool = False,
    ):
        _require(tree, "tree")
        _require(parser, "parser")
        self._tree = tree
        self._parser = parser
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.reset_diagnostics_per_compile = reset_diagnostics_per_compile
        self.notifier = ChangeNotifier()

    @property
    def tree(self) -> DefinitionTree:
        return self._tree

    @property
    def parser(self) -> DefinitionParser:
        return self._parser

    @property
    def diagnostics(self) -> DiagnosticLog:
        return self._diagnostics

    @property
    def errors(self) -> List[Diagnostic]:
        return self._diagnostics.errors

    @property
    def warnings(self) -> List[Diagnostic]:
        return self._diagnostics.warnings

    # -------------------------------------------------------------------
    # Translation
    # -------------------------------------------------------------------

    def translate(self, textual: str) -> ObjectIdentifier:
        """
        Numeric path for MODULE::name or MODULE::name.index.

        Raises:
            InvalidArgumentError: textual is None, empty or not a string
            FormatError: not exactly two non-empty parts around "::"
            ObjectNotFoundError: (from the tree) unknown module/name
        """
        _require_text(textual, "textual")

        content = textual.split("::")
        if len(content) != 2 or not content[0] or not content[1]:
            raise FormatError("textual format must be '<module>::<name>'", textual)

        return self.translate_name(content[0], content[1])

    def translate_name(self, module_name: str, name: str) -> ObjectIdentifier:
        """
        Numeric path for a module and a name with an optional ".index".

        The index is appended as one trailing arc, so "ifDescr.3" gives
        the ifDescr path followed by 3.
        """
        _require_text(module_name, "module_name")
        _require_text(name, "name")

        if "." not in name:
            return self._tree.find(module_name, name).get_numerical_form()

        content = name.split(".")
        if len(content) != 2:
            raise FormatError("name can only contain one dot", name)

        base, suffix = content
        if not base:
            raise FormatError("missing name before dot", name)
        if not (suffix.isascii() and suffix.isdigit()):
            raise FormatError("not a decimal after dot", name)

        oid = self._tree.find(module_name, base).get_numerical_form()
        return oid.append(int(suffix))

    def translate_numerical(self, numerical: NumericalLike) -> str:
        """Canonical MODULE::name for an exact numeric path."""
        _require(numerical, "numerical")
        return self._tree.search(ObjectIdentifier.coerce(numerical)).text

    def is_table_id(self, numerical: NumericalLike) -> bool:
        """Whether the node at numerical is named like a table. See is_table_name()."""
        _require(numerical, "numerical")
        return is_table_name(self.translate_numerical(numerical))

    def validate_table(self, identifier: NumericalLike) -> bool:
        _require(identifier, "identifier")
        return self.is_table_id(ObjectIdentifier.coerce(identifier))

    # -------------------------------------------------------------------
    # Compilation
    # -------------------------------------------------------------------

    def compile(self, file_name: Union[str, Path]) -> CompileResult:
        """
        Compile one definition file, import it, and refresh once.

        Raises:
            InvalidArgumentError: file_name empty or not an existing file;
                the parser is not invoked
        """
        _require(file_name, "file_name")
        if not Path(file_name).is_file():
            raise InvalidArgumentError("file_name", f"file does not exist: {file_name}")

        return self._compile_batch([str(file_name)])

    def compile_files(self, file_names: Iterable[Union[str, Path]]) -> CompileResult:
        """
        Compile several files as one batch.

        Modules from every file are imported together and the registry
        refreshes exactly once, so subscribers hear about the batch once.
        Every file is checked before any is parsed.
        """
        _require(file_names, "file_names")
        if isinstance(file_names, (str, Path)):
            raise InvalidArgumentError("file_names", "file_names must be a collection of file names")

        files = []
        for file_name in file_names:
            _require(file_name, "file_names")
            if not Path(file_name).is_file():
                raise InvalidArgumentError("file_names", f"file does not exist: {file_name}")
            files.append(str(file_name))

        return self._compile_batch(files)

    def compile_folder(self, folder: Union[str, Path], pattern: str) -> CompileResult:
        """
        Compile every file in folder whose name matches the glob pattern.

        Files are compiled in sorted order as a single batch.

        Raises:
            InvalidArgumentError: folder or pattern empty, folder missing,
                or pattern names a path rather than file names
        """
        _require(folder, "folder")
        _require_text(pattern, "pattern")

        return self.compile_files(self._expand_folder(folder, pattern))

    def _expand_folder(self, folder: Union[str, Path], pattern: str) -> List[str]:
        _check_pattern(pattern)
        path = Path(os.path.abspath(folder))
        if not path.is_dir():
            raise InvalidArgumentError("folder", f"folder does not exist: {path}")

        files = sorted(str(p) for p in path.glob(pattern) if p.is_file())
        if not files:
            logger.warning(f"No files in {path} match {pattern}")
        return files

    def _compile_batch(self, files: List[str]) -> CompileResult:
        if self.reset_diagnostics_per_compile:
            self._diagnostics.reset()

        result = CompileResult(files=list(files))
        modules: List[ModuleDefinition] = []
        try:
            for file_name in files:
                logger.debug(f"Compiling {file_name}")
                modules.extend(self._parser.compile(
                    file_name,
                    result.diagnostics.errors,
                    result.diagnostics.warnings,
                ))
        finally:
            self._diagnostics.extend(result.diagnostics)

        self.import_modules(modules)
        result.modules = [module.name for module in modules]
        self.refresh()

        logger.info(
            f"Compiled {len(files)} file(s): {len(modules)} module(s), "
            f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
        return result

    def import_modules(self, modules: Iterable[ModuleDefinition]) -> None:
        """Hand modules to the tree. Does not refresh."""
        _require(modules, "modules")
        self._tree.import_modules(list(modules))

    def refresh(self) -> None:
        """
        Rebuild the tree's indices, then notify every subscriber.

        Subscribers run in registration order on the calling thread. An
        exception raised by a subscriber propagates from here.
        """
        self._tree.refresh()
        self.notifier.notify()

    # -------------------------------------------------------------------
    # Notification
    # -------------------------------------------------------------------

    def subscribe(self, handler: ChangeHandler) -> ChangeHandler:
        """Call handler() after every refresh."""
        return self.notifier.subscribe(handler)

    def unsubscribe(self, handler: ChangeHandler) -> bool:
        return self.notifier.unsubscribe(handler)

    # -------------------------------------------------------------------
    # Variables
    # -------------------------------------------------------------------

    def create_variable(self, textual: str, data: Any = None) -> Variable:
        """Variable bound to the numeric path of textual."""
        return Variable(self.translate(textual), data)
