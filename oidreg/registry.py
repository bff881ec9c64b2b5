"""
Default registry — ObjectRegistry wired to the bundled collaborators.

Uses ObjectTree for storage, YamlDefinitionParser for definition files,
and the layered configuration for search paths and diagnostics policy.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .config import Config, get_config
from .core.diagnostics import CompileResult, DiagnosticLog
from .core.registry import ObjectRegistry
from .core.tree import DefinitionTree, ObjectTree
from .parsing.base import DefinitionParser
from .parsing.yaml_parser import YamlDefinitionParser

logger = logging.getLogger(__name__)


class DefaultObjectRegistry(ObjectRegistry):
    """
    Registry that loads the configured search paths on construction.

    Every file found under every search path is compiled as one batch,
    so construction refreshes (and notifies) at most once.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        tree: Optional[DefinitionTree] = None,
        parser: Optional[DefinitionParser] = None,
        diagnostics: Optional[DiagnosticLog] = None,
        project_dir: Optional[Path] = None,
    ):
        self.config = config if config is not None else get_config(project_dir)
        error = self.config.validate()
        if error:
            raise ValueError(f"Invalid configuration: {error}")

        super().__init__(
            tree if tree is not None else ObjectTree(),
            parser if parser is not None else YamlDefinitionParser(),
            diagnostics=diagnostics,
            reset_diagnostics_per_compile=self.config.diagnostics.reset_per_compile,
        )

        if self.config.compile.search_paths:
            self.load_search_paths()

    def load_search_paths(self) -> CompileResult:
        """Compile every configured search path as a single batch."""
        files: List[str] = []
        for folder in self.config.compile.search_paths:
            if not Path(folder).is_dir():
                logger.warning(f"Search path {folder} does not exist, skipping")
                continue
            files.extend(self._expand_folder(folder, self.config.compile.pattern))

        logger.info(f"Loading {len(files)} definition file(s) from {len(self.config.compile.search_paths)} search path(s)")
        return self.compile_files(files)
