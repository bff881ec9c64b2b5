"""
Definition parser contract.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.diagnostics import Diagnostic
from ..core.modules import ModuleDefinition


class DefinitionParser(ABC):
    """Compiles one definition file into module descriptors."""

    @abstractmethod
    def compile(
        self,
        file_name: str,
        errors: List[Diagnostic],
        warnings: List[Diagnostic],
    ) -> List[ModuleDefinition]:
        """
        Compile a definition file.

        Problems in the file's content are appended to the sinks rather
        than raised. Only hard failures (e.g. the file cannot be read)
        raise.

        Args:
            file_name: Path of the file to compile
            errors: Sink for error diagnostics
            warnings: Sink for warning diagnostics

        Returns:
            Modules defined by the file, possibly empty
        """
        pass
