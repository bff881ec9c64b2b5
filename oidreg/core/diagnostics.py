"""
Diagnostics — Errors and warnings produced while compiling definitions.

Parsers append to two plain list sinks (errors, warnings). The registry
keeps a DiagnosticLog for its whole lifetime and also hands each compile
call its own CompileResult, so callers can see what a single call produced
without diffing the long-lived log.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DiagnosticKind(Enum):
    """Severity tag."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single compiler message."""
    kind: DiagnosticKind
    message: str
    file_name: str = ""
    line: Optional[int] = None

    @classmethod
    def error(cls, message: str, file_name: str = "", line: Optional[int] = None) -> 'Diagnostic':
        return cls(DiagnosticKind.ERROR, message, file_name, line)

    @classmethod
    def warning(cls, message: str, file_name: str = "", line: Optional[int] = None) -> 'Diagnostic':
        return cls(DiagnosticKind.WARNING, message, file_name, line)

    @property
    def is_error(self) -> bool:
        return self.kind == DiagnosticKind.ERROR

    def __str__(self) -> str:
        location = self.file_name
        if self.line is not None:
            location = f"{location}:{self.line}"
        prefix = f"{location}: " if location else ""
        return f"{prefix}{self.kind.value}: {self.message}"


class DiagnosticLog:
    """
    Append-only collector of compiler diagnostics.

    `errors` and `warnings` are the sinks handed to a parser. Nothing here
    removes entries except an explicit reset() by the owner.
    """

    def __init__(self):
        self.errors: List[Diagnostic] = []
        self.warnings: List[Diagnostic] = []

    def extend(self, other: 'DiagnosticLog') -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def reset(self) -> None:
        self.errors.clear()
        self.warnings.clear()

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def all(self) -> List[Diagnostic]:
        """Errors first, then warnings, each in arrival order."""
        return list(self.errors) + list(self.warnings)

    def __len__(self) -> int:
        return len(self.errors) + len(self.warnings)

    def __bool__(self) -> bool:
        return len(self) > 0


@dataclass
class CompileResult:
    """Outcome of one compile / compile_files / compile_folder call."""
    files: List[str] = field(default_factory=list)
    modules: List[str] = field(default_factory=list)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def errors(self) -> List[Diagnostic]:
        return self.diagnostics.errors

    @property
    def warnings(self) -> List[Diagnostic]:
        return self.diagnostics.warnings

    @property
    def succeeded(self) -> bool:
        """True when no error diagnostics were produced."""
        return not self.diagnostics.has_errors
