"""
Errors — Exception hierarchy for the registry and its collaborators.

Three failure families are kept apart so callers can tell them apart:
- InvalidArgumentError: bad input caught before any I/O or lookup
- FormatError: a textual reference that does not follow module::name[.index]
- ObjectNotFoundError: a lookup the tree could not satisfy
"""

from typing import Optional


class RegistryError(Exception):
    """Base class for all oidreg errors."""


class InvalidArgumentError(RegistryError, ValueError):
    """
    Raised when an argument is empty, None, or names a missing file/folder.

    Attributes:
        param: Name of the offending parameter
    """

    def __init__(self, param: str, message: Optional[str] = None):
        self.param = param
        self.message = message or f"{param} cannot be empty"
        super().__init__(self.message)


class FormatError(RegistryError, ValueError):
    """Raised for a malformed textual reference."""

    def __init__(self, message: str, textual: str = ""):
        self.textual = textual
        self.message = message
        super().__init__(f"{message}: {textual!r}" if textual else message)


class ObjectNotFoundError(RegistryError, LookupError):
    """Raised by a tree when a module/name or numeric path is unknown."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"object not found: {key}")
