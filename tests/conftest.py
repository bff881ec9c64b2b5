"""
Shared pytest fixtures for the oidreg test suite.

Usage in tests:
    def test_translate(loaded_registry):
        assert loaded_registry.translate("IF-MIB::ifTable")

    def test_orchestration(spy_parser, tmp_path):
        registry = ObjectRegistry(ObjectTree(), spy_parser)
"""

import pytest

from oidreg.core.registry import ObjectRegistry
from oidreg.core.tree import ObjectTree
from tests.factories import DefinitionFactory, SpyParser, standard_modules


@pytest.fixture
def definitions(tmp_path):
    """Empty DefinitionFactory rooted at tmp_path/mibs."""
    return DefinitionFactory(tmp_path)


@pytest.fixture
def tree():
    """ObjectTree with SNMPv2-SMI and IF-MIB imported and refreshed."""
    tree = ObjectTree()
    tree.import_modules(standard_modules())
    tree.refresh()
    return tree


@pytest.fixture
def spy_parser():
    return SpyParser()


@pytest.fixture
def loaded_registry(tree, spy_parser):
    """Registry over the standard tree. The parser is a spy."""
    return ObjectRegistry(tree, spy_parser)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user-level config and OIDREG_* variables out of every test."""
    from oidreg.config import ConfigManager

    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", tmp_path / "home" / ".oidreg" / "config.yaml")
    for name in ("OIDREG_PATTERN", "OIDREG_SEARCH_PATH", "OIDREG_RESET_DIAGNOSTICS"):
        monkeypatch.delenv(name, raising=False)
