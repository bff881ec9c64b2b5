"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.oidreg/config.yaml)
  3. User config (~/.oidreg/config.yaml)
  4. Defaults
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.yaml"

ENV_PATTERN = "OIDREG_PATTERN"
ENV_SEARCH_PATH = "OIDREG_SEARCH_PATH"
ENV_RESET_DIAGNOSTICS = "OIDREG_RESET_DIAGNOSTICS"

_TRUE_VALUES = ('true', '1', 'yes', 'on')


@dataclass
class CompileConfig:
    """Which definition files the default registry loads."""
    pattern: str = DEFAULT_PATTERN
    search_paths: List[str] = field(default_factory=list)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not self.pattern:
            return "compile.pattern cannot be empty"
        if any(sep in self.pattern for sep in ("/", "\\")) or ".." in self.pattern or os.path.isabs(self.pattern):
            return f"compile.pattern must be a file name pattern, not a path: {self.pattern}"
        return None


@dataclass
class DiagnosticsConfig:
    """How the registry keeps compiler diagnostics."""
    reset_per_compile: bool = False  # False = keep for the registry's lifetime

    def validate(self) -> Optional[str]:
        return None


@dataclass
class Config:
    """Application configuration."""
    compile: CompileConfig = field(default_factory=CompileConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    def validate(self) -> Optional[str]:
        return self.compile.validate() or self.diagnostics.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "compile": {
                "pattern": self.compile.pattern,
                "search_paths": list(self.compile.search_paths),
            },
            "diagnostics": {
                "reset_per_compile": self.diagnostics.reset_per_compile,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        compile_data = data.get("compile", {}) or {}
        diagnostics_data = data.get("diagnostics", {}) or {}

        search_paths = compile_data.get("search_paths") or []
        if isinstance(search_paths, str):
            search_paths = [search_paths]

        return cls(
            compile=CompileConfig(
                pattern=compile_data.get("pattern", DEFAULT_PATTERN),
                search_paths=[str(p) for p in search_paths],
            ),
            diagnostics=DiagnosticsConfig(
                reset_per_compile=_as_bool(diagnostics_data.get("reset_per_compile", False)),
            ),
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment (OIDREG_*)
      2. Project config (.oidreg/config.yaml)
      3. User config (~/.oidreg/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".oidreg"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".oidreg"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._user_config_path = Path(user_config_path) if user_config_path else self.USER_CONFIG_FILE
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get(ENV_PATTERN):
            config_data.setdefault("compile", {})["pattern"] = os.environ[ENV_PATTERN]
        if os.environ.get(ENV_SEARCH_PATH):
            paths = [p for p in os.environ[ENV_SEARCH_PATH].split(os.pathsep) if p]
            config_data.setdefault("compile", {})["search_paths"] = paths
        if os.environ.get(ENV_RESET_DIAGNOSTICS):
            config_data.setdefault("diagnostics", {})["reset_per_compile"] = os.environ[ENV_RESET_DIAGNOSTICS]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: top level must be a mapping")
            return {}
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self._save(self.project_config_path, config)

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self._save(self.user_config_path, config)

    def _save(self, path: Path, config: Config):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)
        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "compile.pattern")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'compile.pattern')"

        section, setting = parts

        if section == "compile":
            if setting == "pattern":
                config.compile.pattern = value
            elif setting == "search_paths":
                config.compile.search_paths = [p for p in value.split(os.pathsep) if p]
            else:
                return f"Unknown compile setting: {setting}. Valid: pattern, search_paths"
        elif section == "diagnostics":
            if setting == "reset_per_compile":
                config.diagnostics.reset_per_compile = _as_bool(value)
            else:
                return f"Unknown diagnostics setting: {setting}. Valid: reset_per_compile"
        else:
            return f"Unknown section: {section}. Valid: compile, diagnostics"

        error = config.validate()
        if error:
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts

        if section == "compile":
            if setting == "pattern":
                return config.compile.pattern
            elif setting == "search_paths":
                return os.pathsep.join(config.compile.search_paths)
        elif section == "diagnostics":
            if setting == "reset_per_compile":
                return str(config.diagnostics.reset_per_compile).lower()

        return None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result


def get_config(project_dir: Optional[Path] = None) -> Config:
    """Get configuration for project."""
    return ConfigManager(project_dir).load()
