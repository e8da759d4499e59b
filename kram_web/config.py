"""
Configuration — Centralized output settings

Config hierarchy (highest to lowest priority):
  1. Environment variables (KRAM_*)
  2. Project config (.kram/config.yaml)
  3. User config (~/.kram/config.yaml)
  4. Defaults

Defaults reproduce the canonical artifact text expected by downstream
consumers; overrides only change element names and runtime keys, never
artifact file names.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from .errors import ConfigError


logger = logging.getLogger(__name__)

DEFAULT_SCENE_ELEMENT = "kram-scene"
DEFAULT_STORE_ROOT_KEY = "root"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Custom elements must contain a hyphen and start with a lowercase letter
_CUSTOM_ELEMENT = re.compile(r'^[a-z][a-z0-9._]*-[a-z0-9._-]*$')
_JS_IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


@dataclass
class OutputConfig:
    """Settings that shape generated artifact text."""
    scene_element: str = DEFAULT_SCENE_ELEMENT   # wrapper for markup scenes
    store_root_key: str = DEFAULT_STORE_ROOT_KEY  # top-level store key
    announce_load: bool = True                   # console.log on module load
    svg_namespace: str = SVG_NAMESPACE

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not isinstance(self.scene_element, str) or not _CUSTOM_ELEMENT.match(self.scene_element):
            return (
                f"Invalid scene element '{self.scene_element}'. "
                "Use a custom element name such as 'kram-scene'"
            )
        if not isinstance(self.store_root_key, str) or not _JS_IDENTIFIER.match(self.store_root_key):
            return f"Invalid store root key '{self.store_root_key}'. Use a plain identifier"
        if not isinstance(self.svg_namespace, str) or not self.svg_namespace:
            return "SVG namespace must be a non-empty string"
        return None


@dataclass
class Config:
    """Application configuration."""
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "output": {
                "scene_element": self.output.scene_element,
                "store_root_key": self.output.store_root_key,
                "announce_load": self.output.announce_load,
                "svg_namespace": self.output.svg_namespace,
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        output_data = data.get("output", {}) or {}

        return cls(
            output=OutputConfig(
                scene_element=output_data.get("scene_element", DEFAULT_SCENE_ELEMENT),
                store_root_key=output_data.get("store_root_key", DEFAULT_STORE_ROOT_KEY),
                announce_load=_as_bool(output_data.get("announce_load", True)),
                svg_namespace=output_data.get("svg_namespace", SVG_NAMESPACE),
            )
        )

    def validate(self) -> Optional[str]:
        return self.output.validate()


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment variables
      2. Project config (.kram/config.yaml)
      3. User config (~/.kram/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".kram"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".kram"
    PROJECT_CONFIG_FILE = "config.yaml"

    ENV_OVERRIDES = {
        "KRAM_SCENE_ELEMENT": "scene_element",
        "KRAM_STORE_ROOT_KEY": "store_root_key",
        "KRAM_ANNOUNCE_LOAD": "announce_load",
        "KRAM_SVG_NAMESPACE": "svg_namespace",
    }

    def __init__(self, project_dir: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._user_config_path = Path(user_config_path) if user_config_path else None
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path or self.USER_CONFIG_FILE

    def load(self) -> Config:
        """
        Load configuration from all sources.

        Raises:
            ConfigError: If a config file is not valid YAML or a value is invalid
        """
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        for env_key, setting in self.ENV_OVERRIDES.items():
            if os.environ.get(env_key):
                config_data.setdefault("output", {})[setting] = os.environ[env_key]

        config = Config.from_dict(config_data)
        error = config.validate()
        if error:
            raise ConfigError(error, context={"config": config.to_dict()})

        self._config = config
        return self._config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed config file {path}: {e}", context={"path": str(path)}) from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping", context={"path": str(path)})
        logger.debug("Loaded config layer from %s", path)
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
