"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (STITCHER_TIMEOUT, STITCHER_USER_AGENT, STITCHER_FORMAT)
  2. Project config (.stitcher.yaml)
  3. User config (~/.stitcher/config.yaml)
  4. Defaults

Credentials for private spec hosts belong in fetch.headers of the user
config, never in a project config that gets committed.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from . import __version__
from .presentation.serializer import DEFAULT_FORMAT, FORMATS

logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 30.0


@dataclass
class FetchConfig:
    """Network retrieval settings."""
    timeout: float = DEFAULT_TIMEOUT
    user_agent: Optional[str] = None  # None = stitcher/<version>
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or f"stitcher/{__version__}"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.timeout <= 0:
            return f"Timeout must be > 0, got {self.timeout}"
        return None


@dataclass
class OutputConfig:
    """Output preferences."""
    format: str = DEFAULT_FORMAT  # "yaml" | "json"
    indent: int = 2

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.format not in FORMATS:
            return f"Unknown format '{self.format}'. Valid: {', '.join(FORMATS)}"
        if self.indent < 1:
            return f"Indent must be >= 1, got {self.indent}"
        return None


@dataclass
class Config:
    """Application configuration."""
    fetch: FetchConfig = field(default_factory=FetchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> Optional[str]:
        return self.fetch.validate() or self.output.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "fetch": {
                "timeout": self.fetch.timeout,
                "user_agent": self.fetch.user_agent,
                "headers": dict(self.fetch.headers),
            },
            "output": {
                "format": self.output.format,
                "indent": self.output.indent,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        fetch_data = data.get("fetch") or {}
        output_data = data.get("output") or {}

        return cls(
            fetch=FetchConfig(
                timeout=float(fetch_data.get("timeout", DEFAULT_TIMEOUT)),
                user_agent=fetch_data.get("user_agent"),
                headers={str(k): str(v) for k, v in (fetch_data.get("headers") or {}).items()},
            ),
            output=OutputConfig(
                format=output_data.get("format", DEFAULT_FORMAT),
                indent=int(output_data.get("indent", 2)),
            ),
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment
      2. Project config (.stitcher.yaml)
      3. User config (~/.stitcher/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".stitcher"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_FILE = ".stitcher.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

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
        if os.environ.get("STITCHER_TIMEOUT"):
            config_data.setdefault("fetch", {})["timeout"] = os.environ["STITCHER_TIMEOUT"]
        if os.environ.get("STITCHER_USER_AGENT"):
            config_data.setdefault("fetch", {})["user_agent"] = os.environ["STITCHER_USER_AGENT"]
        if os.environ.get("STITCHER_FORMAT"):
            config_data.setdefault("output", {})["format"] = os.environ["STITCHER_FORMAT"]

        try:
            config = Config.from_dict(config_data)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Invalid configuration values, using defaults: {e}")
            config = Config()

        error = config.validate()
        if error:
            logger.warning(f"Invalid configuration, using defaults: {error}")
            config = Config()

        self._config = config
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one config file; malformed files are ignored with a warning."""
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring malformed config {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: top level must be a mapping")
            return {}
        return data

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value in one config file.

        Only that file's own contents are rewritten; values coming from the
        other file or the environment are never copied into it.

        Args:
            key: Dot-separated key (e.g., "output.format")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'output.format')"

        section, setting = parts

        if section == "fetch":
            if setting == "timeout":
                try:
                    parsed: Any = float(value)
                except ValueError:
                    return f"Timeout must be a number, got '{value}'"
            elif setting == "user_agent":
                parsed = value or None
            else:
                return f"Unknown fetch setting: {setting}. Valid: timeout, user_agent"

        elif section == "output":
            if setting == "format":
                parsed = value
            elif setting == "indent":
                try:
                    parsed = int(value)
                except ValueError:
                    return f"Indent must be an integer, got '{value}'"
            else:
                return f"Unknown output setting: {setting}. Valid: format, indent"
        else:
            return f"Unknown section: {section}. Valid: fetch, output"

        path = self.project_config_path if scope == "project" else self.user_config_path
        data = self._read(path)
        section_data = data.get(section)
        section_data = dict(section_data) if isinstance(section_data, dict) else {}
        if parsed is None:
            section_data.pop(setting, None)
        else:
            section_data[setting] = parsed
        data[section] = section_data

        try:
            error = Config.from_dict(data).validate()
        except (TypeError, ValueError, AttributeError) as e:
            error = f"Invalid value in {path}: {e}"
        if error:
            return error

        self._write(path, data)
        return None

    def _write(self, path: Path, data: Dict[str, Any]):
        """Write one config file and drop the cached merged config."""
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False)

        self._config = None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts

        if section == "fetch":
            if setting == "timeout":
                return str(config.fetch.timeout)
            elif setting == "user_agent":
                return config.fetch.effective_user_agent
        elif section == "output":
            if setting == "format":
                return config.output.format
            elif setting == "indent":
                return str(config.output.indent)

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

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        header_names = ", ".join(sorted(config.fetch.headers)) or "(none)"
        lines = [
            "Configuration:",
            "",
            "Fetch:",
            f"  Timeout: {config.fetch.timeout}s",
            f"  User-Agent: {config.fetch.effective_user_agent}",
            f"  Headers: {header_names}",
            "",
            "Output:",
            f"  Format: {config.output.format}",
            f"  Indent: {config.output.indent}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
