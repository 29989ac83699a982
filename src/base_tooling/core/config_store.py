"""User configuration data structures and storage.

Provides immutable tool config loaded from ~/.config/base-tooling/config.toml
(or $BASE_TOOLING_CONFIG). Every key is optional; a missing file means
defaults. Command-line flags and environment variables take precedence over
anything stored here.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from pathlib import Path

import tomlkit

from base_tooling.integrations.nix.abc import DEFAULT_HOME_MANAGER_FLAKE

DEFAULT_REPO_URL = "https://github.com/konradrenner/base-tooling"
CONFIG_ENV_VAR = "BASE_TOOLING_CONFIG"


@dataclass(frozen=True)
class ToolConfig:
    """Immutable tool configuration.

    Loaded once at CLI entry point and stored in BootstrapContext.
    """

    repo_url: str = DEFAULT_REPO_URL
    install_dir: Path | None = None
    darwin_target: str = "default"
    home_manager_flake: str = DEFAULT_HOME_MANAGER_FLAKE
    backup_extension: str = "before-hm"
    optional_component: bool = True
    login_shell: str = "zsh"


CONFIG_KEYS = tuple(f.name for f in fields(ToolConfig))
_BOOL_KEYS = {"optional_component"}
_PATH_KEYS = {"install_dir"}


def parse_config_value(key: str, raw: str) -> str | bool | Path | None:
    """Convert a command-line string into the typed value for `key`.

    Raises:
        ValueError: If the key is unknown or the value has the wrong shape
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key '{key}'. Valid keys: {', '.join(CONFIG_KEYS)}")
    if key in _BOOL_KEYS:
        lowered = raw.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0"):
            return False
        raise ValueError(f"Invalid boolean for '{key}': {raw}")
    if key in _PATH_KEYS:
        return Path(raw).expanduser() if raw else None
    if not raw:
        raise ValueError(f"'{key}' cannot be empty")
    return raw


def config_from_mapping(data: dict, source: Path) -> ToolConfig:
    """Build a ToolConfig from parsed TOML, ignoring nothing silently.

    Raises:
        ValueError: If the file contains unknown keys or wrongly typed values
    """
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown key(s) in {source}: {', '.join(unknown)}")

    values: dict[str, object] = {}
    for key, value in data.items():
        if key in _BOOL_KEYS:
            if not isinstance(value, bool):
                raise ValueError(f"'{key}' in {source} must be true or false")
            values[key] = value
        elif key in _PATH_KEYS:
            if not isinstance(value, str):
                raise ValueError(f"'{key}' in {source} must be a string")
            values[key] = Path(value).expanduser() if value else None
        else:
            if not isinstance(value, str) or not value:
                raise ValueError(f"'{key}' in {source} must be a non-empty string")
            values[key] = value
    return replace(ToolConfig(), **values)


class ConfigStore(ABC):
    """Abstract interface for config storage.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a config file exists."""
        ...

    @abstractmethod
    def load(self) -> ToolConfig:
        """Load config, returning defaults when no file exists.

        Raises:
            ValueError: If the stored config is malformed
        """
        ...

    @abstractmethod
    def set(self, key: str, raw_value: str) -> ToolConfig:
        """Validate and persist a single key, returning the new config.

        Raises:
            ValueError: If the key is unknown or the value is invalid
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages and debugging)."""
        ...


def default_config_path() -> Path:
    """Config location: $BASE_TOOLING_CONFIG, else XDG config dir of the invoking user."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "base-tooling" / "config.toml"


class FilesystemConfigStore(ConfigStore):
    """Production implementation reading and writing a TOML file."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._path = config_path if config_path is not None else default_config_path()

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> ToolConfig:
        if not self._path.exists():
            return ToolConfig()
        try:
            data = tomllib.loads(self._path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {self._path}: {e}") from e
        return config_from_mapping(data, self._path)

    def set(self, key: str, raw_value: str) -> ToolConfig:
        value = parse_config_value(key, raw_value)

        # tomlkit keeps the user's comments and layout intact
        if self._path.exists():
            doc = tomlkit.parse(self._path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("base-tooling configuration"))

        if value is None:
            if key in doc:
                del doc[key]
        else:
            doc[key] = str(value) if isinstance(value, Path) else value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        return self.load()

    def path(self) -> Path:
        return self._path


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: ToolConfig | None = None) -> None:
        """Initialize in-memory store.

        Args:
            config: Initial config state (None = no config file)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> ToolConfig:
        return self._config if self._config is not None else ToolConfig()

    def set(self, key: str, raw_value: str) -> ToolConfig:
        value = parse_config_value(key, raw_value)
        self._config = replace(self.load(), **{key: value})
        return self._config

    def path(self) -> Path:
        return Path("/test/config/base-tooling/config.toml")
