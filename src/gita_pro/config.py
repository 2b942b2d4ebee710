"""Configuration management for the gita CLI.

Handles loading, saving, and validating TOML configuration stored in:
- macOS: ~/.config/gita-pro/config.toml
- Linux: ~/.config/gita-pro/config.toml (XDG_CONFIG_HOME)
- Windows: %APPDATA%\\gita-pro\\config.toml

The RapidAPI key is never stored in the config file. It is read from the
GITA_RAPIDAPI_KEY environment variable by the API client.
"""

import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import tomllib
import tomli_w

DEFAULT_API_URL = "https://bhagavad-gita-api.p.rapidapi.com"
DEFAULT_API_HOST = "bhagavad-gita-api.p.rapidapi.com"


@dataclass
class GitaConfig:
    """Configuration for the gita CLI.

    Attributes:
        api_url: Base URL of the verse API
        api_host: Value of the x-rapidapi-host header
        api_timeout: Request timeout in seconds
        max_attempts: Lookups per reveal before giving up
        chapter_count: Number of chapters to sample from
        max_verse_index: Upper bound of the sampled verse index
        total_verses: Total verses shown in progress displays
        db_path: Local SQLite database path
        log_dir: Directory for session log files
    """

    # Verse API
    api_url: str = DEFAULT_API_URL
    api_host: str = DEFAULT_API_HOST
    api_timeout: int = 30

    # Reveal
    max_attempts: int = 3
    chapter_count: int = 18
    max_verse_index: int = 78
    total_verses: int = 700

    # Local storage
    db_path: Path = field(default_factory=lambda: get_default_db_path())
    log_dir: Path = field(default_factory=lambda: get_config_dir() / "logs")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GitaConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            GitaConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if path is None:
            path = get_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()

        if "api" in data:
            api = data["api"]
            config.api_url = api.get("url", config.api_url)
            config.api_host = api.get("host", config.api_host)
            config.api_timeout = api.get("timeout", config.api_timeout)

        # Environment variables take precedence over the file
        env_url = os.environ.get("GITA_API_URL")
        if env_url:
            config.api_url = env_url

        env_host = os.environ.get("GITA_API_HOST")
        if env_host:
            config.api_host = env_host

        if "reveal" in data:
            reveal = data["reveal"]
            config.max_attempts = reveal.get("max_attempts", config.max_attempts)
            config.chapter_count = reveal.get("chapter_count", config.chapter_count)
            config.max_verse_index = reveal.get("max_verse_index", config.max_verse_index)
            config.total_verses = reveal.get("total_verses", config.total_verses)

        if "database" in data:
            db_path = data["database"].get("path")
            if db_path:
                config.db_path = Path(db_path)

        if "logging" in data:
            log_dir = data["logging"].get("dir")
            if log_dir:
                config.log_dir = Path(log_dir)

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "api": {
                "url": self.api_url,
                "host": self.api_host,
                "timeout": self.api_timeout,
            },
            "reveal": {
                "max_attempts": self.max_attempts,
                "chapter_count": self.chapter_count,
                "max_verse_index": self.max_verse_index,
                "total_verses": self.total_verses,
            },
            "database": {"path": str(self.db_path)},
            "logging": {"dir": str(self.log_dir)},
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    @classmethod
    def keys(cls) -> list[str]:
        """Names of the settable configuration keys."""
        return [f.name for f in fields(cls)]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a configuration value by attribute name.

        Args:
            key: Configuration key (e.g., "api_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if key not in self.keys():
            return default

        value = getattr(self, key)
        if isinstance(value, Path):
            return str(value)
        return value

    def set(self, key: str, value: str) -> None:
        """Set a configuration value by attribute name.

        The new value is converted to the type of the current value.

        Args:
            key: Configuration key
            value: Configuration value

        Raises:
            ValueError: If the key is unknown or the value can't be converted
        """
        if key not in self.keys():
            raise ValueError(f"Invalid config key: {key}")

        current = getattr(self, key)
        if isinstance(current, bool):
            new_value = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            new_value = int(value)
        elif isinstance(current, Path):
            new_value = Path(value)
        else:
            new_value = value

        setattr(self, key, new_value)


def get_config_dir() -> Path:
    """Get the platform-specific config directory.

    Returns:
        Path to the config directory for gita-pro.
    """
    if sys.platform == "darwin" or sys.platform == "linux":
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "gita-pro"
        return Path.home() / ".config" / "gita-pro"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "gita-pro"
        return Path.home() / "AppData" / "Roaming" / "gita-pro"
    else:
        return Path.home() / ".config" / "gita-pro"


def get_config_path() -> Path:
    """Get the path to the config.toml file."""
    return get_config_dir() / "config.toml"


def get_default_db_path() -> Path:
    """Get the default database path."""
    return get_config_dir() / "db" / "gita.db"


def ensure_config_exists(path: Optional[Path] = None) -> GitaConfig:
    """Ensure config file exists, creating default if needed.

    Args:
        path: Path to config file (defaults to standard location)

    Returns:
        GitaConfig instance
    """
    config_path = path or get_config_path()

    if config_path.exists():
        try:
            return GitaConfig.load(config_path)
        except (tomllib.TOMLDecodeError, TypeError, ValueError):
            # Corrupt config is replaced with defaults
            pass

    config = GitaConfig()
    config.save(config_path)
    return config
