"""Configuration management for the GOV.UK form components host.

Provides:
- A ``Config`` base class with dict/JSON round-tripping
- ``AppConfig`` populated from environment variables
- ``LookupConfig`` for the autocomplete lookup endpoint and client
"""

import json
import os as _os
from pathlib import Path
from typing import Any, Dict


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance with values from dictionary
        """
        config = cls()
        for key, value in data.items():
            setattr(config, key, value)
        return config

    def save_json(self, path: Path) -> None:
        """Save configuration to JSON file.

        Args:
            path: Path to save configuration file
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load_json(cls, path: Path) -> "Config":
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


def _env_float(name: str, default: str) -> float | None:
    raw = _os.getenv(name, default).strip()
    if not raw or raw.lower() == "none":
        return None
    return float(raw)


class LookupConfig(Config):
    """Settings shared by the lookup endpoint and the autocomplete client.

    Environment variables:
        LOOKUP_MIN_LENGTH: Shortest query that reaches the database (default: 3)
        LOOKUP_MAX_RESULTS: Maximum suggestions returned per query (default: 20)
        LOOKUP_CACHE_TTL: Seconds a lookup result stays cached (default: 300)
        LOOKUP_TIMEOUT: Client-side request timeout in seconds; empty for none
    """

    def __init__(self) -> None:
        super().__init__()
        self.min_length = int(_os.getenv("LOOKUP_MIN_LENGTH", "3"))
        self.max_results = int(_os.getenv("LOOKUP_MAX_RESULTS", "20"))
        self.cache_ttl = float(_os.getenv("LOOKUP_CACHE_TTL", "300"))
        self.timeout = _env_float("LOOKUP_TIMEOUT", "")


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        APP_DB_PATH: Path to the organisations SQLite database (default: organisations.sqlite)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format — "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    """

    def __init__(self) -> None:
        super().__init__()
        self.db_path = Path(_os.getenv("APP_DB_PATH", "organisations.sqlite"))
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )
        self.lookup = LookupConfig()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["lookup"] = self.lookup.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        data = dict(data)
        lookup = data.pop("lookup", None)
        config = super().from_dict(data)
        if isinstance(lookup, dict):
            config.lookup = LookupConfig.from_dict(lookup)
        if isinstance(config.db_path, str):
            config.db_path = Path(config.db_path)
        return config

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
