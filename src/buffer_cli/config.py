"""Settings and persisted configuration for the Buffer CLI."""

from __future__ import annotations

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
load_dotenv()

CONFIG_FILENAME = "config.yaml"


class BufferSettings(BaseSettings):
    """Environment settings (BUFFER_* variables)."""

    model_config = SettingsConfigDict(env_prefix="BUFFER_", extra="ignore")

    access_token: str | None = None
    config_dir: Path = Path.home() / ".config" / "buffer"
    timeout: float = 30.0
    max_retries: int = 0
    retry_delay: float = 1.0
    log_level: str = "INFO"

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILENAME


class AuthConfig(BaseModel):
    """Stored credentials."""

    oauth_token: str | None = None


class BufferConfig(BaseModel):
    """Contents of the persisted config file."""

    auth: AuthConfig | None = None


class ConfigError(Exception):
    """Raised when the config file exists but cannot be parsed."""


class ConfigStore:
    """Reads and writes the YAML config file.

    Usage:
        store = ConfigStore(settings.config_path)
        config = store.read()
        config.auth = AuthConfig(oauth_token="...")
        store.write(config)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings: BufferSettings) -> "ConfigStore":
        return cls(settings.config_path)

    def read(self) -> BufferConfig:
        """Load the config, returning an empty one if the file does not exist."""
        if not self.path.exists():
            return BufferConfig()

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config file {self.path}: {e}") from e

        if data is None:
            return BufferConfig()
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {self.path}: expected a mapping")

        try:
            return BufferConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {self.path}: {e}") from e

    def write(self, config: BufferConfig) -> None:
        """Persist the config, creating the parent directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.model_dump(exclude_none=True), f, sort_keys=False)
