"""
Configuration management using Pydantic models loaded from YAML.
"""

import os
from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_API_KEY_ENV = "SALONSLOTS_API_KEY"


class StorageConfig(BaseModel):
    """Connection settings for the hosted salon database REST endpoint."""
    base_url: str = ""
    api_key: str = ""
    api_key_env: str = DEFAULT_API_KEY_ENV
    timeout_seconds: int = 30

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalise the base URL so paths can be appended."""
        return value.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value

    def resolve_api_key(self) -> str:
        """
        Get the API key, preferring the explicit value over the environment.

        Raises:
            ValueError: If no key is configured
        """
        key = self.api_key or os.environ.get(self.api_key_env, "")
        if not key:
            raise ValueError(
                f"No API key configured. Set storage.api_key in the config file "
                f"or the {self.api_key_env} environment variable."
            )
        return key


class DefaultsConfig(BaseModel):
    """Default settings for slot search."""
    service_duration_minutes: int = 30
    slot_interval_minutes: int = 30
    hide_elapsed_slots: bool = False

    @field_validator("service_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure service duration is positive."""
        if value <= 0:
            raise ValueError("service_duration_minutes must be greater than zero")
        return value

    @field_validator("slot_interval_minutes")
    @classmethod
    def validate_interval(cls, value: int) -> int:
        """Slots must be a positive divisor of a day."""
        if value <= 0 or (24 * 60) % value != 0:
            raise ValueError(
                f"slot_interval_minutes must be a positive divisor of 1440, got {value}"
            )
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    storage: StorageConfig = Field(default_factory=StorageConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    timezone: str = "America/Sao_Paulo"
    mock_data_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
