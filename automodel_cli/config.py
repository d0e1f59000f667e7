"""Configuration file handling for the automodel CLI."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from automodel.models import ConnectionSpec

CONFIG_ENV_VAR = "AUTOMODEL_CONFIG"
DEFAULT_CONFIG_NAME = ".automodel.yaml"


class OutputDefaults(BaseModel):
    """Default output options"""

    format: str = Field(default="json", description="Output format: json or yaml")
    pretty: bool = Field(default=False, description="Pretty-print JSON output")


class Defaults(BaseModel):
    """Defaults applied when CLI options are omitted"""

    output: OutputDefaults = Field(default_factory=OutputDefaults)


class Config(BaseModel):
    """Contents of the CLI configuration file"""

    version: str = Field(default="1.0", description="Config file format version")
    connections: dict[str, ConnectionSpec] = Field(default_factory=dict, description="Named connections")
    defaults: Defaults = Field(default_factory=Defaults)

    @field_validator("connections", mode="before")
    @classmethod
    def coerce_url_connections(cls, value: Any) -> Any:
        """Allow 'name: <url>' as shorthand for 'name: {url: <url>}'."""
        if isinstance(value, dict):
            return {name: {"url": spec} if isinstance(spec, str) else spec for name, spec in value.items()}
        return value


def get_config_path() -> Path:
    """Return the config file path, honouring the AUTOMODEL_CONFIG environment variable."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.home() / DEFAULT_CONFIG_NAME


def load_config() -> Config:
    """Load the config file, or return defaults if it doesn't exist.

    Raises:
        ValueError: If the file is not valid YAML or does not match the config schema
    """
    config_path = get_config_path()
    if not config_path.exists():
        return Config()

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}") from e


def save_config(config: Config) -> Path:
    """Write config to the config file path."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
    return config_path


def init_config(force: bool = False) -> Path:
    """Create a config file with default contents.

    Raises:
        FileExistsError: If the file exists and force is False
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {config_path}")
    return save_config(Config())


def get_connection(name: str, config: Config | None = None) -> ConnectionSpec:
    """Return a named connection from the config.

    Raises:
        KeyError: If no connection has that name
    """
    config = config or load_config()
    if name not in config.connections:
        raise KeyError(f"Connection '{name}' not found in config")
    return config.connections[name]


def resolve_connection(value: str, config: Config | None = None) -> ConnectionSpec:
    """Resolve '@name' through the config; anything else is a database URL."""
    if value.startswith("@"):
        return get_connection(value[1:], config)
    return ConnectionSpec(url=value)


def get_output_defaults(config: Config | None = None) -> OutputDefaults:
    """Return output defaults from the config."""
    return (config or load_config()).defaults.output


def validate_config(config: Config) -> list[str]:
    """Check config values pydantic cannot; returns a list of error messages."""
    errors = []
    if config.defaults.output.format not in ("json", "yaml"):
        errors.append("'defaults.output.format' must be 'json' or 'yaml'")
    for name, spec in config.connections.items():
        if not spec.url:
            errors.append(f"Connection '{name}' has an empty url")
    return errors
