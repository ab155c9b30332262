"""
CLI Configuration

Configuration management for the symmerkle CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from core.config import get_default_config
from core.crypto.hashing import get_hash_function


# Environment variable prefix
ENV_PREFIX = "SYMMERKLE_"

OUTPUT_FORMATS = ("human", "json")

# SYMMERKLE_<name> -> CLIConfig field
_ENV_FIELDS = {
    "HASH_ALGORITHM": "hash_algorithm",
    "LOG_LEVEL": "log_level",
    "LOG_FILE": "log_file",
    "OUTPUT_FORMAT": "default_output_format",
}


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Hashing
    hash_algorithm: str = ""

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def __post_init__(self):
        if not self.hash_algorithm:
            self.hash_algorithm = get_default_config().merkle.hash_algorithm
        get_hash_function(self.hash_algorithm)
        if self.default_output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"default_output_format must be one of {OUTPUT_FORMATS}, "
                f"got {self.default_output_format!r}"
            )

    def to_dict(self) -> dict:
        return asdict(self)


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    defaults = CLIConfig()
    return CLIConfig(
        hash_algorithm=data.get("hash_algorithm", defaults.hash_algorithm),
        log_level=data.get("log_level", defaults.log_level),
        log_file=data.get("log_file", defaults.log_file),
        default_output_format=data.get("default_output_format", defaults.default_output_format),
    )


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "symmerkle.json",
            Path.cwd() / ".symmerkle.json",
            Path.home() / ".config" / "symmerkle" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Environment takes precedence
    overrides = {
        field_name: os.getenv(f"{ENV_PREFIX}{env_name}")
        for env_name, field_name in _ENV_FIELDS.items()
        if os.getenv(f"{ENV_PREFIX}{env_name}")
    }
    if not overrides:
        return config

    # Rebuild so overridden values go through the same validation
    return CLIConfig(**{**config.to_dict(), **overrides})


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "hash_algorithm": "keccak256",
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human"
}
"""
