"""
Runtime Configuration

Library-level defaults for tree construction and verification.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_ALGORITHM, get_hash_function

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class MerkleConfig:
    """Settings that affect how trees are built and proofs are checked."""
    hash_algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self):
        # Fail at load time rather than on the first fold
        get_hash_function(self.hash_algorithm)


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    debug: bool = False  # CLI prints tracebacks on errors

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SYMMERKLE_HASH_ALGORITHM: Hash primitive name (keccak256, sha256)
        - SYMMERKLE_DEBUG: Default for the CLI --debug flag (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("SYMMERKLE_HASH_ALGORITHM"):
            overrides.setdefault("merkle", {})["hash_algorithm"] = os.getenv(
                "SYMMERKLE_HASH_ALGORITHM"
            )
        if os.getenv("SYMMERKLE_DEBUG"):
            overrides["debug"] = _env_flag("SYMMERKLE_DEBUG", "false")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {})
        merkle = MerkleConfig(**merkle_data) if merkle_data else MerkleConfig()

        return cls(
            merkle=merkle,
            debug=bool(data.get("debug", False)),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "merkle" in overrides:
            new_config.merkle = MerkleConfig(
                **{**self.to_dict()["merkle"], **overrides["merkle"]}
            )
        if "debug" in overrides:
            new_config.debug = overrides["debug"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "hash_algorithm": self.merkle.hash_algorithm,
            },
            "debug": self.debug,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env on next read)."""
    global _default_config
    _default_config = config
