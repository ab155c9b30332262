"""
Runtime Configuration Module

Provides configuration loading and management for symmerkle.
"""

from .runtime import (
    MerkleConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "MerkleConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
