"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

from argparse import Namespace


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def resolve_algorithm(args: Namespace) -> str:
    """--algorithm flag, else the configured hash algorithm."""
    if getattr(args, "algorithm", None):
        return args.algorithm
    return args.cli_config.hash_algorithm


def wants_json(args: Namespace) -> bool:
    """--json flag, else the configured default output format."""
    if getattr(args, "json", False):
        return True
    return args.cli_config.default_output_format == "json"
