"""
CLI command modules.
"""

from symmerkle_cli.commands import demo, prove, root, verify

__all__ = ["demo", "prove", "root", "verify"]
