"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m symmerkle_cli root <leaves> [--raw] [--algorithm NAME] [--json]
    python -m symmerkle_cli prove <leaves> --index N [--raw] [--out PATH]
    python -m symmerkle_cli verify <proof> [--root HEX] [--leaf HEX | --record TEXT] [--json]
    python -m symmerkle_cli demo [RECORD ...] [--index N] [--json]
    python -m symmerkle_cli config --init

Environment Variables:
    SYMMERKLE_HASH_ALGORITHM    Hash primitive (default: keccak256)
    SYMMERKLE_LOG_LEVEL         Log level (default: WARNING)
    SYMMERKLE_LOG_FILE          Also log to this file
    SYMMERKLE_OUTPUT_FORMAT     human or json
    SYMMERKLE_DEBUG             Show tracebacks on errors (true/false)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config import get_default_config
from core.crypto.hashing import HASH_FUNCTIONS
from core.schemas.errors import SymMerkleException
from symmerkle_cli import __version__
from symmerkle_cli.commands import demo, prove, root, verify
from symmerkle_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from symmerkle_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--algorithm",
        type=str,
        choices=sorted(HASH_FUNCTIONS),
        default=None,
        help="Hash primitive (default: from config, keccak256)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="symmerkle",
        description="Build symmetric-pair Merkle roots, generate proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./symmerkle.json or ~/.config/symmerkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a leaf list",
        description="Read leaves (JSON array or one per line) and print the root.",
    )
    root_parser.add_argument(
        "leaves",
        type=str,
        help="Leaf file path, or '-' for stdin",
    )
    root_parser.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Treat entries as records and hash them into leaves",
    )
    _add_common_flags(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate a membership proof for one leaf",
        description="Generate the sibling list for the leaf at --index.",
    )
    prove_parser.add_argument(
        "leaves",
        type=str,
        help="Leaf file path, or '-' for stdin",
    )
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the leaf to prove",
    )
    prove_parser.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Treat entries as records and hash them into leaves",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof bundle here instead of stdout",
    )
    _add_common_flags(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof bundle",
        description="Fold the proof against the claimed leaf and compare with the root.",
    )
    verify_parser.add_argument(
        "proof",
        type=str,
        help="Proof bundle JSON path, or '-' for stdin",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Published root to check against (default: the bundle's root)",
    )
    leaf_group = verify_parser.add_mutually_exclusive_group()
    leaf_group.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Claimed leaf value (default: the bundle's leaf)",
    )
    leaf_group.add_argument(
        "--record",
        type=str,
        default=None,
        help="Claimed raw record, hashed into the leaf",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Build a small tree and show a good and a bad proof",
        description="Hash literal records into leaves, prove one and check it.",
    )
    demo_parser.add_argument(
        "records",
        nargs="*",
        help=f"Records to commit to (default: {' '.join(demo.DEFAULT_RECORDS)})",
    )
    demo_parser.add_argument(
        "--index", "-i",
        type=int,
        default=demo.DEFAULT_INDEX,
        help=f"Record to prove (default: {demo.DEFAULT_INDEX})",
    )
    _add_common_flags(demo_parser)
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="symmerkle.json",
        help="Path for config file (default: symmerkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (SYMMERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: symmerkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, ValueError, SymMerkleException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config
    args.debug = getattr(args, "debug", False) or get_default_config().debug

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (SymMerkleException, OSError) as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
