"""
CLI Root Command

Build the Merkle root for a leaf list.

Usage:
    symmerkle root leaves.json [--raw] [--algorithm keccak256] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.merkle.merkle_tree import MerkleTree
from core.crypto.hashing import to_hex
from symmerkle_cli.commands.common import EXIT_SUCCESS, resolve_algorithm, wants_json
from symmerkle_cli.io import dump_model, load_leaves


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    algorithm = resolve_algorithm(args)
    leaves = load_leaves(args.leaves, raw=args.raw, algorithm=algorithm)
    logger.info(f"Building tree over {len(leaves)} leaves ({algorithm})")

    tree = MerkleTree.from_leaves(leaves, algorithm=algorithm)
    commitment = tree.commitment()

    if wants_json(args):
        print(dump_model(commitment))
    else:
        print(to_hex(tree.root))

    logger.info(f"Root {commitment.root} (depth {commitment.depth})")
    return EXIT_SUCCESS
