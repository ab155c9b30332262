"""
CLI Prove Command

Generate a membership proof for one leaf.

Usage:
    symmerkle prove leaves.json --index 4 [--raw] [--out proof.json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.merkle.merkle_proofs import MerkleProver
from symmerkle_cli.commands.common import EXIT_SUCCESS, resolve_algorithm
from symmerkle_cli.io import dump_model, load_leaves, save_proof


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    The proof bundle is written to --out, or to stdout when omitted.

    Returns:
        Exit code
    """
    algorithm = resolve_algorithm(args)
    leaves = load_leaves(args.leaves, raw=args.raw, algorithm=algorithm)
    logger.info(f"Proving leaf {args.index} of {len(leaves)}")

    bundle = MerkleProver.prove(leaves, args.index, algorithm=algorithm)

    if args.out:
        out_path = save_proof(bundle, args.out)
        print(f"Proof written to {out_path} ({bundle.depth} siblings)")
    else:
        print(dump_model(bundle))

    return EXIT_SUCCESS
