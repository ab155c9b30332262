"""
CLI Demo Command

Build a tree over a handful of literal records, print the root and one
proof, then check one good and one bad claim against it.

Usage:
    symmerkle demo [RECORD ...] [--index N] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from typing import Any

from core.crypto.hashing import leaf_from_bytes, to_hex
from core.merkle.merkle_tree import (
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
)
from core.schemas.errors import InvalidInputException
from symmerkle_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    resolve_algorithm,
    wants_json,
)


logger = logging.getLogger(__name__)

DEFAULT_RECORDS = ["a", "b", "c", "d", "e"]
DEFAULT_INDEX = 4


def pick_wrong_index(index: int, leaf_count: int) -> int:
    """Choose a different leaf to present with the same proof."""
    for candidate in (index ^ 2, 0, 1):
        if candidate < leaf_count and candidate != index:
            return candidate
    raise InvalidInputException("Demo needs at least two records")


def run_demo(records: list[str], index: int, algorithm: str) -> dict[str, Any]:
    """Run the demonstration and return its results."""
    leaves = [leaf_from_bytes(r.encode("utf-8"), algorithm) for r in records]
    root = build_merkle_root(leaves, algorithm)
    proof = build_merkle_proof(leaves, index, algorithm)
    wrong_index = pick_wrong_index(index, len(leaves))

    return {
        "algorithm": algorithm,
        "records": records,
        "root": to_hex(root),
        "index": index,
        "proof": [to_hex(s) for s in proof],
        "good_proof_valid": verify_merkle_proof(root, leaves[index], proof, algorithm),
        "wrong_index": wrong_index,
        "bad_proof_valid": verify_merkle_proof(root, leaves[wrong_index], proof, algorithm),
    }


def demo_cmd(args: Namespace) -> int:
    """
    Execute the demo command.

    Returns:
        EXIT_SUCCESS when the good claim passes and the bad one fails
    """
    records = list(args.records) or DEFAULT_RECORDS
    algorithm = resolve_algorithm(args)
    result = run_demo(records, args.index, algorithm)

    if wants_json(args):
        print(json.dumps(result, indent=2))
    else:
        print(f"Merkle root: {result['root']}")
        print(f"Merkle proof for item {result['index']}:")
        for sibling in result["proof"]:
            print(f"  {sibling}")
        print(f"Should be true (good proof): {str(result['good_proof_valid']).lower()}")
        print(
            f"Should be false (bad proof, item {result['wrong_index']}): "
            f"{str(result['bad_proof_valid']).lower()}"
        )

    if result["good_proof_valid"] and not result["bad_proof_valid"]:
        return EXIT_SUCCESS

    logger.error("Demo produced an unexpected verification result")
    return EXIT_VERIFICATION_FAILED
