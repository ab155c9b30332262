"""
CLI Verify Command

Verify a proof bundle against a root.

The bundle carries the root it was generated against. A claimant-supplied
root proves nothing on its own, so --root should be the root published
out of band; when given it replaces the bundle's root. --leaf / --record
likewise replace the claimed leaf.

Usage:
    symmerkle verify proof.json [--root 0x...] [--leaf 0x... | --record TEXT] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field

from core.crypto.hashing import leaf_from_bytes, to_hex
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.errors import ErrorCodes, SymMerkleException
from symmerkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    wants_json,
)
from symmerkle_cli.io import load_proof, parse_leaf_value, record_to_bytes


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    algorithm: str = ""
    root: str = ""
    leaf: str = ""
    proof_length: int = 0
    root_source: str = "bundle"  # "bundle" or "argument"
    ok: bool = False
    errors: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"algorithm: {summary.algorithm}")
    print(f"root: {summary.root} ({summary.root_source})")
    print(f"leaf: {summary.leaf}")
    print(f"proof_length: {summary.proof_length}")
    print(f"valid: {str(summary.ok).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err['code']}: {err['message']}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof folds to the root,
        EXIT_VERIFICATION_FAILED if it does not,
        EXIT_RUNTIME_ERROR if the inputs cannot be read
    """
    try:
        bundle = load_proof(args.proof)
        root = bundle.root_value
        leaf = bundle.leaf_value
        if args.root:
            root = parse_leaf_value(args.root, 0)
        if args.leaf:
            leaf = parse_leaf_value(args.leaf, 0)
        elif args.record is not None:
            leaf = leaf_from_bytes(record_to_bytes(args.record, 0), bundle.algorithm)
    except (SymMerkleException, FileNotFoundError) as e:
        if getattr(args, "debug", False):
            raise
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    ok = verify_merkle_proof(root, leaf, bundle.sibling_values, bundle.algorithm)

    summary = VerifySummary(
        proof_path=args.proof,
        algorithm=bundle.algorithm,
        root=to_hex(root),
        leaf=to_hex(leaf),
        proof_length=bundle.depth,
        root_source="argument" if args.root else "bundle",
        ok=ok,
    )
    if not ok:
        summary.errors.append({
            "code": ErrorCodes.ROOT_MISMATCH,
            "message": "Proof does not fold to the root",
        })

    if wants_json(args):
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
