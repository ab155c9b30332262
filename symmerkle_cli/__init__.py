"""
symmerkle CLI

Command-line interface for building symmetric-pair Merkle roots and proofs.

Usage:
    python -m symmerkle_cli root leaves.json
    python -m symmerkle_cli prove leaves.json --index 4 --out proof.json
    python -m symmerkle_cli verify proof.json --root 0x...
    python -m symmerkle_cli demo
"""

__version__ = "0.1.0"
