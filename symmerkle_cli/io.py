"""
CLI Input/Output
File: io.py

Purpose: Read leaf lists and proof bundles from disk (or stdin) and
write proof bundles back out.

Leaf files are either a JSON array or plain text with one value per line
(blank lines and lines starting with '#' are ignored). Values are 0x-hex
or decimal integers. With raw=True every entry is a record instead: a
0x-hex entry is taken as bytes, anything else as UTF-8 text, and the
record is hashed into a leaf with leaf_from_bytes.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.crypto.hashing import DEFAULT_ALGORITHM, from_hex, is_word, leaf_from_bytes
from core.schemas.errors import InvalidInputException, ProofFormatException
from core.schemas.proof import ProofBundle


STDIN_PATH = "-"


def read_text(path: str) -> str:
    """
    Read a whole file, or stdin when path is '-'.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidInputException: If the contents are not valid UTF-8
    """
    try:
        if path == STDIN_PATH:
            return sys.stdin.read()
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInputException(
            f"{path} is not valid UTF-8 text: {e.reason} at byte {e.start}",
            details={"path": path},
        ) from e


def _split_entries(text: str) -> list[Any]:
    stripped = text.strip()
    if stripped.startswith("["):
        try:
            entries = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise InvalidInputException(f"Leaf file is not valid JSON: {e}") from e
        if not isinstance(entries, list):
            raise InvalidInputException("Leaf JSON must be an array")
        return entries

    return [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]


def parse_leaf_value(entry: Any, position: int) -> int:
    """Decode one value (int, 0x-hex string or decimal string) in [0, 2**256)."""
    value = None
    if isinstance(entry, int) and not isinstance(entry, bool):
        value = entry
    elif isinstance(entry, str):
        text = entry.strip()
        try:
            if text.startswith("0x"):
                value = from_hex(text)
            elif text.isascii() and text.isdigit():
                value = int(text)
        except ProofFormatException as e:
            raise InvalidInputException(e.message, position=position) from e
    if value is not None and is_word(value):
        return value
    raise InvalidInputException(
        f"Cannot parse leaf at position {position}: {entry!r}",
        position=position,
    )


def record_to_bytes(entry: Any, position: int) -> bytes:
    """Turn one raw record entry into the bytes that get hashed."""
    if not isinstance(entry, str):
        raise InvalidInputException(
            f"Raw record at position {position} must be a string, got {type(entry).__name__}",
            position=position,
        )
    if entry.startswith("0x"):
        try:
            return bytes.fromhex(entry[2:])
        except ValueError as e:
            raise InvalidInputException(
                f"Raw record at position {position} is not valid hex: {e}",
                position=position,
            ) from e
    return entry.encode("utf-8")


def parse_leaves(text: str, raw: bool = False, algorithm: str = DEFAULT_ALGORITHM) -> list[int]:
    """Parse leaf file contents into leaf values."""
    entries = _split_entries(text)
    if raw:
        return [
            leaf_from_bytes(record_to_bytes(entry, i), algorithm)
            for i, entry in enumerate(entries)
        ]
    return [parse_leaf_value(entry, i) for i, entry in enumerate(entries)]


def load_leaves(path: str, raw: bool = False, algorithm: str = DEFAULT_ALGORITHM) -> list[int]:
    """Load leaf values from a file path, or stdin for '-'."""
    return parse_leaves(read_text(path), raw=raw, algorithm=algorithm)


def load_proof(path: str) -> ProofBundle:
    """
    Load a proof bundle from JSON.

    Raises:
        ProofFormatException: If the file is not UTF-8, or the JSON is malformed
            or fails validation
    """
    try:
        text = read_text(path)
    except InvalidInputException as e:
        raise ProofFormatException(e.message, details=e.details) from e

    try:
        return ProofBundle.model_validate_json(text)
    except ValidationError as e:
        raise ProofFormatException(
            f"Invalid proof bundle: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def dump_model(model: Any) -> str:
    """Serialize a pydantic model to indented JSON."""
    return model.model_dump_json(indent=2)


def save_proof(bundle: ProofBundle, path: str) -> Path:
    """Write a proof bundle to disk, creating parent directories."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_model(bundle) + "\n", encoding="utf-8")
    return out_path
