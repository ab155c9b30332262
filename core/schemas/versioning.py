"""
Schemas - Versioning
File: versioning.py

Purpose: Centralize the wire schema version constants.
This file must stay tiny and import nothing from other schema files
to avoid circular dependencies.
"""

from typing import Literal

# Current schema version for ProofBundle / TreeCommitment
SCHEMA_VERSION: str = "v1"

SchemaVersion = Literal["v1"]
