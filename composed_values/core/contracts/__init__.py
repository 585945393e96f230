"""
Contract Validation Module

JSON Schema контракт снапшота композитного значения.
"""

from .validators import (
    SNAPSHOT_SCHEMA_NAME,
    load_schema,
    snapshot_validator,
    validate_snapshot,
)

__all__ = [
    "SNAPSHOT_SCHEMA_NAME",
    "load_schema",
    "snapshot_validator",
    "validate_snapshot",
]
