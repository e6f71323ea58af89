"""Test fixtures package."""

from .sample_data import (
    SAMPLE_TABLES,
    SAMPLE_METADATA,
    SHARED_TABLE,
    TANK_1_TABLE,
    TANK_44_TABLE,
    TANK_80_TABLE,
    as_json_document,
)

__all__ = [
    "SAMPLE_TABLES",
    "SAMPLE_METADATA",
    "SHARED_TABLE",
    "TANK_1_TABLE",
    "TANK_44_TABLE",
    "TANK_80_TABLE",
    "as_json_document",
]
