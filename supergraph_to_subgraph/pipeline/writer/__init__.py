"""
Output writing for generated subgraph schemas.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, validate_schema_text

__all__ = [
    "AtomicWriter",
    "validate_schema_text",
]
