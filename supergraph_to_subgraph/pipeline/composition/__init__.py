"""
Composition of a single federation service schema into supergraph form.
"""

from __future__ import annotations

from .composer import ServiceComposer, graph_enum_value
from .key_fields import parse_field_set, validate_key_fields

__all__ = [
    "ServiceComposer",
    "graph_enum_value",
    "parse_field_set",
    "validate_key_fields",
]
