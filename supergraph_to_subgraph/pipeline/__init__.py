"""
Pipeline - supergraph to federation subgraph schema.

1. Loader: parse the source schema, composing it first if it is a service schema
2. Passes: annotate, classify entities, strip composition artifacts, sanitize
   root types, eliminate composition declarations, assemble the federation scaffold
3. Printer: render the document as SDL with directives inline
4. Writer: atomic write of the generated schema
"""

from __future__ import annotations

from .config import (
    CollisionPolicy,
    EmptyEntityPolicy,
    InputKind,
    MarkerSelection,
    OutputConfig,
    SplitterConfig,
)
from .errors import (
    CompositionError,
    InvalidSchemaError,
    NameCollisionError,
    PipelineInvariantError,
    SubgraphSplitError,
)
from .generator import SubgraphGenerator
from .writer import AtomicWriter

__all__ = [
    "SubgraphGenerator",
    "SplitterConfig",
    "OutputConfig",
    "MarkerSelection",
    "CollisionPolicy",
    "EmptyEntityPolicy",
    "InputKind",
    "SubgraphSplitError",
    "InvalidSchemaError",
    "CompositionError",
    "NameCollisionError",
    "PipelineInvariantError",
    "AtomicWriter",
]
