"""Supergraph to Subgraph

Converts a composed federation supergraph schema (or a single service
schema, composed on the fly) into a standalone federation subgraph schema
annotated with @key, @shareable and @link instead of join__* metadata.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CompositionError,
    InvalidSchemaError,
    PipelineInvariantError,
    SplitterConfig,
    SubgraphGenerator,
    SubgraphSplitError,
)

__all__ = [
    "SubgraphGenerator",
    "SplitterConfig",
    "SubgraphSplitError",
    "InvalidSchemaError",
    "CompositionError",
    "PipelineInvariantError",
    "AtomicWriter",
]
