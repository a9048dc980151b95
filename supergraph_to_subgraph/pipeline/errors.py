"""
Exceptions raised while turning a schema into a subgraph schema.

Two families are kept apart so callers can tell bad input from a bug:

- InvalidSchemaError: the input schema cannot be used (composition failed,
  a synthesized federation name is already taken, ...)
- PipelineInvariantError: a pipeline stage produced an inconsistent document
"""

from __future__ import annotations

from collections.abc import Iterable


class SubgraphSplitError(Exception):
    """Base class for all errors raised by the pipeline."""


class InvalidSchemaError(SubgraphSplitError):
    """Raised when the input schema cannot be turned into a subgraph schema."""


class CompositionError(InvalidSchemaError):
    """Raised when the input schema cannot be composed.

    Attributes:
        messages: The individual composition messages, in report order
    """

    def __init__(self, messages: Iterable[str]):
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


class NameCollisionError(InvalidSchemaError):
    """Raised when a federation declaration to synthesize already exists in the input."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Cannot add federation {kind} '{name}': the schema already declares it. Rename it or set collision_policy to 'replace'.")


class PipelineInvariantError(SubgraphSplitError):
    """Raised when a pipeline stage breaks an invariant of the document.

    This never depends on user input when the stages run in their defined
    order, so it always indicates a bug.
    """
