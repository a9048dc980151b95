"""
Configuration for the supergraph to subgraph pipeline.

Loaded from a JSON file with ``SplitterConfig.from_dict``; every option has a
default so an empty file (or no file at all) is valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

FEDERATION_SPEC_URL = "https://specs.apollo.dev/federation/{version}"


class MarkerSelection(str, Enum):
    """Which ``join__type`` markers of a type the entity classifier reads."""

    FIRST = "first"  # Default: only the first marker, later ones are ignored
    ALL = "all"  # Every marker, one @key per keyed marker


class CollisionPolicy(str, Enum):
    """What to do when a synthesized federation declaration already exists."""

    ERROR = "error"  # Default: raise NameCollisionError
    REPLACE = "replace"  # Overwrite the existing declaration


class EmptyEntityPolicy(str, Enum):
    """What to do when no type qualifies as an entity."""

    EMIT = "emit"  # Default: declare a memberless `union _Entity`
    OMIT = "omit"  # Leave out `_Entity` and the `_entities` query field
    ERROR = "error"  # Raise InvalidSchemaError


class InputKind(str, Enum):
    """How the loader interprets the source schema."""

    AUTO = "auto"  # Supergraph if it declares @join__type, service otherwise
    SERVICE = "service"
    SUPERGRAPH = "supergraph"


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        validate_before_write: Whether to re-parse the printed schema before writing
        atomic_write: Whether to use atomic file writes
    """

    validate_before_write: bool = True
    atomic_write: bool = True


_ENUM_OPTIONS = {
    "marker_selection": MarkerSelection,
    "collision_policy": CollisionPolicy,
    "empty_entity_policy": EmptyEntityPolicy,
    "input_kind": InputKind,
}


@dataclass
class SplitterConfig:
    """Configuration options for subgraph generation."""

    # Federation spec version referenced by the schema-level @link
    federation_version: str = "v2.5"

    # join__type marker selection for types composed from several markers
    marker_selection: MarkerSelection = MarkerSelection.FIRST

    # Handling of pre-existing _Any, FieldSet, _Entity, @key, @shareable, _entities
    collision_policy: CollisionPolicy = CollisionPolicy.ERROR

    # Handling of schemas without any entity
    empty_entity_policy: EmptyEntityPolicy = EmptyEntityPolicy.EMIT

    # Whether the input is a service schema to compose or an already composed supergraph
    input_kind: InputKind = InputKind.AUTO

    # Name of the single service when composing a service schema
    service_name: str = "service"

    # Add generation comment at top of file
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def federation_url(self) -> str:
        return FEDERATION_SPEC_URL.format(version=self.federation_version)

    @staticmethod
    def from_dict(d: dict) -> SplitterConfig:
        """Create a config from a dictionary."""
        config = SplitterConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                config.output = OutputConfig(
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k in _ENUM_OPTIONS:
                setattr(config, k, _ENUM_OPTIONS[k](v))
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "federation_version": self.federation_version,
            "marker_selection": self.marker_selection.value,
            "collision_policy": self.collision_policy.value,
            "empty_entity_policy": self.empty_entity_policy.value,
            "input_kind": self.input_kind.value,
            "service_name": self.service_name,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
