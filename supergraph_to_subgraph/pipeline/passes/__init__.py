"""
Document passes, in the order the generator runs them:

1. SchemaAnnotator: schema-level federation @link
2. EntityClassifier: @key / @shareable from join__type markers
3. CompositionArtifactStripper: drop join__* directive usages
4. RootSanitizer: no directives on root operation types
5. CompositionTypeEliminator: drop join__* declarations
6. FederationScaffoldAssembler: _Any, FieldSet, _Entity, _entities, @key, @shareable
"""

from __future__ import annotations

from .annotator import SchemaAnnotator
from .artifact_stripper import CompositionArtifactStripper
from .base import Change, SchemaMapper
from .entity_classifier import EntityClassifier, EntityRegistry
from .root_sanitizer import RootSanitizer
from .scaffold_assembler import FederationScaffoldAssembler
from .type_eliminator import CompositionTypeEliminator

__all__ = [
    "Change",
    "SchemaMapper",
    "SchemaAnnotator",
    "EntityClassifier",
    "EntityRegistry",
    "CompositionArtifactStripper",
    "RootSanitizer",
    "CompositionTypeEliminator",
    "FederationScaffoldAssembler",
]
