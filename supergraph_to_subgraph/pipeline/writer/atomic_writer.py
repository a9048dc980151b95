"""
Atomic file writer for generated schemas.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written schema behind.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from graphql import GraphQLError
from graphql.language import parse
from graphql.validation.validate import validate_sdl

from ..errors import PipelineInvariantError

logger = logging.getLogger(__name__)


def validate_schema_text(content: str) -> None:
    """Check that generated SDL parses and passes the SDL validation rules.

    Raises:
        PipelineInvariantError: If the content is not valid SDL
    """
    try:
        document = parse(content)
    except GraphQLError as e:
        raise PipelineInvariantError(f"Generated schema is not valid GraphQL: {e}") from e

    errors = validate_sdl(document)
    if errors:
        messages = "\n".join(error.message for error in errors)
        raise PipelineInvariantError(f"Generated schema is not valid GraphQL:\n{messages}")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_content: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_content: Optional validation function, defaults to SDL validation
        """
        self._validate_content = validate_content or validate_schema_text

    def write(self, path: Path, content: str, validate: bool = True, atomic: bool = True) -> None:
        """Write content to file.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing
            atomic: Whether to go through a temporary file

        Raises:
            PipelineInvariantError: If validation fails
            OSError: If file operations fail
        """
        if validate:
            self._validate_content(content)

        path.parent.mkdir(parents=True, exist_ok=True)
        if not atomic:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise
        logger.debug("Wrote %s", path)
