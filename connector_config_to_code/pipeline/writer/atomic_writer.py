"""
Atomic file writer for generated code.

Writes never leave a half-written target behind: content goes to a temporary
file in the target directory which then replaces the target.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..errors import GeneratorIOError

UNFORMATTED_SUFFIX = ".unformatted"


def unformatted_path(path: Path) -> Path:
    """Sibling path holding the unformatted draft of `path`."""
    return path.with_name(path.name + UNFORMATTED_SUFFIX)


class AtomicWriter:
    """Handles output writes for the generator.

    Uses a two-phase approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file
    """

    def __init__(self, atomic: bool = True):
        """Initialize the writer.

        Args:
            atomic: Whether to go through a temporary file (False writes in place)
        """
        self.atomic = atomic

    def ensure_directory(self, directory: Path) -> None:
        """Create `directory` and its parents.

        Raises:
            GeneratorIOError: If the directory cannot be created
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GeneratorIOError(directory, f"failed to create output directory: {e.strerror or e}") from e

    def write(self, path: Path, content: str) -> None:
        """Write content to file.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            GeneratorIOError: If file operations fail
        """
        self.ensure_directory(path.parent)

        if not self.atomic:
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as e:
                raise GeneratorIOError(path, f"failed to write: {e.strerror or e}") from e
            return

        try:
            # Same directory ensures atomic rename on the same filesystem
            temp_fd, temp_path_str = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", text=True)
        except OSError as e:
            raise GeneratorIOError(path, f"failed to create temporary file: {e.strerror or e}") from e

        temp_path = Path(temp_path_str)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise GeneratorIOError(path, f"failed to write: {e.strerror or e}") from e

    def write_draft(self, path: Path, content: str) -> Path:
        """Persist unformatted content next to `path` for diagnosis.

        Returns:
            The draft path (`<path>.unformatted`)
        """
        draft = unformatted_path(path)
        self.write(draft, content)
        return draft
