"""
Errors raised by the generation pipeline.

Every error carries the path or backend entry name it concerns, prefixed to its message.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for all pipeline failures."""


class GeneratorIOError(GenerationError):
    """Raised when a file cannot be read or written, or a directory cannot be created."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MalformedConfigError(GenerationError):
    """Raised when a configuration document is not valid JSON or has the wrong shape."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class FieldModelError(GenerationError):
    """Raised when a config entry cannot be turned into a schema attribute.

    This can happen when:
    - A default value cannot be converted to the attribute's scalar kind
    - Two entries normalize to the same attribute name
    - An override references an unsupported type or validator
    """

    def __init__(self, entry_name: str, reason: str):
        self.entry_name = entry_name
        self.reason = reason
        super().__init__(f"{entry_name}: {reason}")


class FormatterError(GenerationError):
    """Raised when the external formatter rejects the generated code."""

    def __init__(self, diagnostic: str, draft_path: Path | None = None):
        self.diagnostic = diagnostic
        self.draft_path = draft_path
        if draft_path is not None:
            super().__init__(f"failed to format generated code (see {draft_path}): {diagnostic}")
        else:
            super().__init__(f"failed to format generated code: {diagnostic}")
