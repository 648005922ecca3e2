"""
gofmt formatter for Go code.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from ..config import FormatterConfig
from ..errors import FormatterError
from .base import Formatter

logger = logging.getLogger(__name__)


class GofmtFormatter(Formatter):
    """Formatter piping Go source through gofmt (or any stdin/stdout command)."""

    def is_available(self, config: FormatterConfig) -> bool:
        """Check if the formatter executable is on PATH."""
        return bool(config.command) and shutil.which(config.command[0]) is not None

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Go code.

        Args:
            code: Go source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            FormatterError: If the command is missing, times out, or exits non-zero
        """
        if not config.command:
            raise FormatterError("no formatter command configured")

        logger.debug("running formatter: %s", " ".join(config.command))
        try:
            result = subprocess.run(
                config.command,
                input=code,
                capture_output=True,
                text=True,
                timeout=config.timeout,
            )
        except FileNotFoundError as e:
            raise FormatterError(f"{config.command[0]} not found on PATH") from e
        except subprocess.TimeoutExpired as e:
            raise FormatterError(f"{config.command[0]} timed out after {config.timeout}s") from e
        except OSError as e:
            raise FormatterError(f"{config.command[0]} could not be run: {e}") from e

        if result.returncode != 0:
            diagnostic = result.stderr.strip() or f"{config.command[0]} exited with status {result.returncode}"
            raise FormatterError(diagnostic)
        return result.stdout
