"""
Backends module - language-specific code generation.
"""

from __future__ import annotations

from .base import CodeBackend
from .go_backend import GoBackend

__all__ = ["CodeBackend", "GoBackend"]
