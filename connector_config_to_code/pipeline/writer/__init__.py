"""
Writer module - persists generated code.
"""

from __future__ import annotations

from .atomic_writer import UNFORMATTED_SUFFIX, AtomicWriter, unformatted_path

__all__ = ["AtomicWriter", "UNFORMATTED_SUFFIX", "unformatted_path"]
