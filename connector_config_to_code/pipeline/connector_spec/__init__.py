"""
Connector spec module.

Contains the node definitions and parser for backend connector configuration documents.
"""

from __future__ import annotations

from .nodes import Condition, ConfigEntry, ConnectorSpec, Metric, ValueObject, scalar_to_string
from .parser import ConnectorSpecParser, parse_connector_spec, read_connector_spec

__all__ = [
    "Condition",
    "ConfigEntry",
    "ConnectorSpec",
    "Metric",
    "ValueObject",
    "scalar_to_string",
    "ConnectorSpecParser",
    "parse_connector_spec",
    "read_connector_spec",
]
