"""Connector Config to Code

Generates Terraform provider schema code (Go) from backend connector
configuration documents: a typed model, a schema function and an
attribute-to-API field mapping table per connector.
"""

__version__ = "0.1.0"

from .pipeline import (
    CodeGeneratorConfig,
    EntityKind,
    FieldModeler,
    FormatterConfig,
    OutputConfig,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "FieldModeler",
    "EntityKind",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
]
