"""
Pipeline - backend connector configuration to Terraform schema code.

1. Phase 1 (Reader): Parse configuration JSON into a ConnectorSpec
2. Phase 2 (Modeler): Derive attributes, defaults, validators and capabilities
3. Phase 3 (Backend): Render Go source through Jinja2 templates
4. Phase 4 (Formatter): Pipe the source through gofmt
5. Phase 5 (Writer): Write the file atomically, or an `.unformatted` draft on failure
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig
from .errors import FieldModelError, FormatterError, GenerationError, GeneratorIOError, MalformedConfigError
from .generator import PipelineGenerator
from .modeler import EntityKind, FieldModeler
from .overrides import DeprecationConfig, OverrideConfig, load_deprecations, load_overrides

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "EntityKind",
    "FieldModeler",
    "GenerationError",
    "GeneratorIOError",
    "MalformedConfigError",
    "FieldModelError",
    "FormatterError",
    "OverrideConfig",
    "DeprecationConfig",
    "load_overrides",
    "load_deprecations",
]
