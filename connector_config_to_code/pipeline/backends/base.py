"""
Base class for code generation backends.

Defines the interface that language-specific backends implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ...utils import go_quote
from ..config import CodeGeneratorConfig
from ..modeler.ir_nodes import DefaultClause, EntityKind, ModelResult, ScalarKind, Validator


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        # Add custom filters
        self.jinja_env.filters["go_quote"] = go_quote

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.model_template = self.jinja_env.get_template(f"model.{self.FILE_EXTENSION}.jinja2")
        self.schema_template = self.jinja_env.get_template(f"schema.{self.FILE_EXTENSION}.jinja2")
        self.suffix_template = self.jinja_env.get_template(f"suffix.{self.FILE_EXTENSION}.jinja2")

    def output_filename(self, entity_kind: EntityKind, connector_code: str) -> str:
        """File name of a generated connector, e.g. "source_postgresql.go"."""
        return f"{EntityKind(entity_kind).value}_{connector_code}.{self.FILE_EXTENSION}"

    @abstractmethod
    def generate(self, result: ModelResult) -> str:
        """
        Generate code from a model.

        Args:
            result: The modeled connector

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def imports(self, result: ModelResult) -> list[str]:
        """
        Compute the imports needed by the model, in sorted order.

        Args:
            result: The modeled connector

        Returns:
            Import paths
        """

    @abstractmethod
    def render_default(self, default: DefaultClause) -> str:
        """Render a default clause as a language expression."""

    @abstractmethod
    def render_validator(self, validator: Validator, kind: ScalarKind) -> str:
        """Render a validator as a language expression."""
