"""
Pipeline generator - runs every phase for one connector.

1. Reader: ConnectorSpec (already parsed, or read from a path)
2. Modeler: attributes and capabilities
3. Backend: Go source from templates
4. Formatter: gofmt (optional)
5. Writer: `<output>/<entity>_<connector>.go`, or a `.unformatted` draft on formatter failure
"""

from __future__ import annotations

import logging
from pathlib import Path

from .backends import CodeBackend, GoBackend
from .config import CodeGeneratorConfig
from .connector_spec import ConnectorSpec, read_connector_spec
from .errors import FormatterError
from .formatters import Formatter, GofmtFormatter
from .modeler import EntityKind, FieldModeler, ModelResult
from .overrides import DeprecationConfig, OverrideConfig
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates schema files for connectors of one entity kind."""

    def __init__(
        self,
        entity_kind: EntityKind | str,
        config: CodeGeneratorConfig | None = None,
        overrides: OverrideConfig | None = None,
        deprecations: DeprecationConfig | None = None,
        formatter: Formatter | None = None,
        backend: CodeBackend | None = None,
    ):
        """
        Initialize the generator.

        Args:
            entity_kind: source, destination or transform
            config: Generation configuration (defaults apply when None)
            overrides: Map-field overrides
            deprecations: Deprecated attribute aliases
            formatter: Post-processor (defaults to gofmt)
            backend: Code backend (defaults to Go)
        """
        self.entity_kind = EntityKind(entity_kind)
        self.config = config or CodeGeneratorConfig()
        reserved = ("timeouts",) if self.config.add_timeouts else ()
        self.modeler = FieldModeler(self.entity_kind, overrides, deprecations, reserved_names=reserved)
        self.backend = backend or GoBackend(self.config)
        self.formatter = formatter or GofmtFormatter()
        self.writer = AtomicWriter(atomic=self.config.output.atomic_write)

    def model(self, spec: ConnectorSpec, connector_code: str) -> ModelResult:
        return self.modeler.model(spec, connector_code)

    def render(self, spec: ConnectorSpec, connector_code: str) -> str:
        """Render the unformatted source for a connector."""
        return self.backend.generate(self.model(spec, connector_code))

    def output_path(self, output_dir: str | Path, connector_code: str) -> Path:
        return Path(output_dir) / self.backend.output_filename(self.entity_kind, connector_code)

    def generate(self, spec: ConnectorSpec, connector_code: str, output_dir: str | Path) -> Path:
        """
        Generate and write the schema file for one connector.

        Args:
            spec: The parsed connector configuration
            connector_code: Connector identifier
            output_dir: Directory receiving the file

        Returns:
            Path of the written file

        Raises:
            FieldModelError: If the spec cannot be modeled
            FormatterError: If formatting fails; the draft is written next to the target
            GeneratorIOError: If the output cannot be written
        """
        output_path = self.output_path(output_dir, connector_code)
        code = self.render(spec, connector_code)
        self.writer.ensure_directory(output_path.parent)

        if self.config.formatter.enabled:
            try:
                code = self.formatter.format(code, self.config.formatter)
            except FormatterError as e:
                if not self.config.output.write_unformatted_draft:
                    raise
                draft = self.writer.write_draft(output_path, code)
                logger.error("formatting %s failed, unformatted draft written to %s", output_path.name, draft)
                raise FormatterError(e.diagnostic, draft_path=draft) from e

        self.writer.write(output_path, code)
        logger.info("generated %s", output_path)
        return output_path

    def generate_from_file(self, config_path: str | Path, connector_code: str, output_dir: str | Path) -> Path:
        """Read a configuration file and generate its schema file."""
        spec = read_connector_spec(config_path)
        return self.generate(spec, connector_code, output_dir)
