import json
import logging
from pathlib import Path

import click

from .discovery import discover_connectors, entity_kinds_for
from .pipeline import (
    CodeGeneratorConfig,
    GenerationError,
    MalformedConfigError,
    PipelineGenerator,
    load_deprecations,
    load_overrides,
)
from .pipeline.formatters import GofmtFormatter

logger = logging.getLogger(__name__)


def load_generator_config(path):
    if path is None:
        return CodeGeneratorConfig()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedConfigError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedConfigError(path, "top-level value must be an object")
    try:
        return CodeGeneratorConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise MalformedConfigError(path, str(e)) from e


@click.group()
def connector_config_to_code():
    """Generate Terraform provider schemas from backend connector configurations."""


@connector_config_to_code.command()
@click.option("--backend-path", required=True, type=click.Path(exists=True, file_okay=False, resolve_path=True), help="Path to the backend repository")
@click.option("--output", "-o", default="internal/generated", type=click.Path(file_okay=False), help="Output directory for generated code")
@click.option(
    "--entity-type",
    "-e",
    default="all",
    type=click.Choice(["sources", "destinations", "transforms", "all"]),
    help="Entity type to generate",
)
@click.option("--connector", default=None, type=str, help="Only generate this connector (e.g. postgresql)")
@click.option("--overrides", default="overrides.json", type=click.Path(dir_okay=False), help="Field overrides file (missing = none)")
@click.option("--deprecations", default="deprecations.json", type=click.Path(dir_okay=False), help="Deprecated aliases file (missing = none)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True), help="Generator configuration JSON")
@click.option("--no-format", is_flag=True, default=False, help="Skip gofmt on the generated code")
@click.option("--verbose", "-v", is_flag=True, default=False)
def generate(backend_path, output, entity_type, connector, overrides, deprecations, config, no_format, verbose):
    """Generate schema files for every connector found under BACKEND_PATH."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        generator_config = load_generator_config(config)
        override_config = load_overrides(overrides)
        deprecation_config = load_deprecations(deprecations)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e

    if no_format:
        generator_config.formatter.enabled = False
    elif not GofmtFormatter().is_available(generator_config.formatter):
        logger.warning("formatter %s not found on PATH, failing files are left as .unformatted drafts", " ".join(generator_config.formatter.command))
    if override_config.field_overrides:
        logger.info("loaded %d field overrides from %s", len(override_config.field_overrides), overrides)
    if deprecation_config.deprecated_fields:
        logger.info("loaded %d deprecated field definitions from %s", len(deprecation_config.deprecated_fields), deprecations)

    generated = 0
    failures = []
    for kind in entity_kinds_for(entity_type):
        generator = PipelineGenerator(kind, generator_config, override_config, deprecation_config)
        try:
            sources = discover_connectors(backend_path, kind, only=connector)
        except GenerationError as e:
            logger.error("%s", e)
            failures.append(kind.plural)
            continue

        for source in sources:
            try:
                generator.generate_from_file(source.config_path, source.connector_code, Path(output))
            except GenerationError as e:
                logger.error("failed to generate %s %s: %s", kind.value, source.connector_code, e)
                failures.append(f"{kind.value}/{source.connector_code}")
                continue
            generated += 1

    click.echo(f"Generated {generated} schema files in {output}.")
    if failures:
        click.echo(f"Failed: {', '.join(failures)}", err=True)
        raise SystemExit(1)
