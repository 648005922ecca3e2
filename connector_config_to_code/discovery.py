"""
Discovery of connector configuration files in a backend checkout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .pipeline.errors import GeneratorIOError
from .pipeline.modeler import EntityKind

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "configuration.latest.json"

# Plugin directories relative to the backend root
PLUGIN_DIRS = {
    EntityKind.SOURCE: Path("app/sources/plugins"),
    EntityKind.DESTINATION: Path("app/destinations/plugins"),
    EntityKind.TRANSFORM: Path("app/transforms/plugins"),
}

SKIPPED_DIRS = {"__pycache__", "common"}


@dataclass
class ConnectorSource:
    entity_kind: EntityKind
    connector_code: str
    config_path: Path


def entity_kinds_for(selector: str) -> list[EntityKind]:
    """Entity kinds matching a CLI selector ("sources", "source", "all", ...)."""
    if selector == "all":
        return list(EntityKind)
    singular = selector[:-1] if selector.endswith("s") else selector
    try:
        return [EntityKind(singular)]
    except ValueError:
        raise ValueError(f"unknown entity type: {selector} (valid: sources, destinations, transforms, all)") from None


def discover_connectors(backend_path: str | Path, entity_kind: EntityKind, only: str | None = None) -> list[ConnectorSource]:
    """
    List the connectors of one entity kind, sorted by connector code.

    Args:
        backend_path: Root of the backend checkout
        entity_kind: Kind whose plugin directory is scanned
        only: Restrict to this connector code

    Returns:
        One ConnectorSource per connector directory holding a configuration file

    Raises:
        GeneratorIOError: If the plugin directory exists but cannot be listed
    """
    plugin_dir = Path(backend_path) / PLUGIN_DIRS[entity_kind]
    if not plugin_dir.is_dir():
        logger.info("skipping %s: plugin directory not found at %s", entity_kind.plural, plugin_dir)
        return []

    try:
        children = sorted(plugin_dir.iterdir())
    except OSError as e:
        raise GeneratorIOError(plugin_dir, f"failed to read plugin directory: {e.strerror or e}") from e

    found = []
    for child in children:
        code = child.name
        if not child.is_dir() or code in SKIPPED_DIRS or code.startswith("_"):
            continue
        if only and code != only:
            logger.debug("skipping %s %s: not selected", entity_kind.value, code)
            continue
        config_path = child / CONFIG_FILENAME
        if not config_path.is_file():
            logger.info("skipping %s %s: no %s found", entity_kind.value, code, CONFIG_FILENAME)
            continue
        found.append(ConnectorSource(entity_kind=entity_kind, connector_code=code, config_path=config_path))
    return found
