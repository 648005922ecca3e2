"""
Connector configuration parser.

Phase 1 of the pipeline: read a `configuration.latest.json` document into a
ConnectorSpec. Unknown keys are ignored; shape mismatches raise MalformedConfigError.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import GeneratorIOError, MalformedConfigError
from .nodes import Condition, ConfigEntry, ConnectorSpec, Metric, ValueObject


class ConnectorSpecParser:
    """Parses connector configuration documents into ConnectorSpec nodes."""

    def read(self, path: str | Path) -> ConnectorSpec:
        """
        Read and parse a configuration file.

        Args:
            path: Path to the JSON document

        Returns:
            The parsed ConnectorSpec

        Raises:
            GeneratorIOError: If the file cannot be read
            MalformedConfigError: If the file is not valid JSON or has the wrong shape
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise GeneratorIOError(path, f"failed to read config file: {e.strerror or e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedConfigError(path, f"invalid JSON: {e}") from e

        return self.parse(data, str(path))

    def parse(self, data: Any, source: str = "<config>") -> ConnectorSpec:
        """
        Parse an already decoded configuration document.

        Args:
            data: The decoded JSON document
            source: Name used to prefix error messages (usually the file path)

        Returns:
            The parsed ConnectorSpec
        """
        if not isinstance(data, dict):
            raise MalformedConfigError(source, "top-level value must be an object")

        display_name = data.get("display_name")
        if not isinstance(display_name, str):
            raise MalformedConfigError(source, "'display_name' must be a string")

        config = data.get("config")
        if not isinstance(config, list):
            raise MalformedConfigError(source, "'config' must be an array")

        spec = ConnectorSpec(
            display_name=display_name,
            description=self._string(data, "description", source),
            schema_levels=self._string_list(data, "schema_levels", source),
            debezium_connector_name=self._string(data, "debezium_connector_name", source),
            serialisation=self._string(data, "serialisation", source),
        )

        metrics = data.get("metrics") or []
        if not isinstance(metrics, list):
            raise MalformedConfigError(source, "'metrics' must be an array")
        for i, metric in enumerate(metrics):
            spec.metrics.append(self._parse_metric(metric, f"{source}: metrics[{i}]"))

        for i, raw_entry in enumerate(config):
            spec.entries.append(self._parse_entry(raw_entry, f"{source}: config[{i}]"))

        return spec

    def _parse_metric(self, data: Any, where: str) -> Metric:
        if not isinstance(data, dict):
            raise MalformedConfigError(where, "metric must be an object")
        return Metric(
            attribute=self._string(data, "attribute", where),
            context=self._string(data, "context", where),
            category=self._string(data, "category", where),
            raw=dict(data),
        )

    def _parse_entry(self, data: Any, where: str) -> ConfigEntry:
        if not isinstance(data, dict):
            raise MalformedConfigError(where, "entry must be an object")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise MalformedConfigError(where, "'name' must be a non-empty string")
        where = f"{where} ({name})"

        if not isinstance(data.get("user_defined"), bool):
            raise MalformedConfigError(where, "'user_defined' must be a boolean")

        required = data.get("required")
        if required is not None and not isinstance(required, bool):
            raise MalformedConfigError(where, "'required' must be a boolean")

        conditions = data.get("conditions") or []
        if not isinstance(conditions, list):
            raise MalformedConfigError(where, "'conditions' must be an array")

        order = data.get("order_of_display")
        if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
            raise MalformedConfigError(where, "'order_of_display' must be an integer")

        return ConfigEntry(
            name=name,
            user_defined=data["user_defined"],
            required=required,
            description=self._string(data, "description", where),
            display_name=self._string(data, "display_name", where),
            encrypt=self._bool(data, "encrypt", where),
            set_once=self._bool(data, "set_once", where),
            conditions=[self._parse_condition(c, where) for c in conditions],
            value=self._parse_value(data.get("value"), where),
            kafka_config=data.get("kafka_config"),
            tab=self._string(data, "tab", where),
            order_of_display=order,
            display_advanced=self._bool(data, "display_advanced", where),
        )

    def _parse_condition(self, data: Any, where: str) -> Condition:
        if not isinstance(data, dict):
            raise MalformedConfigError(where, "condition must be an object")
        return Condition(
            operator=self._string(data, "operator", where),
            config=self._string(data, "config", where),
            value=data.get("value"),
        )

    def _parse_value(self, data: Any, where: str) -> ValueObject:
        if not isinstance(data, dict):
            raise MalformedConfigError(where, "'value' must be an object")

        control = data.get("control")
        if not isinstance(control, str):
            raise MalformedConfigError(where, "'value.control' must be a string")

        raw_values = data.get("raw_values") or []
        if not isinstance(raw_values, list):
            raise MalformedConfigError(where, "'value.raw_values' must be an array")

        rows = data.get("rows")
        if rows is not None and (isinstance(rows, bool) or not isinstance(rows, int)):
            raise MalformedConfigError(where, "'value.rows' must be an integer")

        default = data.get("default")
        return ValueObject(
            control=control,
            type=self._string(data, "type", where),
            default=default,
            has_default=default is not None,
            raw_value=data.get("raw_value"),
            raw_values=list(raw_values),
            min=self._number(data, "min", where),
            max=self._number(data, "max", where),
            step=self._number(data, "step", where),
            readonly=self._bool(data, "readonly", where),
            placeholder=self._string(data, "placeholder", where),
            rows=rows,
            multiline=self._bool(data, "multiline", where),
            validation=data.get("validation"),
            function_name=self._string(data, "function_name", where),
            dependencies=self._string_list(data, "dependencies", where),
            early_resolved=self._string(data, "early_resolved", where),
        )

    def _string(self, data: dict[str, Any], key: str, where: str) -> str:
        value = data.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise MalformedConfigError(where, f"'{key}' must be a string")
        return value

    def _bool(self, data: dict[str, Any], key: str, where: str) -> bool:
        value = data.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise MalformedConfigError(where, f"'{key}' must be a boolean")
        return value

    def _number(self, data: dict[str, Any], key: str, where: str) -> float | None:
        value = data.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedConfigError(where, f"'{key}' must be a number")
        return value

    def _string_list(self, data: dict[str, Any], key: str, where: str) -> list[str]:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise MalformedConfigError(where, f"'{key}' must be an array of strings")
        return list(value)


def read_connector_spec(path: str | Path) -> ConnectorSpec:
    """Read a configuration file into a ConnectorSpec."""
    return ConnectorSpecParser().read(path)


def parse_connector_spec(data: Any, source: str = "<config>") -> ConnectorSpec:
    """Parse a decoded configuration document into a ConnectorSpec."""
    return ConnectorSpecParser().parse(data, source)
