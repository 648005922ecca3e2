"""
Connector configuration node definitions.

These nodes mirror a backend `configuration.latest.json` document. Polymorphic values
(defaults, raw values, condition values, kafka_config) are kept as decoded JSON and
normalized by the typed accessors below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from ..errors import FieldModelError

CONDITION_OPERATORS = {
    "EQ": "equals",
    "NE": "not equals",
    "IN": "in",
}


def scalar_to_string(value: Any) -> str:
    """Render a decoded JSON scalar the way the backend displays it.

    Integral numbers lose their decimal part (10.0 -> "10"), booleans become
    "true"/"false", strings pass through.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if value is None:
        return ""
    return str(value)


@dataclass
class Condition:
    """Conditional visibility rule. Parsed and preserved, never evaluated."""

    operator: str = ""  # "EQ", "NE", "IN"
    config: str = ""  # Backend name of the field being compared
    value: Any = None

    def operator_description(self) -> str:
        """Human-readable operator ("EQ" -> "equals"); unknown operators verbatim."""
        return CONDITION_OPERATORS.get(self.operator, self.operator)

    def value_as_string(self) -> str:
        return scalar_to_string(self.value)

    def value_as_bool(self) -> bool:
        return self.value if isinstance(self.value, bool) else False


@dataclass
class Metric:
    """Metrics definition attached to a connector (sources mostly). Opaque to generation."""

    attribute: str = ""
    context: str = ""
    category: str = ""
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValueObject:
    """Per-field value metadata."""

    control: str = ""
    type: str = ""  # "raw" or "dynamic"

    # `default` decoded as-is; has_default is False when the key is absent or null
    default: Any = None
    has_default: bool = False

    raw_value: Any = None
    raw_values: list[Any] = field(default_factory=list)

    # Slider constraints
    min: float | None = None
    max: float | None = None
    step: float | None = None

    readonly: bool = False
    placeholder: str = ""
    rows: int | None = None
    multiline: bool = False
    validation: Any = None
    function_name: str = ""
    dependencies: list[str] = field(default_factory=list)
    early_resolved: str = ""


@dataclass
class ConfigEntry:
    """One candidate field of a connector configuration."""

    name: str = ""
    user_defined: bool = False
    required: bool | None = None
    description: str = ""
    display_name: str = ""
    encrypt: bool = False
    set_once: bool = False
    conditions: list[Condition] = field(default_factory=list)
    value: ValueObject = field(default_factory=ValueObject)

    # Preserved for completeness, not consumed by generation
    kafka_config: Any = None
    tab: str = ""
    order_of_display: int | None = None
    display_advanced: bool = False

    @property
    def is_required(self) -> bool:
        return bool(self.required)

    @property
    def is_sensitive(self) -> bool:
        return self.encrypt or self.value.control == "password"

    @property
    def is_set_once(self) -> bool:
        return self.set_once

    @property
    def is_read_only(self) -> bool:
        return self.value.readonly

    @property
    def is_dynamic(self) -> bool:
        return self.value.type == "dynamic"

    @property
    def is_conditional(self) -> bool:
        return len(self.conditions) > 0

    @property
    def has_default(self) -> bool:
        return self.value.has_default

    def raw_values_as_strings(self) -> list[str]:
        """Allowed options for select controls, normalized to strings in source order."""
        return [scalar_to_string(v) for v in self.value.raw_values]

    def default_as_string(self) -> str:
        """Return the default rendered as a string.

        Raises:
            FieldModelError: If the default is an object or an array
        """
        default = self.value.default
        if isinstance(default, (dict, list)):
            raise FieldModelError(self.name, f"default {default!r} cannot be used as a string")
        return scalar_to_string(default)

    def default_as_int64(self) -> int:
        """Return the default as an integer.

        Integral floats and decimal strings are accepted ("5432" -> 5432).

        Raises:
            FieldModelError: If the default is fractional, boolean, or not a number
        """
        default = self.value.default
        if isinstance(default, bool):
            raise FieldModelError(self.name, f"boolean default {default!r} cannot be used as an integer")
        if isinstance(default, int):
            return default
        if isinstance(default, float):
            if math.isfinite(default) and default.is_integer():
                return int(default)
            raise FieldModelError(self.name, f"fractional default {default!r} cannot be used as an integer")
        if isinstance(default, str):
            try:
                return int(default.strip(), 10)
            except ValueError:
                raise FieldModelError(self.name, f"default {default!r} is not an integer") from None
        raise FieldModelError(self.name, f"default {default!r} cannot be used as an integer")

    def default_as_bool(self) -> bool:
        """Return the default as a boolean.

        Raises:
            FieldModelError: If the default is neither a boolean nor "true"/"false"
        """
        default = self.value.default
        if isinstance(default, bool):
            return default
        if isinstance(default, str) and default.lower() in ("true", "false"):
            return default.lower() == "true"
        raise FieldModelError(self.name, f"default {default!r} cannot be used as a boolean")

    def slider_min(self) -> int:
        """Slider minimum, 0 when absent. Callers gate on control == "slider"."""
        return int(self.value.min) if self.value.min is not None else 0

    def slider_max(self) -> int:
        """Slider maximum, 0 when absent."""
        return int(self.value.max) if self.value.max is not None else 0

    def slider_step(self) -> int:
        """Slider step, 1 when absent."""
        return int(self.value.step) if self.value.step is not None else 1


@dataclass
class ConnectorSpec:
    """A parsed connector configuration document."""

    display_name: str = ""
    description: str = ""
    schema_levels: list[str] = field(default_factory=list)
    debezium_connector_name: str = ""
    serialisation: str = ""
    metrics: list[Metric] = field(default_factory=list)

    # Entries in source order
    entries: list[ConfigEntry] = field(default_factory=list)

    def user_defined_entries(self) -> list[ConfigEntry]:
        """Entries the end user is expected to supply, in source order."""
        return [entry for entry in self.entries if entry.user_defined]

    def entry_by_name(self, name: str) -> ConfigEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None
