"""
Field overrides and deprecated attribute aliases.

Two optional JSON documents customize generation per connector:

- overrides.json describes map-typed attributes that cannot be derived from a
  backend control (e.g. per-table mappings).
- deprecations.json lists old attribute names kept on the model so existing
  state keeps decoding after a rename.

A missing file means no customization.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import GeneratorIOError, MalformedConfigError

MAP_STRING = "map_string"
MAP_NESTED = "map_nested"


def _text(raw: dict, key: str) -> str:
    """String field of a document entry; absent or null reads as empty."""
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _required_text(raw: dict, key: str) -> str:
    value = _text(raw, key)
    if not value:
        raise ValueError(f"'{key}' must be a non-empty string")
    return value


@dataclass
class ValidatorOverride:
    type: str = ""  # "int64_at_least"
    value: int = 0


@dataclass
class NestedFieldOverride:
    name: str = ""
    terraform_attr_name: str = ""
    type: str = ""  # "string", "int64", "bool"
    optional: bool = False
    required: bool = False
    validators: list[ValidatorOverride] = field(default_factory=list)


@dataclass
class FieldOverride:
    connector: str = ""
    entity_type: str = ""  # plural: "sources", "destinations", "transforms"
    api_field_name: str = ""
    terraform_attr_name: str = ""
    type: str = ""  # MAP_STRING or MAP_NESTED
    optional: bool = False
    description: str = ""
    nested_model_name: str = ""
    nested_fields: list[NestedFieldOverride] = field(default_factory=list)


@dataclass
class DeprecatedField:
    connector: str = ""
    entity_type: str = ""
    deprecated_attr: str = ""
    new_attr: str = ""
    type: str = ""  # "string", "int64", "bool"


@dataclass
class OverrideConfig:
    field_overrides: list[FieldOverride] = field(default_factory=list)

    def for_connector(self, connector_code: str, entity_kind: str) -> list[FieldOverride]:
        """Overrides for one connector; entity_kind is singular ("source")."""
        plural = f"{entity_kind}s"
        return [o for o in self.field_overrides if o.connector == connector_code and o.entity_type == plural]

    @staticmethod
    def from_dict(d: dict) -> OverrideConfig:
        overrides = []
        for raw in d.get("field_overrides") or []:
            nested_fields = []
            for nf in raw.get("nested_fields") or []:
                validators = [ValidatorOverride(type=_text(v, "type"), value=int(v.get("value", 0))) for v in nf.get("validators") or []]
                nested_fields.append(
                    NestedFieldOverride(
                        name=_text(nf, "name"),
                        terraform_attr_name=_text(nf, "terraform_attr_name"),
                        type=_text(nf, "type"),
                        optional=bool(nf.get("optional", False)),
                        required=bool(nf.get("required", False)),
                        validators=validators,
                    )
                )
            overrides.append(
                FieldOverride(
                    connector=_text(raw, "connector"),
                    entity_type=_text(raw, "entity_type"),
                    api_field_name=_text(raw, "api_field_name"),
                    terraform_attr_name=_text(raw, "terraform_attr_name"),
                    type=_text(raw, "type"),
                    optional=bool(raw.get("optional", False)),
                    description=_text(raw, "description"),
                    nested_model_name=_text(raw, "nested_model_name"),
                    nested_fields=nested_fields,
                )
            )
        return OverrideConfig(field_overrides=overrides)


@dataclass
class DeprecationConfig:
    deprecated_fields: list[DeprecatedField] = field(default_factory=list)

    def for_connector(self, connector_code: str, entity_kind: str) -> list[DeprecatedField]:
        plural = f"{entity_kind}s"
        return [d for d in self.deprecated_fields if d.connector == connector_code and d.entity_type == plural]

    @staticmethod
    def from_dict(d: dict) -> DeprecationConfig:
        return DeprecationConfig(
            deprecated_fields=[
                DeprecatedField(
                    connector=_text(raw, "connector"),
                    entity_type=_text(raw, "entity_type"),
                    deprecated_attr=_required_text(raw, "deprecated_attr"),
                    new_attr=_text(raw, "new_attr"),
                    type=_text(raw, "type"),
                )
                for raw in d.get("deprecated_fields") or []
            ]
        )


def _load_document(path: Path) -> dict[str, Any] | None:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise GeneratorIOError(path, f"failed to read file: {e.strerror or e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedConfigError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedConfigError(path, "top-level value must be an object")
    return data


def load_overrides(path: str | Path) -> OverrideConfig:
    """Load overrides.json; a missing file yields an empty configuration."""
    path = Path(path)
    data = _load_document(path)
    if data is None:
        return OverrideConfig()
    try:
        return OverrideConfig.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedConfigError(path, f"invalid field override: {e}") from e


def load_deprecations(path: str | Path) -> DeprecationConfig:
    """Load deprecations.json; a missing file yields an empty configuration."""
    path = Path(path)
    data = _load_document(path)
    if data is None:
        return DeprecationConfig()
    try:
        return DeprecationConfig.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedConfigError(path, f"invalid deprecated field: {e}") from e
