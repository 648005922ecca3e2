"""
Field modeler.

Phase 2 of the pipeline: turn a ConnectorSpec into the ordered attribute list the
backend emits, plus the capability flags that decide which imports are needed.

The modeler is pure: it reads the spec and the override configuration and returns
a fresh ModelResult, raising FieldModelError for entries it cannot model.
"""

from __future__ import annotations

from ...utils import attribute_name, go_quote, lowercase_first, to_pascal_case
from ..connector_spec.nodes import ConfigEntry, ConnectorSpec
from ..errors import FieldModelError
from ..overrides import MAP_NESTED, MAP_STRING, DeprecatedField, DeprecationConfig, FieldOverride, OverrideConfig
from .ir_nodes import (
    AtLeastValidator,
    AttributeSpec,
    BetweenValidator,
    Capabilities,
    DefaultClause,
    DeprecatedAlias,
    EntityKind,
    Header,
    MapAttributeSpec,
    ModelResult,
    NestedAttributeSpec,
    NestedModel,
    OneOfValidator,
    ScalarKind,
    Validator,
)

# Backend control -> scalar kind. Anything else is treated as a plain string.
CONTROL_KINDS = {
    "string": ScalarKind.STRING,
    "password": ScalarKind.STRING,
    "textarea": ScalarKind.STRING,
    "json": ScalarKind.STRING,
    "datetime": ScalarKind.STRING,
    "number": ScalarKind.INT,
    "slider": ScalarKind.INT,
    "boolean": ScalarKind.BOOL,
    "toggle": ScalarKind.BOOL,
    "one-select": ScalarKind.STRING,
    "multi-select": ScalarKind.LIST_OF_STRING,
}

# Scalar kinds accepted in override and deprecation documents
OVERRIDE_KINDS = {
    "string": ScalarKind.STRING,
    "int64": ScalarKind.INT,
    "bool": ScalarKind.BOOL,
}

# Backend entry replaced by the synthetic `name` attribute on transforms
TRANSFORM_NAME_ENTRY = "transforms.name"

SENSITIVE_NOTE = " This value is sensitive and will not appear in logs or CLI output."
SENSITIVE_MARKDOWN_NOTE = "\n\n**Security:** This value is marked sensitive and will not appear in CLI output or logs."


def scalar_kind_for_control(control: str) -> ScalarKind:
    return CONTROL_KINDS.get(control, ScalarKind.STRING)


def connector_code_cap(connector_code: str) -> str:
    """PascalCase form of a connector code ("sql-server" -> "SqlServer")."""
    return to_pascal_case(connector_code)


class FieldModeler:
    """Builds the attribute list for one entity kind."""

    def __init__(
        self,
        entity_kind: EntityKind | str,
        overrides: OverrideConfig | None = None,
        deprecations: DeprecationConfig | None = None,
        reserved_names: tuple[str, ...] = (),
    ):
        """
        Initialize the modeler.

        Args:
            entity_kind: source, destination or transform
            overrides: Map-field overrides (None = no overrides)
            deprecations: Deprecated attribute aliases (None = none)
            reserved_names: Attribute names taken by fields the backend adds itself (e.g. "timeouts")
        """
        self.entity_kind = EntityKind(entity_kind)
        self.overrides = overrides or OverrideConfig()
        self.deprecations = deprecations or DeprecationConfig()
        self.reserved_names = tuple(reserved_names)

    def model(self, spec: ConnectorSpec, connector_code: str) -> ModelResult:
        """
        Model a connector.

        Args:
            spec: The parsed connector configuration
            connector_code: Connector identifier (e.g. "postgresql")

        Returns:
            ModelResult with header, attributes in emission order, and capabilities

        Raises:
            FieldModelError: If an entry cannot be modeled or attribute names collide
        """
        result = ModelResult(
            header=Header(
                entity_kind=self.entity_kind,
                connector_code=connector_code,
                code_cap=connector_code_cap(connector_code),
                display_name=spec.display_name,
            ),
            capabilities=Capabilities(),
        )

        overrides = self.overrides.for_connector(connector_code, self.entity_kind.value)
        overridden = {o.api_field_name for o in overrides}

        attributes = self.common_attributes()
        for entry in spec.user_defined_entries():
            if self.entity_kind is EntityKind.TRANSFORM and entry.name == TRANSFORM_NAME_ENTRY:
                continue
            if entry.name in overridden:
                continue
            attributes.append(self.entry_to_attribute(entry))

        seen: dict[str, str] = {}
        seen_models: dict[str, str] = {}
        for name in self.reserved_names:
            seen[name] = seen_models[to_pascal_case(name)] = "reserved field"
        for attr in attributes:
            self._claim_name(seen, seen_models, attr.attr_name, attr.model_name, attr.api_name or attr.attr_name)
            result.capabilities.record(attr)
        result.attributes = attributes

        for override in overrides:
            map_attr = self.override_to_map_attribute(override)
            self._claim_name(seen, seen_models, map_attr.attr_name, map_attr.model_name, override.api_field_name or map_attr.attr_name)
            result.map_attributes.append(map_attr)
            result.capabilities.record_map(map_attr)
            if map_attr.is_nested and map_attr.nested_attributes:
                result.nested_models.append(NestedModel(name=map_attr.nested_model, fields=list(map_attr.nested_attributes)))

        for dep in self.deprecations.for_connector(connector_code, self.entity_kind.value):
            alias = self.deprecation_to_alias(dep)
            self._claim_name(seen, seen_models, alias.attr_name, alias.model_name, alias.attr_name)
            result.deprecated_aliases.append(alias)

        return result

    def _claim_name(self, seen: dict[str, str], seen_models: dict[str, str], attr_name: str, model_name: str, owner: str) -> None:
        if attr_name in seen:
            raise FieldModelError(owner, f"attribute name '{attr_name}' is already used by '{seen[attr_name]}'")
        if model_name in seen_models:
            raise FieldModelError(owner, f"model field '{model_name}' is already used by '{seen_models[model_name]}'")
        seen[attr_name] = owner
        seen_models[model_name] = owner

    def common_attributes(self) -> list[AttributeSpec]:
        """Synthetic attributes present on every resource: id, name, connector/transform_type."""
        kind = self.entity_kind.value
        attributes = [
            self._synthetic("id", f"Unique identifier for the {kind}", computed=True),
            self._synthetic("name", f"Name of the {kind}", required=True),
        ]
        if self.entity_kind is EntityKind.TRANSFORM:
            attributes.append(self._synthetic("transform_type", "Transform type", computed=True))
        else:
            attributes.append(self._synthetic("connector", "Connector type", computed=True))
        return attributes

    def _synthetic(self, attr_name: str, description: str, required: bool = False, computed: bool = False) -> AttributeSpec:
        return AttributeSpec(
            model_name=to_pascal_case(attr_name),
            attr_name=attr_name,
            scalar_kind=ScalarKind.STRING,
            required=required,
            computed=computed,
            description=description,
            markdown_description=description,
            state_for_unknown=computed,
        )

    def entry_to_attribute(self, entry: ConfigEntry) -> AttributeSpec:
        """
        Model one user-defined entry.

        Args:
            entry: The config entry

        Returns:
            The attribute, with descriptions augmented in order: default note,
            valid-values note, sensitivity note
        """
        attr_name = attribute_name(entry.name)
        control = entry.value.control
        known_control = control in CONTROL_KINDS
        kind = scalar_kind_for_control(control)
        if entry.is_sensitive and kind is not ScalarKind.STRING:
            raise FieldModelError(entry.name, f"{kind.value} attributes cannot be sensitive")

        attr = AttributeSpec(
            model_name=to_pascal_case(attr_name),
            attr_name=attr_name,
            api_name=entry.name,
            scalar_kind=kind,
            sensitive=entry.is_sensitive,
            requires_replace=entry.is_set_once,
        )

        description = entry.description or entry.display_name
        markdown = description

        # Unknown controls carry no default
        has_default = entry.has_default and known_control

        if entry.is_required and not has_default:
            attr.required = True
        elif has_default and kind.admits_default:
            attr.optional = True
            attr.computed = True
            attr.default = self.default_clause(entry, kind)
            plain, md = self._default_note(attr.default)
            description += plain
            markdown += md
        else:
            attr.optional = True

        if control == "one-select":
            values = entry.raw_values_as_strings()
            if values:
                attr.validators.append(OneOfValidator(values=tuple(values)))
                description += " Valid values: " + ", ".join(values) + "."
                markdown += " Valid values: " + ", ".join(f"`{v}`" for v in values) + "."
        elif control == "slider" and entry.value.min is not None and entry.value.max is not None:
            attr.validators.append(BetweenValidator(minimum=entry.slider_min(), maximum=entry.slider_max()))

        if attr.sensitive:
            description += SENSITIVE_NOTE
            markdown += SENSITIVE_MARKDOWN_NOTE

        attr.description = description
        attr.markdown_description = markdown
        return attr

    def default_clause(self, entry: ConfigEntry, kind: ScalarKind) -> DefaultClause:
        """Convert the entry's default to the literal of its scalar kind."""
        if kind is ScalarKind.STRING:
            return DefaultClause(kind, entry.default_as_string())
        if kind is ScalarKind.INT:
            return DefaultClause(kind, entry.default_as_int64())
        if kind is ScalarKind.BOOL:
            return DefaultClause(kind, entry.default_as_bool())
        raise FieldModelError(entry.name, f"{kind.value} attributes cannot have a default")

    def _default_note(self, default: DefaultClause) -> tuple[str, str]:
        if default.kind is ScalarKind.STRING:
            return f" Defaults to {go_quote(default.value)}.", f" Defaults to `{default.value}`."
        if default.kind is ScalarKind.BOOL:
            literal = "true" if default.value else "false"
        else:
            literal = str(default.value)
        return f" Defaults to {literal}.", f" Defaults to `{literal}`."

    def override_to_map_attribute(self, override: FieldOverride) -> MapAttributeSpec:
        """Model a map-typed override."""
        owner = override.api_field_name or override.terraform_attr_name
        if not override.terraform_attr_name:
            raise FieldModelError(owner, "override has no terraform_attr_name")

        attr = MapAttributeSpec(
            model_name=to_pascal_case(override.terraform_attr_name),
            attr_name=override.terraform_attr_name,
            api_name=override.api_field_name,
            optional=override.optional,
            description=override.description,
            markdown_description=override.description,
        )

        if override.type == MAP_STRING:
            return attr
        if override.type != MAP_NESTED:
            raise FieldModelError(owner, f"unsupported override type '{override.type}'")

        attr.nested_model = lowercase_first(override.nested_model_name)
        if not attr.nested_model:
            raise FieldModelError(owner, "map_nested override has no nested_model_name")
        for nf in override.nested_fields:
            kind = OVERRIDE_KINDS.get(nf.type)
            if kind is None:
                raise FieldModelError(owner, f"unsupported nested field type '{nf.type}' for '{nf.terraform_attr_name}'")
            validators: list[Validator] = []
            for v in nf.validators:
                if v.type == "int64_at_least" and kind is ScalarKind.INT:
                    validators.append(AtLeastValidator(minimum=v.value))
                else:
                    raise FieldModelError(owner, f"unsupported validator '{v.type}' for {kind.value} field '{nf.terraform_attr_name}'")
            attr.nested_attributes.append(
                NestedAttributeSpec(
                    attr_name=nf.terraform_attr_name,
                    model_name=to_pascal_case(nf.terraform_attr_name),
                    scalar_kind=kind,
                    optional=nf.optional,
                    required=nf.required,
                    validators=validators,
                )
            )
        return attr

    def deprecation_to_alias(self, dep: DeprecatedField) -> DeprecatedAlias:
        if not dep.deprecated_attr:
            raise FieldModelError(dep.new_attr or dep.connector, "deprecated field has no deprecated_attr")
        return DeprecatedAlias(
            model_name=to_pascal_case(dep.deprecated_attr),
            attr_name=dep.deprecated_attr,
            scalar_kind=OVERRIDE_KINDS.get(dep.type, ScalarKind.STRING),
            new_attr=dep.new_attr,
        )
