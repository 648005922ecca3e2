"""
Go backend for Terraform plugin framework schemas.

Renders a ModelResult into a Go file holding the resource model struct, the schema
function and the attribute-to-API field mapping table.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from ...utils import go_quote
from ..modeler.ir_nodes import (
    AtLeastValidator,
    AttributeSpec,
    BetweenValidator,
    DefaultClause,
    DeprecatedAlias,
    MapAttributeSpec,
    ModelResult,
    NestedAttributeSpec,
    OneOfValidator,
    ScalarKind,
    Validator,
)
from .base import CodeBackend

FRAMEWORK = "github.com/hashicorp/terraform-plugin-framework"
FRAMEWORK_VALIDATORS = "github.com/hashicorp/terraform-plugin-framework-validators"
FRAMEWORK_TIMEOUTS = "github.com/hashicorp/terraform-plugin-framework-timeouts/resource/timeouts"


class GoKind(NamedTuple):
    model_type: str  # e.g. "types.String"
    schema_type: str  # e.g. "schema.StringAttribute"
    type_name: str  # e.g. "String" for []validator.String / []planmodifier.String
    package_prefix: str  # e.g. "string" for stringdefault / stringvalidator / stringplanmodifier


class GoBackend(CodeBackend):
    """Backend emitting Terraform plugin framework Go code."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    TYPE_MAP: dict[ScalarKind, GoKind] = {
        ScalarKind.STRING: GoKind("types.String", "schema.StringAttribute", "String", "string"),
        ScalarKind.INT: GoKind("types.Int64", "schema.Int64Attribute", "Int64", "int64"),
        ScalarKind.BOOL: GoKind("types.Bool", "schema.BoolAttribute", "Bool", "bool"),
        ScalarKind.LIST_OF_STRING: GoKind("types.List", "schema.ListAttribute", "List", "list"),
    }

    def generate(self, result: ModelResult) -> str:
        """
        Generate the Go source for one connector.

        Args:
            result: The modeled connector

        Returns:
            Unformatted Go source
        """
        context = self._prepare_context(result)
        parts = [
            self.prefix_template.render(context),
            self.model_template.render(context),
            self.schema_template.render(context),
            self.suffix_template.render(context),
        ]
        return "\n".join(part.strip("\n") + "\n" for part in parts)

    def imports(self, result: ModelResult) -> list[str]:
        caps = result.capabilities
        imports = {
            f"{FRAMEWORK}/resource/schema",
            f"{FRAMEWORK}/types",
        }
        if self.config.add_timeouts:
            imports.add(FRAMEWORK_TIMEOUTS)

        for kind in caps.defaults:
            imports.add(f"{FRAMEWORK}/resource/schema/{self.TYPE_MAP[kind].package_prefix}default")

        for kind in caps.validators:
            imports.add(f"{FRAMEWORK_VALIDATORS}/{self.TYPE_MAP[kind].package_prefix}validator")
            imports.add(f"{FRAMEWORK}/schema/validator")

        for kind in caps.plan_modifiers:
            imports.add(f"{FRAMEWORK}/resource/schema/planmodifier")
            imports.add(f"{FRAMEWORK}/resource/schema/{self.TYPE_MAP[kind].package_prefix}planmodifier")

        return sorted(imports)

    def render_default(self, default: DefaultClause) -> str:
        if default.kind is ScalarKind.STRING:
            return f"stringdefault.StaticString({go_quote(str(default.value))})"
        if default.kind is ScalarKind.INT:
            return f"int64default.StaticInt64({int(default.value)})"
        if default.kind is ScalarKind.BOOL:
            return f"booldefault.StaticBool({'true' if default.value else 'false'})"
        raise ValueError(f"no default clause for {default.kind}")

    def render_validator(self, validator: Validator, kind: ScalarKind) -> str:
        prefix = self.TYPE_MAP[kind].package_prefix
        if isinstance(validator, OneOfValidator):
            return f"{prefix}validator.OneOf({', '.join(go_quote(v) for v in validator.values)})"
        if isinstance(validator, BetweenValidator):
            return f"{prefix}validator.Between({validator.minimum}, {validator.maximum})"
        if isinstance(validator, AtLeastValidator):
            return f"{prefix}validator.AtLeast({validator.minimum})"
        raise ValueError(f"unsupported validator {validator!r}")

    def _prepare_context(self, result: ModelResult) -> dict[str, Any]:
        """
        Prepare the template context for a connector.

        Args:
            result: The modeled connector

        Returns:
            Dictionary of template variables
        """
        header = result.header
        entity = header.entity_kind.value
        display_name = header.display_name

        markdown = (
            f"Manages a **{display_name} {entity} connector**.\n\n"
            f"This resource creates and manages a {display_name} {entity} for {self.config.platform_name} data pipelines."
        )
        if self.config.documentation_url:
            markdown += f"\n\n[Documentation]({self.config.documentation_url})"

        mappings = [(a.attr_name, a.api_name) for a in result.attributes if a.api_name]
        mappings += [(m.attr_name, m.api_name) for m in result.map_attributes if m.api_name]

        return {
            "generator_name": self.config.generator_name,
            "package_name": self.config.package_name,
            "imports": self.imports(result),
            "entity_kind": entity,
            "connector_code": header.connector_code,
            "model_name": header.model_name,
            "schema_func_name": header.schema_func_name,
            "mapping_name": header.mapping_name,
            "description": go_quote(f"Manages a {display_name} {entity} connector."),
            "markdown_description": go_quote(markdown),
            "attributes": [self._prepare_attribute_context(a) for a in result.attributes],
            "map_attributes": [self._prepare_map_context(m) for m in result.map_attributes],
            "nested_models": [
                {"name": model.name, "fields": [self._prepare_nested_context(f) for f in model.fields]} for model in result.nested_models
            ],
            "deprecated_aliases": [self._prepare_alias_context(d) for d in result.deprecated_aliases],
            "add_timeouts": self.config.add_timeouts,
            "mappings": mappings,
        }

    def _prepare_attribute_context(self, attr: AttributeSpec) -> dict[str, Any]:
        go_kind = self.TYPE_MAP[attr.scalar_kind]

        plan_modifiers = []
        if attr.state_for_unknown:
            plan_modifiers.append(f"{go_kind.package_prefix}planmodifier.UseStateForUnknown()")
        if attr.requires_replace:
            plan_modifiers.append(f"{go_kind.package_prefix}planmodifier.RequiresReplace()")

        return {
            "model_name": attr.model_name,
            "attr_name": attr.attr_name,
            "go_type": go_kind.model_type,
            "schema_type": go_kind.schema_type,
            "type_name": go_kind.type_name,
            "required": attr.required,
            "optional": attr.optional,
            "computed": attr.computed,
            "sensitive": attr.sensitive,
            "element_type": attr.scalar_kind is ScalarKind.LIST_OF_STRING,
            "description": go_quote(attr.description) if attr.description else "",
            "markdown_description": go_quote(attr.markdown_description),
            "default": self.render_default(attr.default) if attr.default is not None else "",
            "validators": [self.render_validator(v, attr.scalar_kind) for v in attr.validators],
            "plan_modifiers": plan_modifiers,
        }

    def _prepare_map_context(self, attr: MapAttributeSpec) -> dict[str, Any]:
        if attr.is_nested:
            go_type = f"map[string]{attr.nested_model}"
        else:
            go_type = "map[string]types.String"
        return {
            "model_name": attr.model_name,
            "attr_name": attr.attr_name,
            "go_type": go_type,
            "nested": attr.is_nested,
            "optional": "true" if attr.optional else "false",
            "description": go_quote(attr.description),
            "markdown_description": go_quote(attr.markdown_description),
            "nested_attributes": [self._prepare_nested_context(n) for n in attr.nested_attributes],
        }

    def _prepare_nested_context(self, attr: NestedAttributeSpec) -> dict[str, Any]:
        go_kind = self.TYPE_MAP[attr.scalar_kind]
        return {
            "model_name": attr.model_name,
            "attr_name": attr.attr_name,
            "go_type": go_kind.model_type,
            "schema_type": go_kind.schema_type,
            "type_name": go_kind.type_name,
            "optional": attr.optional,
            "required": attr.required,
            "validators": [self.render_validator(v, attr.scalar_kind) for v in attr.validators],
        }

    def _prepare_alias_context(self, alias: DeprecatedAlias) -> dict[str, Any]:
        return {
            "model_name": alias.model_name,
            "attr_name": alias.attr_name,
            "go_type": self.TYPE_MAP[alias.scalar_kind].model_type,
        }
