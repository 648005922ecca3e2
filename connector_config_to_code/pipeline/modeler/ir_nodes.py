"""
IR (Intermediate Representation) node definitions.

These nodes describe a connector's schema after modeling: every attribute has its
final name, scalar kind, required/optional/computed state, default and validators.
Literal syntax is left to the backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ...utils import capitalize_first


class EntityKind(str, Enum):
    """Kind of connector entity; selects the synthetic common attributes."""

    SOURCE = "source"
    DESTINATION = "destination"
    TRANSFORM = "transform"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


class ScalarKind(Enum):
    """Kind of value an attribute holds."""

    STRING = "string"
    INT = "int64"
    BOOL = "bool"
    LIST_OF_STRING = "list"

    @property
    def admits_default(self) -> bool:
        """Lists have no literal default clause."""
        return self is not ScalarKind.LIST_OF_STRING


@dataclass(frozen=True)
class DefaultClause:
    """A static default: the kind selects the clause, value is the literal."""

    kind: ScalarKind
    value: str | int | bool


@dataclass(frozen=True)
class OneOfValidator:
    values: tuple[str, ...]


@dataclass(frozen=True)
class BetweenValidator:
    minimum: int
    maximum: int


@dataclass(frozen=True)
class AtLeastValidator:
    minimum: int


Validator = OneOfValidator | BetweenValidator | AtLeastValidator


@dataclass
class AttributeSpec:
    """A scalar schema attribute, ready for emission."""

    model_name: str = ""  # e.g. "DatabaseHostname"
    attr_name: str = ""  # e.g. "database_hostname"
    api_name: str = ""  # Backend name; empty for synthetic attributes
    scalar_kind: ScalarKind = ScalarKind.STRING

    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False

    description: str = ""
    markdown_description: str = ""

    default: DefaultClause | None = None
    validators: list[Validator] = field(default_factory=list)

    # Plan modifiers
    state_for_unknown: bool = False
    requires_replace: bool = False

    @property
    def is_computed_only(self) -> bool:
        return self.computed and not self.optional and not self.required


@dataclass
class NestedAttributeSpec:
    """An attribute inside a nested map object."""

    attr_name: str = ""
    model_name: str = ""
    scalar_kind: ScalarKind = ScalarKind.STRING
    optional: bool = False
    required: bool = False
    validators: list[Validator] = field(default_factory=list)


@dataclass
class NestedModel:
    """A struct type backing the values of a nested map attribute."""

    name: str = ""
    fields: list[NestedAttributeSpec] = field(default_factory=list)


@dataclass
class MapAttributeSpec:
    """A map-typed attribute coming from a field override."""

    model_name: str = ""
    attr_name: str = ""
    api_name: str = ""
    optional: bool = False
    description: str = ""
    markdown_description: str = ""

    # Name of the nested model for map_nested; None for map[string]string
    nested_model: str | None = None
    nested_attributes: list[NestedAttributeSpec] = field(default_factory=list)

    @property
    def is_nested(self) -> bool:
        return self.nested_model is not None


@dataclass
class DeprecatedAlias:
    """A model-only field kept for backward compatibility."""

    model_name: str = ""
    attr_name: str = ""
    scalar_kind: ScalarKind = ScalarKind.STRING
    new_attr: str = ""


@dataclass
class Header:
    """Names derived from the entity kind and connector code."""

    entity_kind: EntityKind = EntityKind.SOURCE
    connector_code: str = ""
    code_cap: str = ""  # e.g. "Postgresql"
    display_name: str = ""

    @property
    def entity_cap(self) -> str:
        return capitalize_first(self.entity_kind.value)

    @property
    def model_name(self) -> str:
        return f"{self.entity_cap}{self.code_cap}Model"

    @property
    def schema_func_name(self) -> str:
        return f"{self.entity_cap}{self.code_cap}Schema"

    @property
    def mapping_name(self) -> str:
        return f"{self.entity_cap}{self.code_cap}FieldMappings"


@dataclass
class Capabilities:
    """Which emission fragments the output needs, per scalar kind.

    Built from the attributes themselves so the backend imports exactly what it uses.
    """

    defaults: set[ScalarKind] = field(default_factory=set)
    validators: set[ScalarKind] = field(default_factory=set)
    state_for_unknown: set[ScalarKind] = field(default_factory=set)
    requires_replace: set[ScalarKind] = field(default_factory=set)

    # Whether a list attribute needs the element-type symbol
    list_element_type: bool = False

    # Whether map attributes are present (map_string needs the element-type symbol too)
    map_attributes: bool = False

    @property
    def plan_modifiers(self) -> set[ScalarKind]:
        return self.state_for_unknown | self.requires_replace

    def record(self, attr: AttributeSpec) -> None:
        """Fold one attribute's needs into the flags."""
        kind = attr.scalar_kind
        if attr.default is not None:
            self.defaults.add(kind)
        if attr.validators:
            self.validators.add(kind)
        if attr.state_for_unknown:
            self.state_for_unknown.add(kind)
        if attr.requires_replace:
            self.requires_replace.add(kind)
        if kind is ScalarKind.LIST_OF_STRING:
            self.list_element_type = True

    def record_map(self, attr: MapAttributeSpec) -> None:
        self.map_attributes = True
        for nested in attr.nested_attributes:
            if nested.validators:
                self.validators.add(nested.scalar_kind)


@dataclass
class ModelResult:
    """Everything the backend needs to render one connector."""

    header: Header = field(default_factory=Header)
    attributes: list[AttributeSpec] = field(default_factory=list)
    map_attributes: list[MapAttributeSpec] = field(default_factory=list)
    nested_models: list[NestedModel] = field(default_factory=list)
    deprecated_aliases: list[DeprecatedAlias] = field(default_factory=list)
    capabilities: Capabilities = field(default_factory=Capabilities)
