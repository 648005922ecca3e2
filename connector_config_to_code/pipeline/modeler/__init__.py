"""
Modeler module - turns connector specs into emission-ready attributes.
"""

from __future__ import annotations

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
)
from .modeler import CONTROL_KINDS, FieldModeler, connector_code_cap, scalar_kind_for_control

__all__ = [
    "AtLeastValidator",
    "AttributeSpec",
    "BetweenValidator",
    "Capabilities",
    "DefaultClause",
    "DeprecatedAlias",
    "EntityKind",
    "Header",
    "MapAttributeSpec",
    "ModelResult",
    "NestedAttributeSpec",
    "NestedModel",
    "OneOfValidator",
    "ScalarKind",
    "CONTROL_KINDS",
    "FieldModeler",
    "connector_code_cap",
    "scalar_kind_for_control",
]
