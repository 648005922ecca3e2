"""
Tests for map-field overrides and deprecated aliases.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from connector_config_to_code.pipeline import (
    CodeGeneratorConfig,
    DeprecationConfig,
    FieldModelError,
    GeneratorIOError,
    MalformedConfigError,
    OverrideConfig,
    load_deprecations,
    load_overrides,
)
from connector_config_to_code.pipeline.backends import GoBackend
from connector_config_to_code.pipeline.connector_spec import read_connector_spec
from connector_config_to_code.pipeline.modeler import AtLeastValidator, FieldModeler, ScalarKind
from connector_config_to_code.pipeline.overrides import DeprecatedField

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def spec():
    return read_connector_spec(TEST_DATA / "configuration.latest.json")


@pytest.fixture
def overrides():
    return load_overrides(TEST_DATA / "overrides.json")


@pytest.fixture
def deprecations():
    return load_deprecations(TEST_DATA / "deprecations.json")


class TestLoading:
    """Test cases for reading override documents"""

    def test_missing_files_are_empty(self, tmp_path):
        assert load_overrides(tmp_path / "overrides.json") == OverrideConfig()
        assert load_deprecations(tmp_path / "deprecations.json") == DeprecationConfig()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "overrides.json"
        path.write_text("[1, 2")
        with pytest.raises(MalformedConfigError):
            load_overrides(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "deprecations.json"
        path.write_text("[]")
        with pytest.raises(MalformedConfigError, match="must be an object"):
            load_deprecations(path)

    def test_directory_is_io_error(self, tmp_path):
        with pytest.raises(GeneratorIOError):
            load_overrides(tmp_path)

    def test_filters_by_connector_and_entity(self, overrides, deprecations):
        assert [o.terraform_attr_name for o in overrides.for_connector("postgresql", "source")] == [
            "table_topic_map",
            "snapshot_custom_table_config",
        ]
        assert overrides.for_connector("postgresql", "destination") == []
        assert [o.terraform_attr_name for o in overrides.for_connector("snowflake", "destination")] == ["topic_table_map"]
        assert [d.deprecated_attr for d in deprecations.for_connector("postgresql", "destination")] == ["schema_evolution_mode"]

    def test_nested_fields_parsed(self, overrides):
        nested = overrides.for_connector("postgresql", "source")[1]
        assert nested.nested_model_name == "SnapshotTableConfigModel"
        assert nested.nested_fields[0].validators[0].type == "int64_at_least"
        assert nested.nested_fields[0].validators[0].value == 1
        assert nested.nested_fields[1].required is True


class TestMapAttributes:
    """Test cases for modeling overrides"""

    def test_overridden_entries_become_maps(self, spec, overrides):
        result = FieldModeler("source", overrides).model(spec, "postgresql")
        names = [m.attr_name for m in result.map_attributes]
        assert names == ["table_topic_map", "snapshot_custom_table_config"]
        assert "snapshot_custom_table_config" not in [a.attr_name for a in result.attributes]
        assert result.capabilities.map_attributes

    def test_map_string(self, spec, overrides):
        result = FieldModeler("source", overrides).model(spec, "postgresql")
        string_map = result.map_attributes[0]
        assert not string_map.is_nested
        assert string_map.model_name == "TableTopicMap"
        assert string_map.api_name == "table.topic.map"
        assert string_map.optional

    def test_map_nested(self, spec, overrides):
        result = FieldModeler("source", overrides).model(spec, "postgresql")
        nested = result.map_attributes[1]
        assert nested.is_nested
        assert nested.nested_model == "snapshotTableConfigModel"
        chunks, filter_field = nested.nested_attributes
        assert chunks.scalar_kind is ScalarKind.INT
        assert chunks.validators == [AtLeastValidator(minimum=1)]
        assert filter_field.required
        assert [m.name for m in result.nested_models] == ["snapshotTableConfigModel"]
        assert ScalarKind.INT in result.capabilities.validators

    def test_unsupported_override_type(self, spec):
        config = OverrideConfig.from_dict(
            {"field_overrides": [{"connector": "postgresql", "entity_type": "sources", "api_field_name": "x", "terraform_attr_name": "x", "type": "map_list"}]}
        )
        with pytest.raises(FieldModelError, match="map_list"):
            FieldModeler("source", config).model(spec, "postgresql")

    def test_unsupported_validator(self, spec):
        config = OverrideConfig.from_dict(
            {
                "field_overrides": [
                    {
                        "connector": "postgresql",
                        "entity_type": "sources",
                        "api_field_name": "x",
                        "terraform_attr_name": "x",
                        "type": "map_nested",
                        "nested_model_name": "XModel",
                        "nested_fields": [{"terraform_attr_name": "n", "type": "string", "validators": [{"type": "int64_at_least", "value": 1}]}],
                    }
                ]
            }
        )
        with pytest.raises(FieldModelError, match="unsupported validator"):
            FieldModeler("source", config).model(spec, "postgresql")

    def test_override_name_collision(self, spec):
        config = OverrideConfig.from_dict(
            {
                "field_overrides": [
                    {"connector": "postgresql", "entity_type": "sources", "api_field_name": "other", "terraform_attr_name": "database_hostname", "type": "map_string"}
                ]
            }
        )
        with pytest.raises(FieldModelError, match="database_hostname"):
            FieldModeler("source", config).model(spec, "postgresql")


class TestDeprecatedAliases:
    """Test cases for deprecated model fields"""

    def test_aliases(self, spec, deprecations):
        result = FieldModeler("source", deprecations=deprecations).model(spec, "postgresql")
        assert len(result.deprecated_aliases) == 1
        alias = result.deprecated_aliases[0]
        assert alias.attr_name == "insert_static_key_field_1"
        assert alias.model_name == "InsertStaticKeyField1"
        assert alias.new_attr == "insert_static_key_field"
        assert alias.scalar_kind is ScalarKind.STRING

    def test_aliases_are_not_schema_attributes(self, spec, deprecations):
        result = FieldModeler("source", deprecations=deprecations).model(spec, "postgresql")
        assert "insert_static_key_field_1" not in [a.attr_name for a in result.attributes]

    @pytest.mark.parametrize("deprecated_attr", [None, ""])
    def test_deprecated_attr_required(self, tmp_path, deprecated_attr):
        path = tmp_path / "deprecations.json"
        path.write_text(
            json.dumps({"deprecated_fields": [{"connector": "postgresql", "entity_type": "sources", "deprecated_attr": deprecated_attr, "new_attr": "x"}]})
        )
        with pytest.raises(MalformedConfigError, match="deprecated_attr"):
            load_deprecations(path)

    def test_empty_alias_rejected_by_modeler(self, spec):
        config = DeprecationConfig(deprecated_fields=[DeprecatedField(connector="postgresql", entity_type="sources", new_attr="x")])
        with pytest.raises(FieldModelError, match="deprecated_attr"):
            FieldModeler("source", deprecations=config).model(spec, "postgresql")


class TestNullAndMistypedFields:
    """Test cases for null or wrongly typed values in override documents"""

    def test_null_strings_read_as_empty(self, tmp_path, spec):
        path = tmp_path / "overrides.json"
        override = {
            "connector": "postgresql",
            "entity_type": "sources",
            "api_field_name": "table.topic.map",
            "terraform_attr_name": "table_topic_map",
            "type": "map_string",
            "optional": True,
            "description": None,
            "nested_model_name": None,
        }
        path.write_text(json.dumps({"field_overrides": [override]}))
        config = load_overrides(path)
        assert config.field_overrides[0].description == ""
        result = FieldModeler("source", config).model(spec, "postgresql")
        code = GoBackend(CodeGeneratorConfig()).generate(result)
        assert '"table_topic_map": schema.MapAttribute{' in code

    def test_null_nested_field_type_is_a_model_error(self, tmp_path, spec):
        path = tmp_path / "overrides.json"
        override = {
            "connector": "postgresql",
            "entity_type": "sources",
            "terraform_attr_name": "x",
            "type": "map_nested",
            "nested_model_name": "XModel",
            "nested_fields": [{"name": None, "terraform_attr_name": "n", "type": None}],
        }
        path.write_text(json.dumps({"field_overrides": [override]}))
        with pytest.raises(FieldModelError, match="nested field type"):
            FieldModeler("source", load_overrides(path)).model(spec, "postgresql")

    @pytest.mark.parametrize("key", ["description", "api_field_name", "nested_model_name", "type"])
    def test_non_string_is_malformed(self, tmp_path, key):
        path = tmp_path / "overrides.json"
        override = {"connector": "postgresql", "entity_type": "sources", "terraform_attr_name": "x", "type": "map_string", key: 12}
        path.write_text(json.dumps({"field_overrides": [override]}))
        with pytest.raises(MalformedConfigError, match=key):
            load_overrides(path)


if __name__ == "__main__":
    pytest.main([__file__])
