"""
Tests for the end-to-end pipeline: formatting and output files.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from connector_config_to_code.pipeline import CodeGeneratorConfig, FieldModelError, FormatterError, GeneratorIOError, PipelineGenerator
from connector_config_to_code.pipeline.config import FormatterConfig
from connector_config_to_code.pipeline.connector_spec import parse_connector_spec
from connector_config_to_code.pipeline.formatters import Formatter, GofmtFormatter
from connector_config_to_code.pipeline.writer import AtomicWriter, unformatted_path

TEST_DATA = Path(__file__).parent / "test_data"
SAMPLE = TEST_DATA / "configuration.latest.json"


class MarkingFormatter(Formatter):
    """Formatter that counts its calls and appends a marker."""

    def __init__(self):
        self.calls = 0

    def is_available(self, config):
        return True

    def format(self, code, config):
        self.calls += 1
        return code + "// formatted\n"


class FailingFormatter(Formatter):
    def is_available(self, config):
        return True

    def format(self, code, config):
        raise FormatterError("1:1: expected 'package', found 'EOF'")


class TestPipelineGenerator:
    """Test cases for writing generated files"""

    def test_writes_formatted_file(self, tmp_path):
        formatter = MarkingFormatter()
        generator = PipelineGenerator("source", formatter=formatter)
        path = generator.generate_from_file(SAMPLE, "postgresql", tmp_path / "out")
        assert path == tmp_path / "out" / "source_postgresql.go"
        content = path.read_text()
        assert content.startswith("// Code generated by connector_config_to_code. DO NOT EDIT.")
        assert content.endswith("// formatted\n")
        assert formatter.calls == 1

    def test_no_temporary_files_left(self, tmp_path):
        PipelineGenerator("source", formatter=MarkingFormatter()).generate_from_file(SAMPLE, "postgresql", tmp_path)
        assert [p.name for p in tmp_path.iterdir()] == ["source_postgresql.go"]

    def test_formatting_disabled(self, tmp_path):
        config = CodeGeneratorConfig()
        config.formatter.enabled = False
        formatter = MarkingFormatter()
        path = PipelineGenerator("source", config, formatter=formatter).generate_from_file(SAMPLE, "postgresql", tmp_path)
        assert formatter.calls == 0
        assert not path.read_text().endswith("// formatted\n")

    def test_formatter_failure_leaves_draft(self, tmp_path):
        generator = PipelineGenerator("source", formatter=FailingFormatter())
        with pytest.raises(FormatterError) as exc_info:
            generator.generate_from_file(SAMPLE, "postgresql", tmp_path)
        target = tmp_path / "source_postgresql.go"
        draft = unformatted_path(target)
        assert not target.exists()
        assert draft.exists()
        assert exc_info.value.draft_path == draft
        assert str(draft) in str(exc_info.value)
        assert "expected 'package'" in str(exc_info.value)
        assert draft.read_text().startswith("// Code generated by")

    def test_formatter_failure_keeps_previous_output(self, tmp_path):
        target = tmp_path / "source_postgresql.go"
        target.write_text("previous\n")
        with pytest.raises(FormatterError):
            PipelineGenerator("source", formatter=FailingFormatter()).generate_from_file(SAMPLE, "postgresql", tmp_path)
        assert target.read_text() == "previous\n"

    def test_formatter_failure_without_draft(self, tmp_path):
        config = CodeGeneratorConfig.from_dict({"output": {"write_unformatted_draft": False}})
        with pytest.raises(FormatterError) as exc_info:
            PipelineGenerator("source", config, formatter=FailingFormatter()).generate_from_file(SAMPLE, "postgresql", tmp_path)
        assert exc_info.value.draft_path is None
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_output(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(GeneratorIOError):
            PipelineGenerator("source", formatter=MarkingFormatter()).generate_from_file(SAMPLE, "postgresql", blocker / "out")

    def test_missing_config(self, tmp_path):
        with pytest.raises(GeneratorIOError):
            PipelineGenerator("source", formatter=MarkingFormatter()).generate_from_file(tmp_path / "nope.json", "postgresql", tmp_path)

    def test_timeouts_entry_conflicts_with_timeouts_field(self):
        spec = parse_connector_spec({"display_name": "Test", "config": [{"name": "timeouts", "user_defined": True, "value": {"control": "string"}}]})
        with pytest.raises(FieldModelError, match="timeouts"):
            PipelineGenerator("source").render(spec, "postgresql")
        config = CodeGeneratorConfig(add_timeouts=False)
        assert 'tfsdk:"timeouts"' in PipelineGenerator("source", config).render(spec, "postgresql")


class TestCodeGeneratorConfig:
    """Test cases for loading the generator configuration"""

    def test_round_trip(self):
        config = CodeGeneratorConfig.from_dict({"package_name": "provider", "formatter": {"command": ["gofmt", "-s"]}})
        assert config.package_name == "provider"
        assert config.formatter.command == ["gofmt", "-s"]
        assert CodeGeneratorConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys_ignored(self):
        assert CodeGeneratorConfig.from_dict({"future_option": 1, "to_dict": "x"}) == CodeGeneratorConfig()

    @pytest.mark.parametrize(
        "data",
        [
            {"formatter": None},
            {"output": "fast"},
            {"formatter": {"command": "gofmt"}},
            {"package_name": None},
            {"add_timeouts": "yes"},
        ],
    )
    def test_wrong_types_rejected(self, data):
        with pytest.raises(ValueError):
            CodeGeneratorConfig.from_dict(data)


class TestAtomicWriter:
    """Test cases for the output writer"""

    def test_replaces_existing(self, tmp_path):
        target = tmp_path / "file.go"
        target.write_text("old")
        AtomicWriter().write(target, "new")
        assert target.read_text() == "new"

    def test_non_atomic(self, tmp_path):
        target = tmp_path / "nested" / "file.go"
        AtomicWriter(atomic=False).write(target, "content")
        assert target.read_text() == "content"


class TestGofmtFormatter:
    """Test cases for the gofmt subprocess formatter"""

    def test_missing_command(self):
        config = FormatterConfig(command=["definitely-not-a-formatter-binary"])
        formatter = GofmtFormatter()
        assert not formatter.is_available(config)
        with pytest.raises(FormatterError, match="not found"):
            formatter.format("package x\n", config)

    def test_empty_command(self):
        with pytest.raises(FormatterError):
            GofmtFormatter().format("package x\n", FormatterConfig(command=[]))

    @pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
    def test_gofmt_accepts_generated_code(self, tmp_path):
        path = PipelineGenerator("source").generate_from_file(SAMPLE, "postgresql", tmp_path)
        assert path.read_text().startswith("// Code generated by connector_config_to_code. DO NOT EDIT.")

    @pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
    def test_gofmt_rejects_invalid_code(self):
        with pytest.raises(FormatterError):
            GofmtFormatter().format("package x\nfunc {\n", FormatterConfig())


if __name__ == "__main__":
    pytest.main([__file__])
