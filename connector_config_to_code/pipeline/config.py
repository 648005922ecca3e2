"""
Configuration for the generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields


@dataclass
class FormatterConfig:
    """Configuration for the post-processing formatter."""

    # Whether formatting is enabled
    enabled: bool = True

    # Command that reads source on stdin and writes formatted source on stdout
    command: list[str] = field(default_factory=lambda: ["gofmt"])

    # Seconds before the formatter process is abandoned
    timeout: float = 30.0


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Whether to write through a temporary file and rename
        write_unformatted_draft: Whether to persist a `.unformatted` draft when formatting fails
    """

    atomic_write: bool = True
    write_unformatted_draft: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Go package of the generated files
    package_name: str = "generated"

    # Tool name written into the "Code generated by" banner
    generator_name: str = "connector_config_to_code"

    # Platform named in the resource markdown description
    platform_name: str = "Streamkap"

    # Documentation link appended to the resource markdown description (empty = none)
    documentation_url: str = "https://docs.streamkap.com/streamkap-provider-for-terraform"

    # Add the `Timeouts timeouts.Value` field to every model
    add_timeouts: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary.

        Unknown keys are ignored.

        Raises:
            ValueError: If a known key holds a value of the wrong type
        """
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter":
                if not isinstance(v, dict):
                    raise ValueError("'formatter' must be an object")
                command = v.get("command", ["gofmt"])
                if not isinstance(command, list) or not all(isinstance(part, str) for part in command):
                    raise ValueError("'formatter.command' must be an array of strings")
                config.formatter = FormatterConfig(
                    enabled=bool(v.get("enabled", True)),
                    command=list(command),
                    timeout=float(v.get("timeout", 30.0)),
                )
            elif k == "output":
                if not isinstance(v, dict):
                    raise ValueError("'output' must be an object")
                config.output = OutputConfig(
                    atomic_write=bool(v.get("atomic_write", True)),
                    write_unformatted_draft=bool(v.get("write_unformatted_draft", True)),
                )
            elif k in {f.name for f in fields(config)}:
                if not isinstance(v, type(getattr(config, k))):
                    raise ValueError(f"'{k}' must be of type {type(getattr(config, k)).__name__}")
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "package_name": self.package_name,
            "generator_name": self.generator_name,
            "platform_name": self.platform_name,
            "documentation_url": self.documentation_url,
            "add_timeouts": self.add_timeouts,
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": list(self.formatter.command),
                "timeout": self.formatter.timeout,
            },
            "output": {
                "atomic_write": self.output.atomic_write,
                "write_unformatted_draft": self.output.write_unformatted_draft,
            },
        }
