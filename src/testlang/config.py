"""Configuration management for testlang.

Loads and validates testlang.yaml configuration files.
"""

import keyword
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Target(str, Enum):
    """Language of the generated test document."""

    PYTHON = "python"  # pytest + httpx module
    JAVA = "java"  # JUnit 5 class using java.net.http

    @classmethod
    def from_name(cls, name: str) -> "Target":
        """Resolve a target name or alias (py, python, java)."""
        normalized = name.strip().lower()
        if normalized in ("python", "py"):
            return cls.PYTHON
        if normalized == "java":
            return cls.JAVA
        raise ValueError(f"Unknown target: {name!r}")


# Module-level names of the generated pytest module
PYTHON_RESERVED_NAMES = frozenset(
    {"httpx", "pytest", "response", "BASE_URL", "TIMEOUT", "DEFAULT_HEADERS"}
)

JAVA_KEYWORDS = frozenset(
    """
    abstract assert boolean break byte case catch char class const continue
    default do double else enum extends final finally float for goto if
    implements import instanceof int interface long native new package private
    protected public return short static strictfp super switch synchronized this
    throw throws transient try void volatile while true false null _
    """.split()
)


def is_java_identifier(name: str) -> bool:
    """True if name can be used as a Java class or method name."""
    return name.replace("$", "_").isidentifier() and name not in JAVA_KEYWORDS


class CodegenConfig(BaseModel):
    """Settings baked into every generated document."""

    base_url: str = "http://localhost:8080"
    """Prefix for request paths."""

    timeout_seconds: float = 10.0
    """Per-request timeout used by the generated client."""

    default_headers: dict[str, str] = Field(default_factory=dict)
    """Headers sent with every request, in declaration order."""

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class PythonTargetConfig(BaseModel):
    """Configuration for the pytest target."""

    fixture_name: str = "client"
    """Name of the httpx client fixture each test receives."""

    @field_validator("fixture_name")
    @classmethod
    def check_fixture_name(cls, v: str) -> str:
        if not v.isidentifier() or keyword.iskeyword(v):
            raise ValueError(f"fixture_name must be a Python identifier, got {v!r}")
        if v in PYTHON_RESERVED_NAMES or v.startswith("test"):
            raise ValueError(f"fixture_name {v!r} clashes with a name in the generated module")
        return v


class JavaTargetConfig(BaseModel):
    """Configuration for the JUnit target."""

    package: str | None = None
    """Package declaration for the generated class. None means default package."""

    class_name: str | None = None
    """Class name. Defaults to the output file name without extension."""

    @field_validator("class_name")
    @classmethod
    def check_class_name(cls, v: str | None) -> str | None:
        if v is not None and not is_java_identifier(v):
            raise ValueError(f"class_name must be a Java identifier, got {v!r}")
        return v


class TargetsConfig(BaseModel):
    """Configuration for all targets."""

    python: PythonTargetConfig = Field(default_factory=PythonTargetConfig)
    java: JavaTargetConfig = Field(default_factory=JavaTargetConfig)


class LoggingConfig(BaseModel):
    """Logging output of the compiler itself."""

    level: str = "WARNING"
    json_output: bool = Field(default=False, alias="json")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v!r}")
        return level


class CompilerConfig(BaseModel):
    """Root configuration for testlang."""

    version: str = "0.1"
    """Config file version."""

    target: Target = Target.PYTHON
    """Default target when none is given on the command line."""

    codegen: CodegenConfig = Field(default_factory=CodegenConfig)
    targets: TargetsConfig = Field(default_factory=TargetsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("target", mode="before")
    @classmethod
    def resolve_alias(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Target.from_name(v)
        return v


CONFIG_NAMES = (
    "testlang.yaml",
    "testlang.yml",
    ".testlang.yaml",
    ".testlang.yml",
)


def load_config(config_path: Path | None = None, project_root: Path | None = None) -> CompilerConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file. If None, searches for testlang.yaml.
        project_root: Project root directory. Defaults to cwd.

    Returns:
        Parsed configuration. Returns default config if no file found.
    """
    project_root = project_root or Path.cwd()

    # Find config file
    if config_path is None:
        for name in CONFIG_NAMES:
            candidate = project_root / name
            if candidate.exists():
                config_path = candidate
                break

    # No config file - return defaults
    if config_path is None or not config_path.exists():
        return CompilerConfig()

    # Load and parse YAML
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return CompilerConfig.model_validate(data)
