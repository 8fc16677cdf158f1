"""Option, source and schema types for emitkit settings."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List

from .errors import EmitKitError


class ConfigSource(Enum):
    """Where a setting may come from. Lower values win."""

    ENVIRONMENT = 1  # os.environ, after the .env file is loaded
    MANIFEST = 2  # emitkit.toml
    DEFAULT = 3


@dataclass
class ConfigOption:
    """One setting.

    Attributes:
        name: Hierarchical path, e.g. ["emitkit", "log", "level"]. It doubles as
            the manifest table path and, joined with "_", the environment variable.
        default: Value used when no source has one.
        kind: `str` or `bool`; values from the environment and the manifest are coerced to it.
        description: Human readable help.
        sources: Sources to try, kept sorted by precedence.
    """

    name: List[str]
    default: Any = None
    kind: type = str
    description: str = ""
    sources: List[ConfigSource] = field(
        default_factory=lambda: list(ConfigSource)
    )

    def __post_init__(self):
        self.sources.sort(key=lambda source: source.value)

    @property
    def env_var(self) -> str:
        return "_".join(part.upper() for part in self.name)

    @property
    def dotted(self) -> str:
        return ".".join(self.name)


class ConfigSchema:
    """
    Base for settings dataclasses. `_options` maps each field name to its ConfigOption.
    """

    _options: ClassVar[Dict[str, ConfigOption]] = {}

    @classmethod
    def get_options(cls) -> Dict[str, ConfigOption]:
        return cls._options

    @classmethod
    def resolve(cls, config_manager: Any) -> ConfigSchema:
        """Build the schema from a ConfigManager."""
        return config_manager.resolve_config(cls)


# Exceptions
class ConfigError(EmitKitError):
    """Base exception class for configuration errors."""
    pass
class ConfigTypeCoercionError(ConfigError):
    """A value could not be converted to its option's kind."""
    pass
