"""Resolve settings from the environment, a .env file and an emitkit.toml manifest."""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .config_types import (
    ConfigOption,
    ConfigSchema,
    ConfigSource,
    ConfigTypeCoercionError,
)
from .logging import get_emitkit_logger

TRUE_WORDS = frozenset(("true", "1", "yes", "on"))
FALSE_WORDS = frozenset(("false", "0", "no", "off"))


def coerce(value: Any, kind: type) -> Any:
    """Convert a raw env/manifest value to `kind` (`str` or `bool`)."""
    if isinstance(value, kind):
        return value
    if kind is bool:
        if isinstance(value, str):
            word = value.strip().lower()
            if word in TRUE_WORDS:
                return True
            if word in FALSE_WORDS:
                return False
        elif isinstance(value, (int, float)):
            return value != 0
    elif kind is str and isinstance(value, (int, float)):
        return str(value)
    raise ConfigTypeCoercionError(f"Cannot read {value!r} as {kind.__name__}")


class ConfigManager:
    """Looks options up source by source; the first source with a usable value wins."""

    def __init__(
        self,
        manifest: Path = Path("emitkit.toml"),
        env_file: Path | None = None,
    ) -> None:
        self.manifest_path = manifest
        self._manifest: Dict[str, Any] | None = None
        self.logger = get_emitkit_logger("config")

        if env_file is None:
            load_dotenv()
        else:
            load_dotenv(dotenv_path=env_file)

    @property
    def manifest(self) -> Dict[str, Any]:
        """The parsed manifest, read on first use. A missing file reads as empty."""
        if self._manifest is None:
            if self.manifest_path.exists():
                with open(self.manifest_path, "rb") as f:
                    self._manifest = tomllib.load(f)
            else:
                self.logger.debug(f"Manifest {self.manifest_path} not found, using an empty manifest")
                self._manifest = {}
        return self._manifest

    def _lookup(self, option: ConfigOption, source: ConfigSource) -> Any:
        if source is ConfigSource.ENVIRONMENT:
            return os.getenv(option.env_var)
        if source is ConfigSource.MANIFEST:
            node: Any = self.manifest
            for part in option.name:
                if not isinstance(node, dict) or part not in node:
                    return None
                node = node[part]
            return node
        return option.default

    def get_config_option(self, option: ConfigOption) -> Any:
        """Return the value of `option` from the highest-precedence source that has one."""
        for source in option.sources:
            value = self._lookup(option, source)
            if value is None:
                continue
            if source is not ConfigSource.DEFAULT:
                try:
                    value = coerce(value, option.kind)
                except ConfigTypeCoercionError as e:
                    self.logger.warning(f"Ignoring {option.dotted} from {source.name}: {e}")
                    continue
            self.logger.debug(f"{option.dotted} = {value!r} (from {source.name})")
            return value
        return None

    def resolve_config(self, schema: type[ConfigSchema]) -> ConfigSchema:
        """Resolve every option of `schema` and build it."""
        self.logger.debug(f"Resolving config schema: {schema.__name__}")
        return schema(**{
            field_name: self.get_config_option(option)
            for field_name, option in schema.get_options().items()
        })
