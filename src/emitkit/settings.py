"""Emitter settings schema and logging setup."""

from dataclasses import dataclass
from pathlib import Path

from .config import ConfigManager
from .config_types import ConfigSchema, ConfigOption
from .logging import LoggerManager, get_emitkit_logger


@dataclass(frozen=True)
class EmitterSettings(ConfigSchema):
    """Settings loaded from the environment, a .env file or the emitkit.toml manifest."""

    # Logging Settings
    log_level: str
    debug_mode: bool
    log_file: str | None
    log_to_console: bool

    _options = {
        "log_level": ConfigOption(
            name=["emitkit", "log", "level"],
            default="INFO",
            description="The logging level. Can be DEBUG, INFO, WARNING, ERROR, CRITICAL.",
        ),
        "debug_mode": ConfigOption(
            name=["emitkit", "log", "debug_mode"],
            default=False,
            kind=bool,
            description="Enable verbose log output, including every registration and dispatch.",
        ),
        "log_file": ConfigOption(
            name=["emitkit", "log", "file"],
            default=None,
            description="The file path to log output to. If not set, logging to file is disabled.",
        ),
        "log_to_console": ConfigOption(
            name=["emitkit", "log", "console"],
            default=True,
            kind=bool,
            description="Enable logging output to the console.",
        ),
    }


def setup(
    manifest: Path = Path("emitkit.toml"),
    env_file: Path | None = None,
    logger_name: str = "",
) -> LoggerManager:
    """
    Resolve `EmitterSettings` and configure logging from them.

    Args:
        manifest (Path): Path to the TOML manifest. A missing file is treated as empty.
        env_file (Path | None): Optional .env file, defaults to dotenv's own lookup.
        logger_name (str): Logger to configure, the root logger by default.

    Returns:
        The configured LoggerManager.
    """
    config = ConfigManager(manifest=manifest, env_file=env_file)
    settings: EmitterSettings = EmitterSettings.resolve(config)

    manager = LoggerManager.from_settings(settings, logger_name=logger_name)
    get_emitkit_logger("core").debug(f"Logging configured from {settings}")
    return manager
