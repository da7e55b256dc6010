"""
Configuration management for texlate.
Handles loading configuration from a JSON file and environment variables.
"""
import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional, Union

from .constants import (
    BLOCK_END,
    BLOCK_START,
    COMMENT_END,
    COMMENT_START,
    CONFIG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RENDER_PASSES,
    DEFAULT_RENDERER,
    DEFAULT_RENDERER_ARGS,
    ENV_CONFIG,
    ENV_LOG_LEVEL,
    ENV_RENDER_PASSES,
    ENV_RENDERER,
    VARIABLE_END,
    VARIABLE_START,
)
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class RendererConfig:
    """External typesetter configuration."""
    command: str = DEFAULT_RENDERER
    args: list = field(default_factory=lambda: list(DEFAULT_RENDERER_ARGS))
    passes: int = DEFAULT_RENDER_PASSES
    enabled: bool = True


@dataclass
class DelimiterConfig:
    """Template delimiters, chosen so LaTeX braces are never template syntax."""
    variable_start: str = VARIABLE_START
    variable_end: str = VARIABLE_END
    block_start: str = BLOCK_START
    block_end: str = BLOCK_END
    comment_start: str = COMMENT_START
    comment_end: str = COMMENT_END


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = DEFAULT_LOG_LEVEL


@dataclass
class AppConfig:
    """Main application configuration."""
    renderer: RendererConfig = field(default_factory=RendererConfig)
    delimiters: DelimiterConfig = field(default_factory=DelimiterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _section(data: dict, name: str) -> dict:
    """Return a config section, which must be a JSON object."""
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{name}' must be an object")
    return section


def _validate_renderer(renderer: RendererConfig) -> RendererConfig:
    """Reject renderer values of the wrong type."""
    if not isinstance(renderer.command, str) or not renderer.command:
        raise ConfigurationError("renderer.command must be a non-empty string")
    if not isinstance(renderer.args, list) or not all(isinstance(a, str) for a in renderer.args):
        raise ConfigurationError("renderer.args must be a list of strings")
    # bool is an int subclass
    passes = renderer.passes
    if isinstance(passes, bool) or not isinstance(passes, int) or passes < 0:
        raise ConfigurationError("renderer.passes must be a non-negative integer")
    if not isinstance(renderer.enabled, bool):
        raise ConfigurationError("renderer.enabled must be true or false")
    return renderer


def _validate_delimiters(delimiters: DelimiterConfig) -> DelimiterConfig:
    """Every delimiter must be a non-empty string."""
    for name, value in asdict(delimiters).items():
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"delimiters.{name} must be a non-empty string")
    return delimiters


class ConfigManager:
    """
    Manages application configuration from a JSON file and environment variables.

    Environment variables take precedence over config file values. The config
    file is only ever read.
    """

    _instance: Optional['ConfigManager'] = None

    def __new__(cls, config_path: Optional[Union[str, Path]] = None) -> 'ConfigManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        if self._initialized and config_path is None:
            return

        self._config = AppConfig()
        self._config_path, self._explicit = self._resolve_path(config_path)
        self._load_config()
        self._load_env_vars()
        self._initialized = True

    @staticmethod
    def _resolve_path(config_path: Optional[Union[str, Path]]) -> tuple:
        """Pick the config file: argument, then environment, then the default location."""
        if config_path:
            return Path(config_path), True
        env_path = os.environ.get(ENV_CONFIG)
        if env_path:
            return Path(env_path), True
        return CONFIG_FILE, False

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        if not self._config_path.exists():
            if self._explicit:
                raise ConfigurationError(f"Config file not found: {self._config_path}")
            return

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ConfigurationError("expected a JSON object")
            if 'renderer' in data:
                self._config.renderer = _validate_renderer(
                    RendererConfig(**_section(data, 'renderer'))
                )
            if 'delimiters' in data:
                self._config.delimiters = _validate_delimiters(
                    DelimiterConfig(**_section(data, 'delimiters'))
                )
            if 'logging' in data:
                self._config.logging = LoggingConfig(**_section(data, 'logging'))
                if not isinstance(self._config.logging.level, str):
                    raise ConfigurationError("logging.level must be a string")
        except ConfigurationError as e:
            raise ConfigurationError(f"Invalid config file {self._config_path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid config file {self._config_path}: {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file {self._config_path}: {e.strerror or e}"
            ) from e

        logger.debug(f"Loaded configuration from {self._config_path}")

    def _load_env_vars(self) -> None:
        """Apply overrides from environment variables."""
        renderer = os.environ.get(ENV_RENDERER)
        if renderer:
            self._config.renderer.command = renderer

        passes = os.environ.get(ENV_RENDER_PASSES)
        if passes:
            try:
                self._config.renderer.passes = int(passes)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_RENDER_PASSES} must be an integer, got '{passes}'"
                ) from e
            if self._config.renderer.passes < 0:
                raise ConfigurationError(f"{ENV_RENDER_PASSES} must not be negative")

        level = os.environ.get(ENV_LOG_LEVEL)
        if level:
            self._config.logging.level = level

    @property
    def renderer(self) -> RendererConfig:
        """Get typesetter configuration."""
        return self._config.renderer

    @property
    def delimiters(self) -> DelimiterConfig:
        """Get template delimiter configuration."""
        return self._config.delimiters

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._config.logging

    def update_logging(self, **kwargs: Any) -> None:
        """Update logging configuration for this run."""
        for key, value in kwargs.items():
            if hasattr(self._config.logging, key):
                setattr(self._config.logging, key, value)

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next access reloads configuration."""
        cls._instance = None


def get_config(config_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Get the global configuration manager instance."""
    return ConfigManager(config_path)
