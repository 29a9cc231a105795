"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with RIGGER_ prefix
3. .env file named by RIGGER_ENV_FILE (if set and present)
4. Field defaults

Examples:
  RIGGER_LOG_LEVEL=DEBUG
  RIGGER_STRICT_UNDEFINED=false
  RIGGER_OUTPUT_FORMAT=json
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import rigger.constants as _constants
import rigger.values.renderer as renderer
import rigger.values.resolver as resolver


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit RIGGER_ENV_FILE is honored; a value that points at a
    missing file loads nothing rather than falling back silently.
    """
    if env_file := _os.environ.get("RIGGER_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Rigger configuration settings.

    All settings can be overridden via environment variables with the
    RIGGER_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=_constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = _pydantic.Field(
        default=_constants.DEFAULT_LOG_LEVEL,
        description="Log level name for the CLI (DEBUG, INFO, WARNING, ERROR)",
    )

    strict_undefined: bool = _pydantic.Field(
        default=True,
        description="Fail when a template references a missing value without a fallback",
    )

    output_format: _typing.Literal["yaml", "json"] = _pydantic.Field(
        default="yaml",
        description="Default output format for resolved values",
    )

    template_extension: str = _pydantic.Field(
        default=_constants.DEFAULT_TEMPLATE_EXTENSION,
        description="Extension of compose template files, without the dot",
    )

    @_pydantic.field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject unknown level names."""
        level = value.strip().upper()
        if not isinstance(_logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @_pydantic.field_validator("template_extension")
    @classmethod
    def _strip_extension_dot(cls, value: str) -> str:
        return value.strip().lstrip(".")

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    @property
    def log_level_number(self) -> int:
        """Numeric logging level."""
        return int(_logging.getLevelName(self.log_level))

    def build_resolver(self) -> resolver.ValueResolver:
        """Create a ValueResolver configured from these settings."""
        return resolver.ValueResolver(
            renderer=renderer.JinjaRenderer(strict_undefined=self.strict_undefined),
        )
