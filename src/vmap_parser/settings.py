"""
Settings Management Module

Provides pydantic-based settings for the VMAP parser with:
- YAML configuration file loading
- Environment variable overrides (VMAP_PARSER_*)
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import VmapConfigError


class VmapParserSettings(BaseSettings):
    """
    VMAP parser settings.

    Configuration hierarchy (lowest to highest precedence):
    1. YAML file passed to ``load_from_yaml``
    2. Environment variables (VMAP_PARSER_*)

    Examples:
        >>> settings = VmapParserSettings.load_from_yaml(Path("vmap.yaml"))
        >>> settings.parser
        {'recover_on_error': False}
    """

    model_config = SettingsConfigDict(
        env_prefix="VMAP_PARSER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    log_json: bool = False

    parser: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "VmapParserSettings":
        """
        Load settings from a YAML configuration file.

        Environment variables still take precedence over file values.

        Args:
            config_path: Path to config file

        Returns:
            VmapParserSettings instance

        Raises:
            VmapConfigError: If the file is not valid YAML or not a mapping
        """
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise VmapConfigError(
                f"Failed to load settings file: {e}",
                context={"config_path": str(config_path)},
            ) from e

        if not isinstance(config_data, dict):
            raise VmapConfigError(
                "Settings file must contain a mapping",
                context={"config_path": str(config_path)},
            )

        # init kwargs would outrank env vars, so env values are merged on top
        env_values = cls().model_dump(exclude_unset=True)
        return cls.model_validate(cls._deep_merge(config_data, env_values))

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = VmapParserSettings._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


@lru_cache
def get_settings(config_path: Path | None = None) -> VmapParserSettings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        VmapParserSettings instance
    """
    if config_path is None:
        return VmapParserSettings()
    return VmapParserSettings.load_from_yaml(config_path)


__all__ = ["VmapParserSettings", "get_settings"]
