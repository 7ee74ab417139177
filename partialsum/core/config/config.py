"""Centralized configuration management for partialsum.

This module provides a unified configuration system with clear precedence:
1. CLI arguments (highest priority)
2. Environment variables (PARTIALSUM_ prefix, __ for nesting)
3. Config file (via --config path)
4. Default values (lowest priority)
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from partialsum.core.exceptions import ConfigurationError

from .checksum_config import ChecksumConfig


class Config(BaseModel):
    """Centralized configuration for partialsum."""

    model_config = ConfigDict(frozen=True)

    checksum: ChecksumConfig = Field(default_factory=ChecksumConfig)
    debug: bool = Field(default=False)
    verbose: bool = Field(default=False)

    def __init__(
        self,
        config_file: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        """Initialize configuration with hierarchical loading.

        Args:
            config_file: Optional path to a JSON configuration file
            overrides: Optional dictionary of CLI overrides
            **kwargs: Additional keyword arguments

        Raises:
            ConfigurationError: Invalid config file or invalid values
        """
        config_data: Dict[str, Any] = {}

        env_vars = self._load_env_vars()
        config_data.update(copy.deepcopy(env_vars))

        if config_file is not None:
            file_config = self._load_config_file(config_file)
            self._deep_merge(config_data, file_config)
            # Environment variables take precedence over the file
            self._deep_merge(config_data, env_vars)

        if overrides:
            self._deep_merge(config_data, overrides)

        if kwargs:
            self._deep_merge(config_data, kwargs)

        try:
            super().__init__(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_config_file(config_file: Path) -> Dict[str, Any]:
        try:
            with open(config_file, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file {config_file}: {e}"
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file {config_file}: {e}. "
                "Please check the file format and try again."
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_file} must contain a JSON object"
            )
        return data

    @staticmethod
    def _load_env_vars() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if debug := os.getenv("PARTIALSUM_DEBUG"):
            config["debug"] = debug.lower() in ("true", "1", "yes")

        checksum_config = ChecksumConfig.load_from_env()
        if checksum_config:
            config["checksum"] = checksum_config

        return config

    @classmethod
    def _deep_merge(cls, base: Dict[str, Any], update: Dict[str, Any]) -> None:
        """Deep merge update dictionary into base dictionary."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                cls._deep_merge(base[key], value)
            else:
                base[key] = value

    @classmethod
    def from_cli_args(cls, args: Any) -> "Config":
        """Create configuration from parsed CLI arguments.

        Args:
            args: Parsed command line arguments

        Returns:
            Configured Config instance
        """
        overrides: Dict[str, Any] = {}

        checksum_overrides = ChecksumConfig.extract_cli_overrides(args)
        if checksum_overrides:
            overrides["checksum"] = checksum_overrides

        if getattr(args, "verbose", False):
            overrides["verbose"] = True
        if getattr(args, "debug", False):
            overrides["debug"] = True

        return cls(config_file=getattr(args, "config", None), overrides=overrides)
