"""
Configuration management for httpsig-jwk

Settings are plain dataclasses loaded from a JSON document. The CLI reads
the file named by --config or by the HTTPSIG_JWK_CONFIG environment
variable, and falls back to the built-in defaults.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import ConfigurationError, ErrorCodes
from ..signing.headers import DEFAULT_SIGNATURE_LABEL
from ..signing.types import SF_KEY_PATTERN

CONFIG_ENV_VAR = "HTTPSIG_JWK_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"
    format: str = "%(levelname)s %(name)s: %(message)s"

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.level}",
                ErrorCodes.INVALID_CONFIG,
                {"level": self.level, "supported": list(LOG_LEVELS)}
            )


@dataclass
class SigningDefaults:
    """Defaults applied when signing"""
    label: str = DEFAULT_SIGNATURE_LABEL
    include_key_id: bool = False

    def __post_init__(self):
        if not isinstance(self.label, str) or not SF_KEY_PATTERN.match(self.label):
            raise ConfigurationError(
                f"signing.label must be a lowercase structured-field key, got {self.label!r}",
                ErrorCodes.INVALID_CONFIG,
                {"label": self.label}
            )
        if not isinstance(self.include_key_id, bool):
            raise ConfigurationError(
                "signing.include_key_id must be a boolean",
                ErrorCodes.INVALID_CONFIG,
                {"include_key_id": self.include_key_id}
            )


@dataclass
class ToolConfig:
    """Top-level configuration"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    signing: SigningDefaults = field(default_factory=SigningDefaults)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ToolConfig':
        """Build configuration from a decoded JSON document"""
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration must be a JSON object",
                ErrorCodes.INVALID_CONFIG
            )

        try:
            return cls(
                logging=LoggingConfig(**data.get('logging', {})),
                signing=SigningDefaults(**data.get('signing', {}))
            )
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid configuration format: {e}",
                ErrorCodes.INVALID_CONFIG
            )

    @classmethod
    def from_json(cls, json_string: str) -> 'ToolConfig':
        """Load configuration from a JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Failed to parse configuration JSON: {e}",
                ErrorCodes.CONFIG_PARSE_ERROR
            )
        return cls.from_dict(data)


def load_config_from_file(path: Union[str, Path]) -> ToolConfig:
    """
    Load configuration from a JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        text = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file {path}: {e}",
            ErrorCodes.CONFIG_PARSE_ERROR,
            {"path": str(path)}
        )
    return ToolConfig.from_json(text)


def load_config(path: Optional[Union[str, Path]] = None) -> ToolConfig:
    """
    Load configuration from path, the HTTPSIG_JWK_CONFIG file, or defaults.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if path:
        return load_config_from_file(path)
    return ToolConfig()


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger once for command-line use."""
    logging.basicConfig(level=getattr(logging, config.level), format=config.format)
