"""
Configuration management for httpsig-jwk
"""

from .settings import (
    ToolConfig,
    LoggingConfig,
    SigningDefaults,
    CONFIG_ENV_VAR,
    load_config,
    load_config_from_file,
    configure_logging,
)

__all__ = [
    'ToolConfig',
    'LoggingConfig',
    'SigningDefaults',
    'CONFIG_ENV_VAR',
    'load_config',
    'load_config_from_file',
    'configure_logging',
]
