"""
Configuration management for Reqline.

Handles loading and validation of configuration files.
"""

from reqline.config.settings import (
    ExecutorConfig,
    LoggingConfig,
    ReqlineConfig,
    ServerConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "ExecutorConfig",
    "LoggingConfig",
    "ReqlineConfig",
    "ServerConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
