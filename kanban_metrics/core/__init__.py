"""
Core infrastructure: logging and configuration.
"""

from .config import AppConfig, ConfigurationError, ReportDefaults, get_config, reset_config
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "ReportDefaults",
    "get_config",
    "reset_config",
    "get_logger",
    "log_with_context",
    "setup_logging",
]
