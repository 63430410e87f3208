"""Application configuration."""

from statforge.core.config.loader import (
    configure_logging,
    load_app_config,
    load_config,
    load_template_registry,
)
from statforge.core.config.models import AppConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "configure_logging",
    "load_app_config",
    "load_config",
    "load_template_registry",
]
