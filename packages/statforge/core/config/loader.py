"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from statforge.core.config.models import AppConfig
from statforge.core.definitions.parser import detect_format
from statforge.core.templates.registry import TemplateRegistry
from statforge.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid

    Example:
        >>> config = load_config("statforge.yaml")
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
                # safe_load returns None for empty files
                return content if content is not None else {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Args:
        path: Path to app config file (.json, .yaml, or .yml). When None or
            missing, defaults are used.

    Returns:
        Validated AppConfig; ``base_dir`` is the config file's directory

    Raises:
        ValidationError: If config is invalid
    """
    if path is None or not Path(path).exists():
        if path is not None:
            logger.debug(f"Config file {path} not found, using defaults")
        return AppConfig()

    raw_config = load_config(path)
    config = AppConfig.model_validate(raw_config)
    return config.model_copy(update={"base_dir": Path(path).resolve().parent})


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (defaults if None)
    """
    if config is None:
        config = AppConfig()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def load_template_registry(config: AppConfig) -> TemplateRegistry:
    """Build a TemplateRegistry from the config's ``template_paths``.

    Args:
        config: AppConfig listing template files

    Returns:
        TemplateRegistry merging every listed file

    Raises:
        FileNotFoundError: If a template file does not exist
        ValueError: If two files define the same template
    """
    paths = config.resolved_template_paths()
    registry = TemplateRegistry.from_files(paths)
    logger.info(f"Loaded {len(registry)} templates from {len(paths)} files")
    return registry


__all__ = ["configure_logging", "load_app_config", "load_config", "load_template_registry"]
