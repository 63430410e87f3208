"""Configuration models for statforge."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root logging level",
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string (ignored when structured=True)",
    )

    structured: bool = Field(
        default=False, description="Emit structured JSON lines instead of text"
    )

    filename: str | None = Field(default=None, description="Log file path (stdout when unset)")


class AppConfig(BaseModel):
    """Application configuration.

    Example:
        >>> config = AppConfig.model_validate(
        ...     {"logging": {"level": "DEBUG"}, "template_paths": ["templates/archer.json"]}
        ... )
        >>> config.logging.level
        'DEBUG'
    """

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    template_paths: list[Path] = Field(
        default_factory=list,
        description="Template definition files merged into one registry",
    )

    base_dir: Path | None = Field(
        default=None,
        exclude=True,
        description="Directory relative template paths resolve against (set by the loader)",
    )

    def resolved_template_paths(self) -> list[Path]:
        """Template paths with relative entries resolved against ``base_dir``."""
        if self.base_dir is None:
            return list(self.template_paths)
        return [p if p.is_absolute() else self.base_dir / p for p in self.template_paths]


__all__ = ["AppConfig", "LoggingConfig"]
