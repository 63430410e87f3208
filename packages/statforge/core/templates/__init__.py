"""Stat template registry."""

from statforge.core.templates.registry import TemplateRegistry

__all__ = ["TemplateRegistry"]
