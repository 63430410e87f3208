"""Template registry - immutable name -> template mapping.

Built once from parsed definition text and read-only afterwards, so a single
registry can be shared by every caller instantiating templates. Several
independent registries (e.g. one per game mode) may coexist.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from statforge.core.definitions.models import StatDocument, StatTemplate
from statforge.core.definitions.parser import dump_document, load_document, parse_document
from statforge.core.definitions.substitution import required_parameters
from statforge.core.errors import UnknownTemplateError

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Read-only registry of stat templates.

    Example:
        >>> registry = TemplateRegistry.from_text(
        ...     '{"templates": {"BaseHP": {"sources": [{"type": "constant", "value": "{{hp}}"}]}}}'
        ... )
        >>> registry.required_parameters("BaseHP")
        {'hp'}
    """

    def __init__(self, templates: Mapping[str, StatTemplate] | None = None) -> None:
        """Initialize registry from a name -> template mapping.

        Args:
            templates: Templates keyed by name (copied; later changes to the
                argument do not affect the registry)
        """
        self._templates: Mapping[str, StatTemplate] = MappingProxyType(dict(templates or {}))
        logger.debug(f"TemplateRegistry initialized with {len(self._templates)} templates")

    @classmethod
    def from_document(cls, document: StatDocument) -> TemplateRegistry:
        """Build a registry from the ``templates`` section of a parsed document."""
        return cls(document.templates)

    @classmethod
    def from_text(cls, text: str, fmt: str = "json") -> TemplateRegistry:
        """Parse definition text and build a registry from its templates.

        Args:
            text: JSON or YAML document with a ``templates`` section
            fmt: "json" or "yaml"

        Returns:
            TemplateRegistry

        Raises:
            ParseError: If the text is invalid (see ``parse_document``)
        """
        return cls.from_document(parse_document(text, fmt))

    @classmethod
    def from_files(cls, paths: Iterable[str | Path]) -> TemplateRegistry:
        """Load and merge templates from several definition files.

        Args:
            paths: Definition files (.json, .yaml, or .yml)

        Returns:
            TemplateRegistry holding the templates of every file

        Raises:
            ValueError: If two files define the same template name
            FileNotFoundError: If a file does not exist
        """
        merged: dict[str, StatTemplate] = {}
        origin: dict[str, Path] = {}
        for path in paths:
            path = Path(path)
            for name, template in load_document(path).templates.items():
                if name in merged:
                    raise ValueError(
                        f"Template already registered: {name} (in {origin[name]} and {path})"
                    )
                merged[name] = template
                origin[name] = path
            logger.debug(f"Loaded templates from {path}")
        return cls(merged)

    def get(self, name: str) -> StatTemplate:
        """Lookup template by name.

        Args:
            name: Template name

        Returns:
            StatTemplate (frozen; safe to share)

        Raises:
            UnknownTemplateError: If template not found
        """
        try:
            return self._templates[name]
        except KeyError:
            raise UnknownTemplateError(name) from None

    def has(self, name: str) -> bool:
        """Check if template exists."""
        return name in self._templates

    def list_names(self) -> list[str]:
        """List template names in declaration order."""
        return list(self._templates)

    def required_parameters(self, name: str) -> set[str]:
        """Parameter names a template needs at instantiation.

        Raises:
            UnknownTemplateError: If template not found
        """
        return required_parameters(self.get(name))

    def to_document(self) -> StatDocument:
        """Wrap the templates in a StatDocument."""
        return StatDocument(templates=dict(self._templates))

    def to_text(self, fmt: str = "json") -> str:
        """Serialize templates to JSON or YAML text (e.g. for storage by the caller)."""
        return dump_document(self.to_document(), fmt)

    @property
    def templates(self) -> Mapping[str, StatTemplate]:
        """Read-only view of all templates."""
        return self._templates

    def __getitem__(self, name: str) -> StatTemplate:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        """Return number of templates."""
        return len(self._templates)

    def __contains__(self, name: object) -> bool:
        """Check if template exists (supports 'in' operator)."""
        return name in self._templates


__all__ = ["TemplateRegistry"]
