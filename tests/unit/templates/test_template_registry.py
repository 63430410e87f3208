"""Tests for TemplateRegistry."""

import json

from pydantic import ValidationError
import pytest

from statforge.core.definitions.models import ConstantSourceDef, StatTemplate
from statforge.core.definitions.parser import parse_document
from statforge.core.engine.resolver import StatResolver
from statforge.core.entities.manager import EntityStatManager
from statforge.core.errors import ParseError, UnknownTemplateError
from statforge.core.templates.registry import TemplateRegistry


class TestTemplateRegistryConstruction:
    """Test building registries."""

    def test_from_text(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        assert registry.list_names() == ["BaseHP"]
        assert len(registry) == 1

    def test_from_yaml_text(self):
        registry = TemplateRegistry.from_text(
            "templates:\n  Speed:\n    sources:\n      - type: constant\n        value: 5\n",
            "yaml",
        )

        assert registry.has("Speed")

    def test_from_document_ignores_direct_stats(self, hp_stats_json):
        registry = TemplateRegistry.from_document(parse_document(hp_stats_json))

        assert len(registry) == 0

    def test_invalid_text_raises_parse_error(self):
        with pytest.raises(ParseError):
            TemplateRegistry.from_text('{"templates": {"T": {"sources": [{"type": "nope"}]}}}')

    def test_constructor_copies_mapping(self, base_hp_template_json):
        templates = dict(parse_document(base_hp_template_json).templates)
        registry = TemplateRegistry(templates)

        templates["Other"] = templates["BaseHP"]

        assert "Other" not in registry

    def test_templates_view_is_read_only(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        with pytest.raises(TypeError):
            registry.templates["New"] = registry.get("BaseHP")

    def test_from_files_merges(self, archer_templates_path, resistance_templates_path):
        registry = TemplateRegistry.from_files([archer_templates_path, resistance_templates_path])

        assert "ArcherHP" in registry
        assert "FireResistance" in registry
        assert len(registry) == 7

    def test_from_files_rejects_duplicates(self, tmp_path, archer_templates_path):
        copy = tmp_path / "copy.json"
        copy.write_text(archer_templates_path.read_text(encoding="utf-8"), encoding="utf-8")

        with pytest.raises(ValueError) as exc_info:
            TemplateRegistry.from_files([archer_templates_path, copy])

        assert "Template already registered" in str(exc_info.value)


class TestTemplateRegistryLookup:
    """Test template lookup."""

    def test_get(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        template = registry.get("BaseHP")

        assert isinstance(template, StatTemplate)
        assert registry["BaseHP"] is template

    def test_get_unknown(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        with pytest.raises(UnknownTemplateError) as exc_info:
            registry.get("Missing")

        assert exc_info.value.name == "Missing"
        assert str(exc_info.value) == "Unknown template: Missing"

    def test_unknown_template_is_key_error(self):
        registry = TemplateRegistry()

        with pytest.raises(KeyError):
            registry["Missing"]

    def test_required_parameters(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        assert registry.required_parameters("BaseHP") == {"base_hp", "hp_per_level", "level"}

    def test_iteration_keeps_declaration_order(self, archer_templates_path):
        registry = TemplateRegistry.from_files([archer_templates_path])

        assert list(registry) == [
            "Level",
            "ArcherDexterity",
            "ArcherVitality",
            "ArcherHP",
            "ArcherATK",
            "ExperienceGain",
        ]


class TestTemplateRegistrySerialization:
    """Test exporting templates."""

    def test_to_text_round_trip(self, archer_registry):
        restored = TemplateRegistry.from_text(archer_registry.to_text())

        assert restored.templates == archer_registry.templates

    def test_to_yaml(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        restored = TemplateRegistry.from_text(registry.to_text("yaml"), "yaml")

        assert restored.get("BaseHP") == registry.get("BaseHP")

    def test_to_text_keeps_placeholders(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        data = json.loads(registry.to_text())

        assert data["templates"]["BaseHP"]["sources"][0]["value"] == "{{base_hp}}"
        assert "stats" in data


class TestTemplateRegistryImmutability:
    """Templates handed out by the registry can't be changed in place."""

    def test_template_sequences_are_tuples(self, archer_registry):
        template = archer_registry.get("ArcherHP")

        assert isinstance(template.sources, tuple)
        assert isinstance(template.transforms, tuple)
        assert isinstance(template.transforms[0].dependencies, tuple)

    def test_cannot_append_source(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        with pytest.raises(AttributeError):
            registry.get("BaseHP").sources.append(ConstantSourceDef(value=1000.0))

    def test_cannot_reassign_fields(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)

        with pytest.raises(ValidationError):
            registry.get("BaseHP").sources = ()

    def test_failed_mutation_leaves_instantiation_unchanged(self, base_hp_template_json):
        registry = TemplateRegistry.from_text(base_hp_template_json)
        params = {"base_hp": 100.0, "hp_per_level": 0.0, "level": 1.0}
        resolver = StatResolver()

        with pytest.raises(AttributeError):
            registry.get("BaseHP").sources.append(ConstantSourceDef(value=1000.0))
        EntityStatManager(registry).apply_template(resolver, "BaseHP", "p:HP", params)

        assert resolver.resolve("p:HP").value == 100.0

    def test_document_and_registry_share_nothing_mutable(self, base_hp_template_json):
        document = parse_document(base_hp_template_json)
        registry = TemplateRegistry.from_document(document)

        document.templates["Other"] = document.templates["BaseHP"]

        assert "Other" not in registry
        assert isinstance(document.templates["BaseHP"].sources, tuple)
