"""Tests for the convenience API."""

import json

import pytest

import statforge
from statforge.api import (
    build_resolver,
    create_entity_stats,
    load_from_file,
    load_from_json,
    load_from_yaml,
    resolve_stat_from_json,
)
from statforge.core.compile.sources import ConstantSource
from statforge.core.definitions.parser import parse_document
from statforge.core.engine.errors import UnknownStatError
from statforge.core.engine.resolver import StatResolver
from statforge.core.errors import (
    MissingParameterError,
    UnknownTemplateError,
    UnknownVariantError,
)


class TestLoadFromJson:
    """Test direct stat loading."""

    def test_hp_example(self, hp_stats_json):
        resolver = load_from_json(hp_stats_json)

        assert resolver.resolve("HP").value == 225.0

    def test_stats_may_reference_each_other(self, basic_stats_path):
        resolver = load_from_json(basic_stats_path.read_text(encoding="utf-8"))

        assert resolver.resolve("ATK").value == 60.0
        assert resolver.resolve("Power").value == pytest.approx(28.5)

    def test_placeholder_in_direct_stat_is_missing_parameter(self):
        text = json.dumps({"stats": {"HP": {"sources": [{"type": "constant", "value": "{{hp}}"}]}}})

        with pytest.raises(MissingParameterError) as exc_info:
            load_from_json(text)

        assert exc_info.value.parameter == "hp"
        assert exc_info.value.owner == "HP"

    def test_failure_registers_nothing(self):
        text = json.dumps(
            {
                "stats": {
                    "Good": {"sources": [{"type": "constant", "value": 1}]},
                    "Bad": {"transforms": [{"type": "clamp", "min": 2, "max": 1}]},
                }
            }
        )
        resolver = StatResolver()

        with pytest.raises(statforge.InvalidDefinitionError):
            build_resolver(parse_document(text), resolver)

        assert resolver.stat_ids() == []

    def test_templates_ignored(self, base_hp_template_json):
        resolver = load_from_json(base_hp_template_json)

        assert resolver.stat_ids() == []

    def test_parse_errors_propagate(self):
        with pytest.raises(UnknownVariantError):
            load_from_json('{"stats": {"HP": {"sources": [{"type": "dice"}]}}}')


class TestOtherLoaders:
    """Test YAML and file loading."""

    def test_load_from_yaml(self):
        resolver = load_from_yaml(
            """
stats:
  Mana:
    sources:
      - type: scaling
        base: 10
        scale: 5
        level: 4
"""
        )

        assert resolver.resolve("Mana").value == 30.0

    def test_load_from_file(self, basic_stats_path):
        resolver = load_from_file(basic_stats_path)

        assert resolver.resolve("HP").value == 225.0

    def test_build_resolver_extends_existing(self, hp_stats_json):
        resolver = StatResolver()
        resolver.register_source("Agility", ConstantSource(7.0))

        build_resolver(parse_document(hp_stats_json), resolver)

        assert resolver.stat_ids() == ["Agility", "HP"]


class TestResolveStatFromJson:
    """Test one-shot resolution."""

    def test_resolves(self, hp_stats_json):
        result = resolve_stat_from_json(hp_stats_json, "HP")

        assert result.stat_id == "HP"
        assert result.value == 225.0
        assert result.base_value == 150.0

    def test_unknown_stat(self, hp_stats_json):
        with pytest.raises(UnknownStatError):
            resolve_stat_from_json(hp_stats_json, "MP")


class TestCreateEntityStats:
    """Test one-shot template instantiation."""

    def test_plain_stat_name(self, base_hp_template_json):
        resolver = create_entity_stats(
            base_hp_template_json,
            "HP",
            "BaseHP",
            {"base_hp": 100.0, "hp_per_level": 10.0, "level": 5.0},
        )

        assert resolver.resolve("HP").value == 150.0

    def test_with_stat_type(self, base_hp_template_json):
        resolver = create_entity_stats(
            base_hp_template_json,
            "player_123",
            "BaseHP",
            {"base_hp": 100.0, "hp_per_level": 10.0, "level": 5.0},
            stat_type="HP",
        )

        assert resolver.stat_ids() == ["player_123:HP"]
        assert resolver.resolve("player_123:HP").value == 150.0

    def test_unknown_template(self, base_hp_template_json):
        with pytest.raises(UnknownTemplateError):
            create_entity_stats(base_hp_template_json, "HP", "Missing", {})

    def test_missing_parameter(self, base_hp_template_json):
        with pytest.raises(MissingParameterError) as exc_info:
            create_entity_stats(base_hp_template_json, "HP", "BaseHP", {"base_hp": 1.0})

        assert exc_info.value.parameter == "hp_per_level"


class TestPackageExports:
    """Test the top-level package surface."""

    def test_version(self):
        assert statforge.__version__ == "0.1.0"

    def test_public_names(self):
        for name in statforge.__all__:
            assert hasattr(statforge, name)
