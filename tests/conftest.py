"""Shared pytest fixtures for statforge tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from statforge.core.engine.resolver import StatResolver
from statforge.core.entities.manager import EntityStatManager
from statforge.core.templates.registry import TemplateRegistry

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Get statforge test fixtures directory."""
    return Path(__file__).parent / "fixtures" / "statforge"


@pytest.fixture
def archer_templates_path(fixtures_dir: Path) -> Path:
    """JSON template file for the archer entity."""
    return fixtures_dir / "templates" / "archer.json"


@pytest.fixture
def resistance_templates_path(fixtures_dir: Path) -> Path:
    """YAML template file with nested conditionals."""
    return fixtures_dir / "templates" / "resistance.yaml"


@pytest.fixture
def basic_stats_path(fixtures_dir: Path) -> Path:
    """JSON file with direct (non-template) stat definitions."""
    return fixtures_dir / "stats" / "basic_stats.json"


# ============================================================================
# Definition Text Fixtures
# ============================================================================


@pytest.fixture
def hp_stats_json() -> str:
    """Direct HP definition: (100 + 50) * 1.5 = 225."""
    return """
    {
        "stats": {
            "HP": {
                "sources": [
                    {"type": "constant", "value": 100.0},
                    {"type": "constant", "value": 50.0}
                ],
                "transforms": [
                    {"type": "multiplicative", "value": 1.5}
                ]
            }
        }
    }
    """


@pytest.fixture
def base_hp_template_json() -> str:
    """Single template: constant base_hp plus scaling over level."""
    return """
    {
        "templates": {
            "BaseHP": {
                "description": "Base HP with level scaling",
                "sources": [
                    {"type": "constant", "value": "{{base_hp}}"},
                    {"type": "scaling", "base": 0.0, "scale": "{{hp_per_level}}", "level": "{{level}}"}
                ]
            }
        }
    }
    """


@pytest.fixture
def archer_params() -> dict[str, float]:
    """Parameters for a level 10 archer."""
    return {
        "level": 10.0,
        "base_dexterity": 40.0,
        "dexterity_per_level": 4.0,
        "base_vitality": 20.0,
        "vitality_per_level": 2.0,
        "base_hp": 120.0,
        "hp_per_level": 10.0,
        "hp_per_vitality": 5.0,
        "min_hp": 1.0,
        "base_atk": 35.0,
        "atk_per_level": 4.5,
        "atk_bonus": 0.0,
        "atk_multiplier": 1.0,
        "max_atk": 1000.0,
        "exp_per_level": 0.01,
        "then_multiplier": 1.1,
        "base_fire_resistance": 15.0,
        "fire_res_per_level": 0.5,
        "vitality_threshold": 30.0,
    }


# ============================================================================
# Registry / Manager Fixtures
# ============================================================================


@pytest.fixture
def archer_registry(archer_templates_path: Path, resistance_templates_path: Path) -> TemplateRegistry:
    """Registry merging the archer and resistance template files."""
    return TemplateRegistry.from_files([archer_templates_path, resistance_templates_path])


@pytest.fixture
def archer_manager(archer_registry: TemplateRegistry) -> EntityStatManager:
    """Manager over the archer registry."""
    return EntityStatManager(archer_registry)


@pytest.fixture
def resolver() -> StatResolver:
    """Fresh, empty resolver."""
    return StatResolver()


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_root_logging():
    """Put the root logger back after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
