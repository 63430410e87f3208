"""Test suite for statforge.

Test Structure:
- unit/: Unit tests per subpackage (definitions, compile, engine, templates,
  entities, config, utils) plus the public API
- integration/: Full entities built from template files
- fixtures/statforge/: Template, stat and config documents
- conftest.py: Shared fixtures
"""
