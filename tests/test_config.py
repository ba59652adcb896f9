"""Tests for menus config loading."""

import os
import tempfile

import pytest

from platmaison.menus.config import (
    ItemConfig,
    MenusConfig,
    build_catalog,
    load_config,
)
from platmaison.menus.errors import DuplicateItemError


@pytest.fixture(autouse=True)
def clear_api_keys(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


def _load_toml(content: bytes) -> MenusConfig:
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(content)
        f.flush()
        config = load_config(f.name)
    os.unlink(f.name)
    return config


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, MenusConfig)
    assert config.generator.backend == "gemini"
    assert config.generator.gemini.model == "gemini-2.0-flash"
    assert config.generator.claude.api_key == ""
    assert config.extraction.match_threshold == 0.75
    assert config.catalog.items == []


def test_load_config_nonexistent_file():
    config = load_config("/nonexistent/path.toml")
    assert config.generator.backend == "gemini"


def test_load_config_from_toml():
    config = _load_toml(b"""\
[generator]
backend = "claude"

[generator.claude]
api_key = "test-key-123"
model = "claude-test"

[extraction]
match_threshold = 0.6

[[catalog.items]]
name = "flour"
unit_price = 3.0
pack_quantity = 5
unit = "lbs"
store = "SuperMart"
confirmed = true

[[catalog.items]]
name = "eggs"
unit_price = 3.5
pack_quantity = 12
""")

    assert config.generator.backend == "claude"
    assert config.generator.claude.api_key == "test-key-123"
    assert config.generator.claude.model == "claude-test"
    assert config.extraction.match_threshold == 0.6
    assert config.catalog.items[0] == ItemConfig(
        name="flour",
        unit_price=3.0,
        pack_quantity=5,
        unit="lbs",
        store="SuperMart",
        confirmed=True,
    )
    assert config.catalog.items[1].unit == ""
    assert config.catalog.items[1].confirmed is False


def test_load_config_env_override(monkeypatch):
    """Environment variables override empty API keys."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-anthropic-key")
    monkeypatch.setenv("GEMINI_API_KEY", "env-gemini-key")

    config = load_config()
    assert config.generator.claude.api_key == "env-anthropic-key"
    assert config.generator.gemini.api_key == "env-gemini-key"


def test_load_config_file_key_takes_precedence(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    config = _load_toml(b"""\
[generator.gemini]
api_key = "file-key"
""")
    assert config.generator.gemini.api_key == "file-key"


def test_build_catalog():
    config = MenusConfig()
    config.catalog.items = [
        ItemConfig("flour", 3.0, 5, "lbs", "SuperMart", confirmed=True),
        ItemConfig("eggs", 3.5, 12, "count", "SuperMart"),
    ]
    catalog = build_catalog(config)

    assert len(catalog) == 2
    assert catalog.lookup("Flour").confirmed is True
    assert catalog.lookup("eggs").confirmed is False


def test_build_catalog_duplicate_names():
    config = MenusConfig()
    config.catalog.items = [
        ItemConfig("flour", 3.0, 5),
        ItemConfig("Flour", 2.0, 5),
    ]
    with pytest.raises(DuplicateItemError):
        build_catalog(config)
