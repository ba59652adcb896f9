"""TOML configuration loader for the menus module."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import Catalog
from .extraction.validator import DEFAULT_MATCH_THRESHOLD

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class ClaudeGeneratorConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiGeneratorConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class GeneratorConfig:
    backend: str = "gemini"
    claude: ClaudeGeneratorConfig = field(default_factory=ClaudeGeneratorConfig)
    gemini: GeminiGeneratorConfig = field(default_factory=GeminiGeneratorConfig)


@dataclass
class ExtractionConfig:
    # Minimum share of ingredients that must be mentioned in the instructions
    match_threshold: float = DEFAULT_MATCH_THRESHOLD


@dataclass
class ItemConfig:
    name: str
    unit_price: float
    pack_quantity: float
    unit: str = ""
    store: str = ""
    confirmed: bool = False


@dataclass
class CatalogConfig:
    items: list[ItemConfig] = field(default_factory=list)


@dataclass
class MenusConfig:
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


def load_config(path: str | Path | None = None) -> MenusConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    gen = raw.get("generator", {})
    ext = raw.get("extraction", {})
    cat = raw.get("catalog", {})

    claude_cfg = gen.get("claude", {})
    gemini_cfg = gen.get("gemini", {})

    # Resolve API keys: config file → environment variable
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )

    items = [
        ItemConfig(
            name=entry["name"],
            unit_price=entry["unit_price"],
            pack_quantity=entry["pack_quantity"],
            unit=entry.get("unit", ""),
            store=entry.get("store", ""),
            confirmed=entry.get("confirmed", False),
        )
        for entry in cat.get("items", [])
    ]

    return MenusConfig(
        generator=GeneratorConfig(
            backend=gen.get("backend", "gemini"),
            claude=ClaudeGeneratorConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiGeneratorConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
        ),
        extraction=ExtractionConfig(
            match_threshold=ext.get("match_threshold", DEFAULT_MATCH_THRESHOLD),
        ),
        catalog=CatalogConfig(items=items),
    )


def build_catalog(config: MenusConfig) -> Catalog:
    """Create a catalog seeded with the configured items."""
    catalog = Catalog()
    for entry in config.catalog.items:
        catalog.enter(
            entry.name,
            entry.unit_price,
            entry.pack_quantity,
            entry.unit,
            entry.store,
        )
        if entry.confirmed:
            catalog.confirm(entry.name)
    return catalog
