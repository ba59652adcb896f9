"""Tests for the platmaison-menus CLI."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from platmaison.menus.cli import main

_CONFIG = b"""\
[generator]
backend = "claude"

[generator.claude]
api_key = "test-key"

[[catalog.items]]
name = "flour"
unit_price = 3.0
pack_quantity = 5
unit = "lbs"
store = "SuperMart"
confirmed = true

[[catalog.items]]
name = "sugar"
unit_price = 3.0
pack_quantity = 4
unit = "lbs"
store = "SuperMart"
"""

_RESPONSE = json.dumps({
    "name": "Shortbread",
    "instructions": "Rub the butter into the flour, stir in the sugar and bake.",
    "servingQuantity": 12,
    "dishType": "Dessert",
    "ingredients": [
        {"name": "flour", "amount": 2},
        {"name": "sugar", "amount": 1},
        {"name": "butter", "amount": 1},
    ],
})


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "menus.toml"
    path.write_bytes(_CONFIG)
    return path


@pytest.fixture
def response_path(tmp_path):
    path = tmp_path / "response.txt"
    path.write_text("Here you go:\n" + _RESPONSE, encoding="utf-8")
    return path


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "platmaison-menus" in capsys.readouterr().out


def test_items(config_path, capsys):
    main(["--config", str(config_path), "items"])
    out = capsys.readouterr().out
    assert "- flour [✅ Confirmed]" in out
    assert "- sugar [⏳ Unconfirmed]" in out


def test_items_json(config_path, capsys):
    main(["--config", str(config_path), "items", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert [d["name"] for d in data] == ["flour", "sugar"]


def test_validate_accepted(config_path, response_path, capsys):
    main(["--config", str(config_path), "validate", str(response_path)])
    out = capsys.readouterr().out
    assert "Accepted: Shortbread" in out
    assert "100%" in out


def test_validate_json(config_path, response_path, capsys):
    main(["--config", str(config_path), "validate", str(response_path), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["accepted"] is True
    assert data["servingQuantity"] == 12
    assert len(data["ingredients"]) == 3


def test_validate_rejected(config_path, tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("No recipe here.", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path), "validate", str(path)])
    assert exc_info.value.code == 1
    assert "no_structured_data" in capsys.readouterr().out


def test_extract(config_path, capsys):
    generate = AsyncMock(return_value=_RESPONSE)
    with patch(
        "platmaison.menus.extraction.claude.ClaudeTextGenerator.generate", generate
    ):
        main([
            "--config", str(config_path),
            "extract", "https://example.com/shortbread",
            "--menu-name", "Bake Sale", "--date", "2025-10-26",
        ])

    out = capsys.readouterr().out
    assert "Stored recipe: Shortbread" in out
    assert "--- Menu: Bake Sale (2025-10-26) ---" in out
    assert "Total Cost: $1.95" in out
    assert "resolved: 2, unresolved: 1" in out
    assert "butter" in out
    generate.assert_awaited_once()


def test_extract_json(config_path, capsys):
    generate = AsyncMock(return_value=_RESPONSE)
    with patch(
        "platmaison.menus.extraction.claude.ClaudeTextGenerator.generate", generate
    ):
        main(["--config", str(config_path), "extract", "https://example.com", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["report"]["unresolved"] == [{"name": "butter", "amount": 1.0}]
    assert data["menu"]["cost"] == 1.95


def test_extract_rejected(config_path, capsys):
    generate = AsyncMock(return_value="I can't open that link.")
    with patch(
        "platmaison.menus.extraction.claude.ClaudeTextGenerator.generate", generate
    ):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "extract", "https://example.com"])

    assert exc_info.value.code == 1
    assert "No JSON object found" in capsys.readouterr().err


def test_items_bad_config_item(tmp_path, capsys):
    path = tmp_path / "bad.toml"
    path.write_bytes(b"""\
[[catalog.items]]
name = "flour"
unit_price = 3.0
pack_quantity = 0
""")
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(path), "items"])
    assert exc_info.value.code == 1
    assert "Error: pack_quantity must be a finite number > 0" in capsys.readouterr().err
