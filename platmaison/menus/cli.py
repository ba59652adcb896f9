"""CLI entry point for the menus module."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from .config import build_catalog, load_config
from .display import format_catalog, format_menus, format_report
from .errors import ExtractionRejectedError, MenuError
from .extraction import create_generator
from .extraction.validator import Accepted, ValidatorSettings, validate
from .pipeline import RecipeImporter
from .store import MenuStore


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="platmaison-menus",
        description="Menu costing with model-assisted recipe import",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to a TOML config file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log pipeline progress"
    )

    sub = parser.add_subparsers(dest="command")

    # items
    items_parser = sub.add_parser("items", help="Show the configured item catalog")
    items_parser.add_argument("--json", action="store_true", help="Output JSON")

    # validate
    validate_parser = sub.add_parser(
        "validate", help="Validate a saved model response"
    )
    validate_parser.add_argument(
        "file", type=str, help="Response file ('-' reads stdin)"
    )
    validate_parser.add_argument("--json", action="store_true", help="Output JSON")

    # extract
    extract_parser = sub.add_parser(
        "extract", help="Pull a recipe into a new menu via the text generator"
    )
    extract_parser.add_argument("source", type=str, help="Recipe URL or text")
    extract_parser.add_argument(
        "--text-file",
        action="store_true",
        help="Treat SOURCE as a file holding the recipe text",
    )
    extract_parser.add_argument(
        "--menu-name", type=str, default="Imported Recipes", help="Menu name"
    )
    extract_parser.add_argument(
        "--date", type=str, default=None, help="Menu date (default: today)"
    )
    extract_parser.add_argument("--json", action="store_true", help="Output JSON")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    load_dotenv()
    config = load_config(args.config)

    try:
        match args.command:
            case "items":
                _cmd_items(config, args)
            case "validate":
                _cmd_validate(config, args)
            case "extract":
                asyncio.run(_cmd_extract(config, args))
    except (MenuError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_items(config, args) -> None:
    catalog = build_catalog(config)
    if args.json:
        data = [item.to_dict() for item in catalog]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print(format_catalog(catalog))


def _cmd_validate(config, args) -> None:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.file).read_text(encoding="utf-8")

    settings = ValidatorSettings(match_threshold=config.extraction.match_threshold)
    result = validate(text, settings)

    if isinstance(result, Accepted):
        candidate = result.candidate
        if args.json:
            data = {
                "accepted": True,
                "match_ratio": result.match_ratio,
                "name": candidate.name,
                "servingQuantity": candidate.serving_quantity,
                "dishType": candidate.dish_type,
                "ingredients": [
                    {"name": i.name, "amount": i.amount}
                    for i in candidate.ingredients
                ],
            }
            print(json.dumps(data, ensure_ascii=False, indent=2))
        else:
            print(f"✅ Accepted: {candidate.name}")
            print(
                f"   {result.match_ratio:.0%} of ingredients are mentioned "
                f"in the instructions"
            )
            for ing in candidate.ingredients:
                print(f"   - {ing.amount:g} {ing.name}")
        return

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(f"❌ Rejected ({result.reason.value}): {result.message}")
    sys.exit(1)


async def _cmd_extract(config, args) -> None:
    source = args.source
    if args.text_file:
        source = Path(args.source).read_text(encoding="utf-8")

    catalog = build_catalog(config)
    store = MenuStore(catalog)
    menu = store.create_menu(args.menu_name, args.date or date.today().isoformat())

    importer = RecipeImporter(
        store,
        create_generator(config),
        ValidatorSettings(match_threshold=config.extraction.match_threshold),
    )

    print("🤖 Requesting recipe parse...")
    try:
        result = await importer.pull_recipe(menu.id, source)
    except ExtractionRejectedError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        data = {
            "menu": menu.to_dict(),
            "report": result.report.to_dict(),
            "match_ratio": result.match_ratio,
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print(f"✅ Stored recipe: {result.recipe.name}")
        print()
        print(format_menus(store.menus))
        print()
        print(format_report(result.report))
