"""Plain-text rendering of catalog, menu and import state."""

from __future__ import annotations

from typing import Iterable

from .catalog import Catalog
from .integrator import IntegrationReport
from .models import Menu, Recipe


def _amount(value: float) -> str:
    return f"{value:g}"


def format_catalog(catalog: Catalog) -> str:
    lines = ["🛒 Item Catalog", "=" * 20]
    if not len(catalog):
        lines.append("No items have been entered yet.")
        return "\n".join(lines)

    for item in catalog:
        status = "✅ Confirmed" if item.confirmed else "⏳ Unconfirmed"
        lines.append("")
        lines.append(f"- {item.name} [{status}]")
        lines.append(
            f"  Price: ${item.unit_price:.2f} for "
            f"{_amount(item.pack_quantity)} {item.unit}"
        )
        lines.append(f"  Store: {item.store}")
    return "\n".join(lines)


def format_recipe(recipe: Recipe, indent: str = "") -> str:
    lines = [
        f"{indent}- {recipe.name} (Serves: {recipe.serving_quantity}, "
        f"Cost: ${recipe.derived_price:.2f})"
    ]
    if recipe.scaling_factor != 1.0:
        lines.append(f"{indent}  Scaled x{_amount(recipe.scaling_factor)}")
    for line in recipe.ingredient_lines:
        lines.append(
            f"{indent}    - {_amount(line.amount)} {line.item.unit} {line.item.name}"
        )
    return "\n".join(lines)


def format_menus(menus: Iterable[Menu]) -> str:
    menus = list(menus)
    lines = ["📅 Menu Overviews", "=" * 20]
    if not menus:
        lines.append("No menus created yet.")
        return "\n".join(lines)

    for menu in menus:
        lines.append("")
        lines.append(f"--- Menu: {menu.name} ({menu.date}) ---")
        lines.append(f"Total Cost: ${menu.derived_cost:.2f}")
        lines.append("Recipes:")
        if not menu.recipes:
            lines.append("  No recipes added yet.")
        for recipe in menu.recipes:
            lines.append(format_recipe(recipe, indent="  "))
    return "\n".join(lines)


def format_report(report: IntegrationReport) -> str:
    lines = [
        f"🧾 Ingredients resolved: {report.resolved_count}, "
        f"unresolved: {report.unresolved_count}"
    ]
    if report.unresolved:
        lines.append("⚠️  Enter these items and add them manually:")
        for u in report.unresolved:
            lines.append(f"    - {u.name} ({_amount(u.amount)})")
    return "\n".join(lines)
