"""Recomputes derived recipe prices and menu costs."""

from __future__ import annotations

from typing import Iterable

from .models import Menu, Recipe


def recost_recipe(recipe: Recipe) -> float:
    """Set and return the recipe's price from its current ingredient lines.

    Each line costs (unit_price / pack_quantity) * amount * scaling_factor.
    """
    recipe.derived_price = sum(
        line.cost(recipe.scaling_factor) for line in recipe.ingredient_lines
    )
    return recipe.derived_price


def recost_menu(menu: Menu) -> float:
    """Set and return the menu's cost as the sum of its recipe prices."""
    menu.derived_cost = sum(r.derived_price for r in menu.recipes)
    return menu.derived_cost


def recost_all(menus: Iterable[Menu], standalone: Iterable[Recipe] = ()) -> None:
    """Recompute every recipe, then every menu total."""
    menus = list(menus)
    for menu in menus:
        for recipe in menu.recipes:
            recost_recipe(recipe)
    for recipe in standalone:
        recost_recipe(recipe)
    for menu in menus:
        recost_menu(menu)
