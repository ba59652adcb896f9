"""In-memory store for menus and their recipes."""

from __future__ import annotations

import itertools
import logging
import math

from .catalog import Catalog, Item
from .costing import recost_all, recost_menu, recost_recipe
from .errors import NotFoundError, UnknownItemError
from .models import IngredientLine, Menu, Recipe

logger = logging.getLogger(__name__)

_RECIPE_FIELDS = (
    "name",
    "instructions",
    "serving_quantity",
    "dish_type",
    "scaling_factor",
    "source",
)


def _check_recipe_values(
    serving_quantity: int | None = None,
    scaling_factor: float | None = None,
) -> None:
    if serving_quantity is not None and serving_quantity <= 0:
        raise ValueError(f"serving_quantity must be > 0, got {serving_quantity!r}")
    if scaling_factor is not None and (
        not math.isfinite(scaling_factor) or scaling_factor < 0
    ):
        raise ValueError(
            f"scaling_factor must be a finite number >= 0, got {scaling_factor!r}"
        )


class MenuStore:
    """Owns menus and recipes and keeps their derived costs current.

    Not thread-safe. Callers sharing a store must serialize access.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._menus: dict[str, Menu] = {}
        self._standalone: dict[str, Recipe] = {}
        self._ids = itertools.count(1)
        catalog.add_listener(self._on_item_updated)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def menus(self) -> list[Menu]:
        return list(self._menus.values())

    @property
    def standalone_recipes(self) -> list[Recipe]:
        return list(self._standalone.values())

    def all_recipes(self) -> list[Recipe]:
        recipes = [r for m in self._menus.values() for r in m.recipes]
        return recipes + list(self._standalone.values())

    def get_menu(self, menu_id: str) -> Menu:
        menu = self._menus.get(menu_id)
        if menu is None:
            raise NotFoundError("menu", menu_id)
        return menu

    def get_recipe(self, menu_id: str | None, recipe_id: str) -> Recipe:
        """Find a recipe in a menu, or among standalone recipes if menu_id is None."""
        if menu_id is None:
            recipe = self._standalone.get(recipe_id)
        else:
            recipe = self.get_menu(menu_id).find_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError("recipe", recipe_id)
        return recipe

    def create_menu(self, name: str, date: str) -> Menu:
        menu = Menu(id=f"menu-{next(self._ids)}", name=name, date=date)
        self._menus[menu.id] = menu
        logger.info("Created menu %s %r for %s", menu.id, name, date)
        return menu

    def create_recipe(
        self,
        menu_id: str | None,
        name: str,
        instructions: str,
        serving_quantity: int,
        dish_type: str,
        scaling_factor: float = 1.0,
    ) -> Recipe:
        """Create an empty recipe in a menu (or standalone when menu_id is None)."""
        menu = self.get_menu(menu_id) if menu_id is not None else None
        _check_recipe_values(serving_quantity, scaling_factor)

        recipe = Recipe(
            id=f"recipe-{next(self._ids)}",
            name=name,
            instructions=instructions,
            serving_quantity=serving_quantity,
            dish_type=dish_type,
            scaling_factor=scaling_factor,
            menu_id=menu_id,
        )
        if menu is None:
            self._standalone[recipe.id] = recipe
        else:
            menu.recipes.append(recipe)
            recost_menu(menu)
        logger.info("Created recipe %s %r in %s", recipe.id, name, menu_id or "-")
        return recipe

    def set_ingredient(
        self,
        menu_id: str | None,
        recipe_id: str,
        item_name: str,
        amount: float,
    ) -> Recipe:
        """Add an ingredient line, or overwrite the amount of an existing one.

        The recipe price and its menu cost are recomputed before returning.

        Raises:
            NotFoundError: If the menu or recipe does not exist.
            UnknownItemError: If the item is not in the catalog.
            ValueError: If amount is negative or not finite.
        """
        recipe = self.get_recipe(menu_id, recipe_id)
        item = self._catalog.lookup(item_name)
        if item is None:
            raise UnknownItemError(item_name)
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"amount must be a finite number >= 0, got {amount!r}")

        line = recipe.line_for(item)
        if line is not None:
            line.amount = amount
        else:
            recipe.ingredient_lines.append(IngredientLine(item=item, amount=amount))

        self._recost(recipe)
        return recipe

    def update_recipe(self, menu_id: str | None, recipe_id: str, **fields) -> Recipe:
        """Update top-level recipe fields. Ingredient lines are not touched."""
        recipe = self.get_recipe(menu_id, recipe_id)
        for field_name in fields:
            if field_name not in _RECIPE_FIELDS:
                raise ValueError(f"Recipe field {field_name!r} cannot be updated")
        _check_recipe_values(
            fields.get("serving_quantity"), fields.get("scaling_factor")
        )

        for field_name, value in fields.items():
            setattr(recipe, field_name, value)
        if "scaling_factor" in fields:
            self._recost(recipe)
        return recipe

    def recost_all(self) -> None:
        recost_all(self._menus.values(), self._standalone.values())

    def _recost(self, recipe: Recipe) -> None:
        recost_recipe(recipe)
        if recipe.menu_id is not None:
            recost_menu(self._menus[recipe.menu_id])

    def _on_item_updated(self, item: Item) -> None:
        self.recost_all()
