"""Recipe and menu data types."""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import Item


@dataclass
class IngredientLine:
    """An amount of a catalog item used by one recipe.

    `item` is the catalog's own Item object, so price edits show up here.
    """

    item: Item
    amount: float

    def cost(self, scaling_factor: float = 1.0) -> float:
        return self.item.unit_cost * self.amount * scaling_factor

    def to_dict(self) -> dict:
        return {
            "item": self.item.name,
            "amount": self.amount,
            "unit": self.item.unit,
        }


@dataclass
class Recipe:
    """A recipe, either attached to a menu (`menu_id`) or standalone."""

    id: str
    name: str
    instructions: str
    serving_quantity: int
    dish_type: str
    scaling_factor: float = 1.0
    ingredient_lines: list[IngredientLine] = field(default_factory=list)
    derived_price: float = 0.0  # written by costing.recost_recipe only
    menu_id: str | None = None
    source: str | None = None

    @property
    def price_per_serving(self) -> float:
        return self.derived_price / self.serving_quantity

    def line_for(self, item: Item) -> IngredientLine | None:
        for line in self.ingredient_lines:
            if line.item is item:
                return line
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "instructions": self.instructions,
            "serving_quantity": self.serving_quantity,
            "dish_type": self.dish_type,
            "scaling_factor": self.scaling_factor,
            "ingredients": [line.to_dict() for line in self.ingredient_lines],
            "price": round(self.derived_price, 2),
            "menu_id": self.menu_id,
            "source": self.source,
        }


@dataclass
class Menu:
    id: str
    name: str
    date: str
    recipes: list[Recipe] = field(default_factory=list)
    derived_cost: float = 0.0

    def find_recipe(self, recipe_id: str) -> Recipe | None:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "cost": round(self.derived_cost, 2),
            "recipes": [r.to_dict() for r in self.recipes],
        }
