"""Attaches extracted ingredients to a stored recipe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .extraction.validator import ExtractionCandidate
from .store import MenuStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedIngredient:
    name: str  # as extracted
    item_name: str  # catalog item it resolved to
    amount: float


@dataclass(frozen=True)
class UnresolvedIngredient:
    """An extracted ingredient with no catalog item. Reported, never raised."""

    name: str
    amount: float


@dataclass
class IntegrationReport:
    recipe_id: str
    resolved: list[ResolvedIngredient] = field(default_factory=list)
    unresolved: list[UnresolvedIngredient] = field(default_factory=list)

    @property
    def resolved_count(self) -> int:
        return len(self.resolved)

    @property
    def unresolved_count(self) -> int:
        return len(self.unresolved)

    @property
    def unresolved_names(self) -> list[str]:
        return [u.name for u in self.unresolved]

    @property
    def resolution_rate(self) -> float:
        total = self.resolved_count + self.unresolved_count
        if total == 0:
            return 0.0
        return self.resolved_count / total

    def to_dict(self) -> dict:
        return {
            "recipe_id": self.recipe_id,
            "resolved_count": self.resolved_count,
            "unresolved_count": self.unresolved_count,
            "resolved": [
                {"name": r.name, "item": r.item_name, "amount": r.amount}
                for r in self.resolved
            ],
            "unresolved": [
                {"name": u.name, "amount": u.amount} for u in self.unresolved
            ],
        }


class IngredientIntegrator:
    """Resolves candidate ingredient names against the catalog.

    Names are matched exactly (ignoring case). Anything that does not match
    is left for the user to enter by hand; the rest of the recipe is still
    integrated. No catalog items are created.
    """

    def __init__(self, store: MenuStore) -> None:
        self._store = store

    def integrate(
        self,
        menu_id: str | None,
        recipe_id: str,
        candidate: ExtractionCandidate,
    ) -> IntegrationReport:
        # Fail fast on a missing menu/recipe rather than reporting every
        # ingredient as unresolved.
        self._store.get_recipe(menu_id, recipe_id)

        catalog = self._store.catalog
        report = IntegrationReport(recipe_id=recipe_id)
        for ing in candidate.ingredients:
            item = catalog.lookup(ing.name)
            if item is None:
                logger.warning(
                    "Could not add ingredient %r to %s: not in the catalog. "
                    "Enter it and add it manually.",
                    ing.name,
                    recipe_id,
                )
                report.unresolved.append(
                    UnresolvedIngredient(name=ing.name, amount=ing.amount)
                )
                continue

            self._store.set_ingredient(menu_id, recipe_id, item.name, ing.amount)
            report.resolved.append(
                ResolvedIngredient(name=ing.name, item_name=item.name, amount=ing.amount)
            )

        logger.info(
            "Integrated %d/%d ingredients into %s",
            report.resolved_count,
            len(candidate.ingredients),
            recipe_id,
        )
        return report
