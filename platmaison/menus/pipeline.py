"""Recipe import: model text -> validated candidate -> costed recipe."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import ExtractionRejectedError
from .extraction import TextGenerator
from .extraction.prompts import build_pull_recipe_prompt, is_url
from .extraction.validator import Accepted, Rejected, ValidatorSettings, validate
from .integrator import IngredientIntegrator, IntegrationReport
from .models import Recipe
from .store import MenuStore

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    recipe: Recipe
    report: IntegrationReport
    match_ratio: float


class RecipeImporter:
    """Pulls a recipe through a text generator and stores it in a menu.

    The generator is awaited once per `pull_recipe` call. Everything after
    the response arrives is synchronous. Rejections are raised as
    `ExtractionRejectedError` and are never retried here.
    """

    def __init__(
        self,
        store: MenuStore,
        generator: TextGenerator | None = None,
        settings: ValidatorSettings | None = None,
    ) -> None:
        self._store = store
        self._generator = generator
        self._settings = settings or ValidatorSettings()
        self._integrator = IngredientIntegrator(store)

    async def pull_recipe(
        self,
        menu_id: str | None,
        source: str,
        *,
        recipe_id: str | None = None,
    ) -> ImportResult:
        """Ask the generator to parse `source` (a URL or recipe text) and import it."""
        if self._generator is None:
            raise ValueError("RecipeImporter has no text generator configured")

        # Check the target exists before spending a model call on it
        if recipe_id is not None:
            self._store.get_recipe(menu_id, recipe_id)
        elif menu_id is not None:
            self._store.get_menu(menu_id)

        logger.info(
            "Requesting recipe parse for %s",
            source if is_url(source) else "text source",
        )
        prompt = build_pull_recipe_prompt(source)
        response_text = await self._generator.generate(prompt)
        logger.debug("Received %d characters from text generator", len(response_text))

        return self.import_response(
            menu_id,
            response_text,
            recipe_id=recipe_id,
            source=source.strip() if is_url(source) else "text",
        )

    def import_response(
        self,
        menu_id: str | None,
        response_text: str,
        *,
        recipe_id: str | None = None,
        source: str | None = None,
    ) -> ImportResult:
        """Validate a model response and fold it into the store.

        With `recipe_id` the ingredients go into that existing recipe;
        otherwise a new recipe is created from the candidate.

        Raises:
            ExtractionRejectedError: If validation rejects the response.
                Nothing is created in that case.
            NotFoundError: If the menu or target recipe does not exist.
        """
        result = validate(response_text, self._settings)

        match result:
            case Rejected():
                logger.warning("Extraction rejected: %s", result.message)
                raise ExtractionRejectedError(result)
            case Accepted(candidate=candidate, match_ratio=ratio):
                logger.info(
                    "%.0f%% of ingredients are mentioned in the instructions",
                    ratio * 100,
                )

        if recipe_id is None:
            recipe = self._store.create_recipe(
                menu_id,
                candidate.name,
                candidate.instructions,
                candidate.serving_quantity,
                candidate.dish_type,
            )
            if source is not None:
                self._store.update_recipe(menu_id, recipe.id, source=source)
        else:
            recipe = self._store.get_recipe(menu_id, recipe_id)

        report = self._integrator.integrate(menu_id, recipe.id, candidate)
        logger.info("Stored recipe %s %r", recipe.id, recipe.name)
        return ImportResult(recipe=recipe, report=report, match_ratio=ratio)
