"""Menu costing with model-assisted recipe import."""

from .catalog import Catalog, Item
from .config import MenusConfig, build_catalog, load_config
from .costing import recost_all, recost_menu, recost_recipe
from .errors import (
    AlreadyConfirmedError,
    DuplicateItemError,
    ExtractionRejectedError,
    MenuError,
    NotFoundError,
    UnknownItemError,
)
from .extraction import TextGenerator, create_generator
from .extraction.validator import (
    Accepted,
    ExtractionCandidate,
    Rejected,
    RejectionReason,
    ValidatorSettings,
    validate,
)
from .integrator import IngredientIntegrator, IntegrationReport, UnresolvedIngredient
from .models import IngredientLine, Menu, Recipe
from .pipeline import ImportResult, RecipeImporter
from .store import MenuStore

__all__ = [
    "Catalog",
    "Item",
    "MenuStore",
    "Menu",
    "Recipe",
    "IngredientLine",
    "recost_recipe",
    "recost_menu",
    "recost_all",
    "validate",
    "ValidatorSettings",
    "Accepted",
    "Rejected",
    "RejectionReason",
    "ExtractionCandidate",
    "IngredientIntegrator",
    "IntegrationReport",
    "UnresolvedIngredient",
    "RecipeImporter",
    "ImportResult",
    "TextGenerator",
    "create_generator",
    "MenusConfig",
    "load_config",
    "build_catalog",
    "MenuError",
    "DuplicateItemError",
    "NotFoundError",
    "AlreadyConfirmedError",
    "UnknownItemError",
    "ExtractionRejectedError",
]
