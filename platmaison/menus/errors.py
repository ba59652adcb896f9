"""Exceptions raised by the catalog, the menu store and the import pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .extraction.validator import Rejected


class MenuError(Exception):
    """Base class for every error this package raises on purpose."""


class DuplicateItemError(MenuError):
    """An item with the same normalized name is already in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Item with name {name!r} already exists.")


class NotFoundError(MenuError):
    """A menu, recipe or catalog item does not exist."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind.capitalize()} {key!r} not found.")


class AlreadyConfirmedError(MenuError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Item {name!r} has already been confirmed.")


class UnknownItemError(MenuError):
    """An ingredient refers to an item that is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Item {name!r} is not in the catalog. Enter it before adding it "
            f"to a recipe."
        )


class ExtractionRejectedError(MenuError):
    """The model output did not pass validation; no recipe was created."""

    def __init__(self, rejection: Rejected) -> None:
        self.rejection = rejection
        super().__init__(rejection.message)
