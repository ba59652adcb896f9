"""Catalog of purchasable items, keyed by case-insensitive name."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator

from .errors import AlreadyConfirmedError, DuplicateItemError, NotFoundError

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("unit_price", "pack_quantity", "unit", "store")
_IMMUTABLE_FIELDS = ("name", "confirmed")


def normalize_name(name: str) -> str:
    """Catalog key for an item name."""
    return name.strip().lower()


@dataclass(eq=False)
class Item:
    """A purchasable item: `unit_price` buys `pack_quantity` `unit`s."""

    name: str
    unit_price: float
    pack_quantity: float
    unit: str
    store: str
    confirmed: bool = False

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    @property
    def unit_cost(self) -> float:
        """Price of a single unit (pack price / pack quantity)."""
        return self.unit_price / self.pack_quantity

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "unit_price": self.unit_price,
            "pack_quantity": self.pack_quantity,
            "unit": self.unit,
            "store": self.store,
            "confirmed": self.confirmed,
        }


def _check_price(unit_price: float) -> None:
    if not math.isfinite(unit_price) or unit_price < 0:
        raise ValueError(f"unit_price must be a finite number >= 0, got {unit_price!r}")


def _check_pack_quantity(pack_quantity: float) -> None:
    if not math.isfinite(pack_quantity) or pack_quantity <= 0:
        raise ValueError(f"pack_quantity must be a finite number > 0, got {pack_quantity!r}")


class Catalog:
    """Owns every `Item`. Recipes hold references to these objects.

    Listeners registered with `add_listener` are called with the item after
    each successful `update`, so derived costs can be refreshed.
    """

    def __init__(self) -> None:
        self._items: dict[str, Item] = {}
        self._listeners: list[Callable[[Item], None]] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._items

    @property
    def items(self) -> list[Item]:
        return list(self._items.values())

    def add_listener(self, callback: Callable[[Item], None]) -> None:
        self._listeners.append(callback)

    def enter(
        self,
        name: str,
        unit_price: float,
        pack_quantity: float,
        unit: str,
        store: str,
    ) -> Item:
        """Enter a new, unconfirmed item.

        Raises:
            DuplicateItemError: If an item with the same name (ignoring case)
                already exists.
            ValueError: If the name is blank, the price negative or the pack
                quantity not positive.
        """
        key = normalize_name(name)
        if not key:
            raise ValueError("Item name must not be empty")
        if key in self._items:
            raise DuplicateItemError(name)
        _check_price(unit_price)
        _check_pack_quantity(pack_quantity)

        item = Item(
            name=name.strip(),
            unit_price=unit_price,
            pack_quantity=pack_quantity,
            unit=unit,
            store=store,
        )
        self._items[key] = item
        logger.debug("Entered item %r", item.name)
        return item

    def confirm(self, name: str) -> Item:
        item = self.get(name)
        if item.confirmed:
            raise AlreadyConfirmedError(item.name)
        item.confirmed = True
        return item

    def update(self, name: str, **fields) -> Item:
        """Update price, pack quantity, unit or store of an existing item.

        All fields are checked before any is applied. Listeners run after the
        item has changed.
        """
        item = self.get(name)

        for field_name in fields:
            if field_name in _IMMUTABLE_FIELDS:
                raise ValueError(f"Item field {field_name!r} cannot be updated")
            if field_name not in _UPDATABLE_FIELDS:
                raise ValueError(f"Unknown item field {field_name!r}")
        if "unit_price" in fields:
            _check_price(fields["unit_price"])
        if "pack_quantity" in fields:
            _check_pack_quantity(fields["pack_quantity"])

        for field_name, value in fields.items():
            setattr(item, field_name, value)

        logger.info("Updated item %r: %s", item.name, ", ".join(sorted(fields)))
        for listener in self._listeners:
            listener(item)
        return item

    def lookup(self, name: str) -> Item | None:
        """Exact, case-insensitive lookup. No fuzzy matching."""
        return self._items.get(normalize_name(name))

    def get(self, name: str) -> Item:
        item = self.lookup(name)
        if item is None:
            raise NotFoundError("item", name)
        return item
