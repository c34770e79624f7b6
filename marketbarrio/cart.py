"""Cart ledger: the in-progress order as (product, quantity) rows."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Iterator, Mapping

from marketbarrio.config import DELIVERY_FEE, FREE_DELIVERY_THRESHOLD, MAX_ITEM_QUANTITY
from marketbarrio.models import CartItem, CartSummary, Product


def clamp_quantity(quantity: int) -> int:
    """Clamp a requested quantity into the allowed 1..MAX_ITEM_QUANTITY range."""
    return min(max(int(quantity), 1), MAX_ITEM_QUANTITY)


def delivery_fee_for(subtotal: Decimal) -> Decimal:
    """Flat delivery fee, waived for empty carts and at or above the free threshold."""
    if subtotal == 0 or subtotal >= FREE_DELIVERY_THRESHOLD:
        return Decimal("0")
    return DELIVERY_FEE


class CartLedger:
    """Ordered cart rows, one per product, in first-add order.

    Quantities are always within 1..99. Lowering a quantity to zero or
    below removes the row instead of storing it.
    """

    def __init__(self, items: Iterable[CartItem] = ()) -> None:
        self._items: list[CartItem] = []
        for item in items:
            if item.quantity <= 0:
                continue
            self.add(item.product_id, item.quantity)

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def item_count(self) -> int:
        """Total units across all rows."""
        return sum(item.quantity for item in self._items)

    def quantity_of(self, product_id: str) -> int:
        idx = self._index_of(product_id)
        if idx is None:
            return 0
        return self._items[idx].quantity

    def add(self, product_id: str, quantity: int = 1) -> None:
        """Add units of a product, merging into an existing row.

        A negative quantity that takes an existing row to zero or below removes it.
        """
        idx = self._index_of(product_id)
        if idx is None:
            self._items.append(CartItem(product_id=product_id, quantity=clamp_quantity(quantity)))
            return

        existing = self._items[idx]
        if existing.quantity + quantity <= 0:
            self.remove(product_id)
            return
        self._items[idx] = CartItem(
            product_id=product_id,
            quantity=clamp_quantity(existing.quantity + quantity),
        )

    def set_quantity(self, product_id: str, new_quantity: int) -> None:
        """Replace a row's quantity. Non-positive removes; unknown ids are ignored."""
        if new_quantity <= 0:
            self.remove(product_id)
            return

        idx = self._index_of(product_id)
        if idx is None:
            return
        self._items[idx] = CartItem(product_id=product_id, quantity=clamp_quantity(new_quantity))

    def remove(self, product_id: str) -> None:
        self._items = [item for item in self._items if item.product_id != product_id]

    def clear(self) -> None:
        self._items = []

    def compute_summary(self, products_by_id: Mapping[str, Product]) -> CartSummary:
        """Compute subtotal, delivery and total against the current catalog.

        Rows whose product is missing from the catalog contribute nothing.
        """
        subtotal = Decimal("0")
        for item in self._items:
            product = products_by_id.get(item.product_id)
            if product is None:
                continue
            subtotal += product.price * item.quantity

        delivery = delivery_fee_for(subtotal)
        return CartSummary(subtotal=subtotal, delivery=delivery, total=subtotal + delivery)

    def _index_of(self, product_id: str) -> int | None:
        for idx, item in enumerate(self._items):
            if item.product_id == product_id:
                return idx
        return None
