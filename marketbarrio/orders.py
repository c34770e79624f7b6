"""Order ledger: placed orders, newest first."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator, Sequence

from marketbarrio.cart import CartLedger
from marketbarrio.config import DEFAULT_ORDER_STATUS
from marketbarrio.constant import DEFAULT_STATUS_GLYPH, STATUS_GLYPH_RULES
from marketbarrio.errors import EmptyCart, MissingCustomerInfo
from marketbarrio.models import CartSummary, CustomerInfo, Order


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def status_glyph(
    status: str | None,
    rules: Sequence[tuple[str, str]] = STATUS_GLYPH_RULES,
    default: str = DEFAULT_STATUS_GLYPH,
) -> str:
    """Classify a free-form status string into a display glyph.

    Rules are (keyword, glyph) pairs matched as case-insensitive substrings
    in order; the first hit wins and anything unmatched gets ``default``.
    """
    s = (status or "").lower()
    for keyword, glyph in rules:
        if keyword.lower() in s:
            return glyph
    return default


class OrderLedger:
    """Placed orders, newest first.

    Order ids are millisecond timestamps bumped past the last issued id,
    so two orders placed within the same clock tick still differ.
    """

    def __init__(
        self,
        orders: Iterable[Order] = (),
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._orders: list[Order] = list(orders)
        self._clock = clock
        self._last_id = max((order.order_id for order in self._orders), default=0)

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(tuple(self._orders))

    def __len__(self) -> int:
        return len(self._orders)

    def is_empty(self) -> bool:
        return not self._orders

    def place_order(self, cart: CartLedger, customer: CustomerInfo, summary: CartSummary) -> Order:
        """Snapshot the cart into a new order and put it first in the ledger.

        Raises MissingCustomerInfo before EmptyCart; either way nothing
        changes. Clearing the cart afterwards is the caller's job.
        """
        if not customer.is_complete():
            raise MissingCustomerInfo("Name, phone and address are required")
        if cart.is_empty():
            raise EmptyCart("Cannot place an order with an empty cart")

        now = self._clock()
        order = Order(
            order_id=self._next_id(now),
            created_at=now.isoformat(),
            status=DEFAULT_ORDER_STATUS,
            payment_method=customer.payment_method,
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_address=customer.address,
            items=cart.items,
            subtotal=summary.subtotal,
            delivery=summary.delivery,
            total=summary.total,
        )
        self._orders.insert(0, order)
        return order

    def clear_history(self) -> None:
        self._orders = []

    def _next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id
