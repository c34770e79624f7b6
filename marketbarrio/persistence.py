"""Key-value persistence for the cart and order ledgers."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Protocol

from marketbarrio.cart import CartLedger
from marketbarrio.config import CART_STORAGE_KEY, DB_PATH, ORDERS_STORAGE_KEY
from marketbarrio.models import CartItem, Order
from marketbarrio.orders import OrderLedger

logger = logging.getLogger(__name__)

# Errors that make a stored value unusable; the collection falls back to empty.
_DECODE_ERRORS = (KeyError, TypeError, ValueError, OverflowError, InvalidOperation)


class KeyValueStore(Protocol):
    """String store addressed by key. No transactions, no queries."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteKeyValueStore:
    """Key-value store kept in a single SQLite table."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create the key-value table if it does not already exist."""
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> str | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return str(row[0])

    def set(self, key: str, value: str) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, _utc_now_iso()),
            )


def _money_to_json(value: Decimal) -> str:
    return str(value)


def _money_from_json(value: Any) -> Decimal:
    # Browser exports stored plain JSON numbers; go through str to avoid float noise.
    if isinstance(value, bool):
        raise TypeError("money value cannot be a boolean")
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"money value must be finite: {value!r}")
    return amount


def cart_item_to_dict(item: CartItem) -> dict[str, Any]:
    return {"productId": item.product_id, "quantity": item.quantity}


def cart_item_from_dict(raw: dict[str, Any]) -> CartItem:
    return CartItem(product_id=str(raw["productId"]), quantity=int(raw["quantity"]))


def order_to_dict(order: Order) -> dict[str, Any]:
    return {
        "id": order.order_id,
        "createdAt": order.created_at,
        "status": order.status,
        "paymentMethod": order.payment_method,
        "customerName": order.customer_name,
        "customerPhone": order.customer_phone,
        "customerAddress": order.customer_address,
        "items": [cart_item_to_dict(item) for item in order.items],
        "subtotal": _money_to_json(order.subtotal),
        "delivery": _money_to_json(order.delivery),
        "total": _money_to_json(order.total),
    }


def order_from_dict(raw: dict[str, Any]) -> Order:
    return Order(
        order_id=int(raw["id"]),
        created_at=str(raw["createdAt"]),
        status=str(raw["status"]),
        payment_method=str(raw.get("paymentMethod", "")),
        customer_name=str(raw.get("customerName", "")),
        customer_phone=str(raw.get("customerPhone", "")),
        customer_address=str(raw.get("customerAddress", "")),
        items=tuple(cart_item_from_dict(item) for item in raw["items"]),
        subtotal=_money_from_json(raw["subtotal"]),
        delivery=_money_from_json(raw["delivery"]),
        total=_money_from_json(raw["total"]),
    )


def encode_cart(cart: CartLedger) -> str:
    return json.dumps([cart_item_to_dict(item) for item in cart], ensure_ascii=False)


def encode_orders(ledger: OrderLedger) -> str:
    return json.dumps([order_to_dict(order) for order in ledger], ensure_ascii=False)


def _read_list(store: KeyValueStore, key: str) -> list[Any]:
    try:
        raw = store.get(key)
    except (sqlite3.Error, OSError) as exc:
        logger.warning("read failed key=%s error=%r", key, exc)
        return []
    if raw is None:
        return []

    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("corrupt value key=%s error=%r", key, exc)
        return []
    if not isinstance(decoded, list):
        logger.warning("corrupt value key=%s reason=not_a_list", key)
        return []
    return decoded


def decode_cart_items(entries: list[Any]) -> list[CartItem]:
    items: list[CartItem] = []
    for entry in entries:
        try:
            items.append(cart_item_from_dict(entry))
        except _DECODE_ERRORS as exc:
            logger.warning("skipping cart entry %r: %r", entry, exc)
    return items


def decode_orders(entries: list[Any]) -> list[Order]:
    orders: list[Order] = []
    for entry in entries:
        try:
            orders.append(order_from_dict(entry))
        except _DECODE_ERRORS as exc:
            logger.warning("skipping order entry: %r", exc)
    return orders


def load_cart(store: KeyValueStore, key: str = CART_STORAGE_KEY) -> CartLedger:
    """Load the cart; missing or corrupt data gives an empty cart."""
    return CartLedger(decode_cart_items(_read_list(store, key)))


def load_orders(store: KeyValueStore, key: str = ORDERS_STORAGE_KEY) -> OrderLedger:
    """Load order history; missing or corrupt data gives an empty ledger."""
    return OrderLedger(decode_orders(_read_list(store, key)))


def _write(store: KeyValueStore, key: str, value: str) -> bool:
    try:
        store.set(key, value)
    except (sqlite3.Error, OSError) as exc:
        # In-memory state stays authoritative; the write is dropped.
        logger.warning("write failed key=%s error=%r", key, exc)
        return False
    return True


def save_cart(store: KeyValueStore, cart: CartLedger, key: str = CART_STORAGE_KEY) -> bool:
    """Persist the cart. Returns False when the store rejected the write."""
    return _write(store, key, encode_cart(cart))


def save_orders(store: KeyValueStore, ledger: OrderLedger, key: str = ORDERS_STORAGE_KEY) -> bool:
    """Persist the order history. Returns False when the store rejected the write."""
    return _write(store, key, encode_orders(ledger))
