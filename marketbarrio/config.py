"""Runtime configuration defaults for persistence, pricing and the UI."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

DB_PATH = os.environ.get("MARKETBARRIO_DB_PATH", "data/marketbarrio.db")


def default_debug_log_path(db_path: str | Path) -> str:
    """Debug log lives next to the database file."""
    return str(Path(db_path).parent / "marketbarrio-debug.log")


DEBUG_LOG_PATH = os.environ.get("MARKETBARRIO_DEBUG_LOG", default_debug_log_path(DB_PATH))

# Storage keys kept from the browser build so exported data stays readable.
CART_STORAGE_KEY = "mb_cart_v1"
ORDERS_STORAGE_KEY = "mb_orders_v1"

MAX_ITEM_QUANTITY = 99
FREE_DELIVERY_THRESHOLD = Decimal("35")
DELIVERY_FEE = Decimal("6")
CURRENCY_PREFIX = "S/"

DEFAULT_ORDER_STATUS = "Recibido"
PAYMENT_METHODS: tuple[str, ...] = ("Contraentrega", "Yape/Plin (simulado)")
DEFAULT_PAYMENT_METHOD = PAYMENT_METHODS[0]

TOAST_TIMEOUT_SECONDS = 2.5
