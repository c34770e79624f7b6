"""Domain models for the MarketBarrio storefront."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from marketbarrio.config import DEFAULT_PAYMENT_METHOD


@dataclass(frozen=True)
class Product:
    """A catalog product. Loaded once, never mutated."""

    product_id: str
    name: str
    description: str
    category: str
    price: Decimal
    unit: str
    emoji: str = ""


@dataclass(frozen=True)
class CartItem:
    """A requested quantity of one product."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CartSummary:
    """Derived totals for a cart against a catalog."""

    subtotal: Decimal
    delivery: Decimal
    total: Decimal


@dataclass(frozen=True)
class CustomerInfo:
    """Checkout form values."""

    name: str = ""
    phone: str = ""
    address: str = ""
    payment_method: str = DEFAULT_PAYMENT_METHOD

    def is_complete(self) -> bool:
        return all(value.strip() for value in (self.name, self.phone, self.address))


@dataclass(frozen=True)
class Order:
    """A placed order with its cart contents and totals copied at submit time."""

    order_id: int
    created_at: str
    status: str
    payment_method: str
    customer_name: str
    customer_phone: str
    customer_address: str
    items: tuple[CartItem, ...]
    subtotal: Decimal
    delivery: Decimal
    total: Decimal
