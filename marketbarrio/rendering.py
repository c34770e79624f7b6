"""Rendering helpers for products, cart rows, totals and orders."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Mapping

from rich.text import Text

from marketbarrio.config import CURRENCY_PREFIX
from marketbarrio.constant import CATEGORY_BADGE_STYLES
from marketbarrio.data import product_label
from marketbarrio.models import CartItem, CartSummary, Order, Product
from marketbarrio.orders import status_glyph

_DEFAULT_BADGE_STYLE = "bold #ffffff on #555555"


def badge_style(category: str) -> str:
    """Return a consistent badge style for a category tag."""
    return CATEGORY_BADGE_STYLES.get(category, _DEFAULT_BADGE_STYLE)


def format_money(amount: Decimal) -> str:
    return f"{CURRENCY_PREFIX} {amount:.2f}"


def format_delivery(delivery: Decimal) -> str:
    if delivery == 0:
        return "Gratis"
    return format_money(delivery)


def format_order_date(created_at: str) -> str:
    """Render an ISO timestamp in local time; unparsable values are shown as-is."""
    try:
        parsed = datetime.fromisoformat(created_at)
    except ValueError:
        return created_at
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%d/%m/%Y %H:%M")


def line_total(item: CartItem, products_by_id: Mapping[str, Product]) -> Decimal:
    product = products_by_id.get(item.product_id)
    if product is None:
        return Decimal("0")
    return product.price * item.quantity


def format_product_label(product: Product, in_cart: int = 0) -> Text:
    """Render a catalog row with its category badge and cart quantity."""
    text = Text()
    if product.emoji:
        text.append(f"{product.emoji} ")
    text.append(product.name, style="bold")
    text.append(f"  {format_money(product.price)}")
    text.append(f" / {product.unit}  ", style="dim")
    text.append(f" {product.category} ", style=badge_style(product.category))
    if in_cart:
        text.append(f"  x{in_cart}", style="bold #5fbf72")
    return text


def format_cart_line(item: CartItem, products_by_id: Mapping[str, Product]) -> Text:
    """Render a cart row; products missing from the catalog get a placeholder."""
    product = products_by_id.get(item.product_id)
    text = Text()
    if product is None:
        text.append(product_label(item.product_id, products_by_id), style="italic dim")
        text.append(f"  x{item.quantity}")
        return text

    if product.emoji:
        text.append(f"{product.emoji} ")
    text.append(product.name, style="bold")
    text.append(f"  {item.quantity} × {format_money(product.price)}", style="dim")
    text.append(f"  = {format_money(line_total(item, products_by_id))}")
    return text


def format_summary(summary: CartSummary) -> Text:
    text = Text()
    text.append(f"Subtotal  {format_money(summary.subtotal)}\n")
    text.append(f"Envío     {format_delivery(summary.delivery)}\n")
    text.append(f"Total     {format_money(summary.total)}", style="bold")
    return text


def format_order_block(order: Order, products_by_id: Mapping[str, Product]) -> Text:
    """Render one order history entry."""
    text = Text()
    text.append(f"Pedido #{order.order_id}", style="bold")
    text.append(f"  {status_glyph(order.status)} {order.status}\n")
    text.append(f"{format_order_date(order.created_at)} • {order.payment_method}\n", style="dim")
    for item in order.items:
        text.append(f"  • {item.quantity} × {product_label(item.product_id, products_by_id)}\n")
    text.append(f"Entrega: {order.customer_address}\n", style="dim")
    text.append(f"Total {format_money(order.total)}", style="bold")
    return text
