"""Storefront session: owns the ledgers and saves them after every change."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from marketbarrio.cart import CartLedger
from marketbarrio.data import CATALOG, index_catalog
from marketbarrio.errors import EmptyCart, MissingCustomerInfo
from marketbarrio.models import CartSummary, CustomerInfo, Order, Product
from marketbarrio.orders import OrderLedger
from marketbarrio.persistence import KeyValueStore, load_cart, load_orders, save_cart, save_orders

logger = logging.getLogger(__name__)

Notify = Callable[[str, str], None]


def _ignore_notice(title: str, message: str) -> None:
    return


class StorefrontSession:
    """One cart ledger and one order ledger bound to a store.

    Every mutator saves the affected ledger before returning and reports
    a (title, message) acknowledgement through ``notify``. All calls are
    expected on a single thread (the UI event loop).
    """

    def __init__(
        self,
        store: KeyValueStore,
        cart: CartLedger | None = None,
        orders: OrderLedger | None = None,
        catalog: Iterable[Product] = CATALOG,
        notify: Notify | None = None,
    ) -> None:
        self.store = store
        self.cart = cart if cart is not None else CartLedger()
        self.orders = orders if orders is not None else OrderLedger()
        self.catalog: tuple[Product, ...] = tuple(catalog)
        self.products_by_id = index_catalog(self.catalog)
        self.notify: Notify = notify or _ignore_notice

    @classmethod
    def load(
        cls,
        store: KeyValueStore,
        catalog: Iterable[Product] = CATALOG,
        notify: Notify | None = None,
    ) -> StorefrontSession:
        """Restore both ledgers from the store; unreadable data starts empty."""
        session = cls(
            store,
            cart=load_cart(store),
            orders=load_orders(store),
            catalog=catalog,
            notify=notify,
        )
        logger.info("session_loaded cart_rows=%d orders=%d", len(session.cart), len(session.orders))
        return session

    def summary(self) -> CartSummary:
        return self.cart.compute_summary(self.products_by_id)

    def add_to_cart(self, product_id: str, quantity: int = 1) -> None:
        self.cart.add(product_id, quantity)
        logger.debug("cart_add product=%s qty=%d now=%d", product_id, quantity, self.cart.quantity_of(product_id))
        save_cart(self.store, self.cart)
        self.notify("Agregado", "Producto añadido al carrito")

    def update_cart_item(self, product_id: str, new_quantity: int) -> None:
        if new_quantity <= 0:
            self.remove_from_cart(product_id)
            return

        self.cart.set_quantity(product_id, new_quantity)
        logger.debug("cart_set product=%s qty=%d", product_id, new_quantity)
        save_cart(self.store, self.cart)

    def remove_from_cart(self, product_id: str) -> None:
        self.cart.remove(product_id)
        logger.debug("cart_remove product=%s", product_id)
        save_cart(self.store, self.cart)
        self.notify("Quitado", "Producto eliminado del carrito")

    def clear_cart(self) -> None:
        self.cart.clear()
        logger.debug("cart_clear")
        save_cart(self.store, self.cart)
        self.notify("Listo", "Carrito vaciado")

    def place_order(self, customer: CustomerInfo) -> Order:
        """Place an order from the current cart, then empty the cart.

        Re-raises MissingCustomerInfo / EmptyCart after notifying; on
        those paths neither ledger is touched.
        """
        try:
            order = self.orders.place_order(self.cart, customer, self.summary())
        except MissingCustomerInfo:
            logger.info("checkout_blocked reason=missing_customer_info")
            self.notify("Falta información", "Completa nombre, teléfono y dirección")
            raise
        except EmptyCart:
            logger.info("checkout_blocked reason=empty_cart")
            self.notify("Carrito vacío", "Agrega productos antes de finalizar")
            raise

        self.cart.clear()
        save_orders(self.store, self.orders)
        save_cart(self.store, self.cart)
        logger.info("order_placed id=%d rows=%d total=%s", order.order_id, len(order.items), order.total)
        self.notify("Pedido creado", f"Tu pedido #{order.order_id} fue registrado")
        return order

    def clear_orders(self) -> None:
        self.orders.clear_history()
        logger.debug("orders_clear")
        save_orders(self.store, self.orders)
        self.notify("Listo", "Historial eliminado")
