"""Tests for the storefront session: save-on-change and acknowledgements."""

import json
from decimal import Decimal

import pytest

from marketbarrio.config import CART_STORAGE_KEY, ORDERS_STORAGE_KEY
from marketbarrio.errors import EmptyCart, MissingCustomerInfo
from marketbarrio.models import CartItem, CustomerInfo
from marketbarrio.persistence import MemoryKeyValueStore
from marketbarrio.session import StorefrontSession


def _customer(**overrides):
    values = {"name": "Rosa", "phone": "987654321", "address": "Jr. Lima 123"}
    values.update(overrides)
    return CustomerInfo(**values)


def _stored(store, key):
    return json.loads(store.get(key))


class BrokenStore(MemoryKeyValueStore):
    def set(self, key, value):
        raise OSError("quota exceeded")


class TestCartOperations:
    def test_add_saves_and_notifies(self, session, store, notices):
        session.add_to_cart("rice", 2)
        assert _stored(store, CART_STORAGE_KEY) == [{"productId": "rice", "quantity": 2}]
        assert notices.notices == [("Agregado", "Producto añadido al carrito")]

    def test_update_saves_without_notice(self, session, store, notices):
        session.add_to_cart("rice")
        session.update_cart_item("rice", 4)
        assert _stored(store, CART_STORAGE_KEY) == [{"productId": "rice", "quantity": 4}]
        assert notices.titles == ["Agregado"]

    def test_update_to_zero_removes(self, session, store, notices):
        session.add_to_cart("rice")
        session.update_cart_item("rice", 0)
        assert _stored(store, CART_STORAGE_KEY) == []
        assert notices.titles == ["Agregado", "Quitado"]

    def test_remove_saves_and_notifies(self, session, store, notices):
        session.add_to_cart("rice")
        session.add_to_cart("oil")
        session.remove_from_cart("rice")
        assert _stored(store, CART_STORAGE_KEY) == [{"productId": "oil", "quantity": 1}]
        assert notices.notices[-1] == ("Quitado", "Producto eliminado del carrito")

    def test_clear_saves_and_notifies(self, session, store, notices):
        session.add_to_cart("rice")
        session.clear_cart()
        assert _stored(store, CART_STORAGE_KEY) == []
        assert notices.notices[-1] == ("Listo", "Carrito vaciado")

    def test_summary_uses_session_catalog(self, session):
        session.add_to_cart("rice", 2)
        summary = session.summary()
        assert summary.subtotal == Decimal("9.00")
        assert summary.total == Decimal("15.00")


class TestPlaceOrder:
    def test_successful_order(self, session, store, notices):
        session.add_to_cart("rice", 2)
        order = session.place_order(_customer())

        assert order.subtotal == Decimal("9.00")
        assert order.delivery == Decimal("6")
        assert order.total == Decimal("15.00")
        assert session.cart.is_empty()
        assert session.orders.orders[0] is order
        assert _stored(store, CART_STORAGE_KEY) == []
        assert _stored(store, ORDERS_STORAGE_KEY)[0]["id"] == order.order_id
        assert notices.notices[-1] == ("Pedido creado", f"Tu pedido #{order.order_id} fue registrado")

    def test_missing_phone(self, session, store, notices):
        session.add_to_cart("rice", 2)
        saved_cart = store.get(CART_STORAGE_KEY)
        with pytest.raises(MissingCustomerInfo):
            session.place_order(_customer(phone=""))

        assert session.cart.items == (CartItem("rice", 2),)
        assert session.orders.is_empty()
        assert store.get(CART_STORAGE_KEY) == saved_cart
        assert store.get(ORDERS_STORAGE_KEY) is None
        assert notices.notices[-1] == ("Falta información", "Completa nombre, teléfono y dirección")

    def test_empty_cart(self, session, store, notices):
        with pytest.raises(EmptyCart):
            session.place_order(_customer())

        assert session.cart.is_empty()
        assert session.orders.is_empty()
        assert store.get(ORDERS_STORAGE_KEY) is None
        assert notices.notices == [("Carrito vacío", "Agrega productos antes de finalizar")]

    def test_order_snapshot_survives_new_cart_activity(self, session):
        session.add_to_cart("rice", 2)
        order = session.place_order(_customer())
        session.add_to_cart("rice", 10)
        session.add_to_cart("oil")
        assert session.orders.orders[0].items == (CartItem("rice", 2),)
        assert session.orders.orders[0].total == order.total

    def test_clear_orders_keeps_cart(self, session, store, notices):
        session.add_to_cart("rice")
        session.place_order(_customer())
        session.add_to_cart("oil")
        session.clear_orders()

        assert session.orders.is_empty()
        assert session.cart.items == (CartItem("oil", 1),)
        assert _stored(store, ORDERS_STORAGE_KEY) == []
        assert notices.notices[-1] == ("Listo", "Historial eliminado")


class TestLoad:
    def test_load_restores_both_ledgers(self, session, store, catalog):
        session.add_to_cart("rice", 2)
        session.place_order(_customer())
        session.add_to_cart("oil", 3)

        restored = StorefrontSession.load(store, catalog=catalog)
        assert restored.cart.items == session.cart.items
        assert restored.orders.orders == session.orders.orders

    def test_load_from_empty_store(self, catalog):
        restored = StorefrontSession.load(MemoryKeyValueStore(), catalog=catalog)
        assert restored.cart.is_empty()
        assert restored.orders.is_empty()

    def test_load_from_corrupt_store(self, catalog):
        store = MemoryKeyValueStore({CART_STORAGE_KEY: "nope", ORDERS_STORAGE_KEY: "{}"})
        restored = StorefrontSession.load(store, catalog=catalog)
        assert restored.cart.is_empty()
        assert restored.orders.is_empty()

    def test_default_notify_is_silent(self, catalog):
        quiet = StorefrontSession(MemoryKeyValueStore(), catalog=catalog)
        quiet.add_to_cart("rice")
        assert quiet.cart.quantity_of("rice") == 1


class TestWriteFailures:
    def test_memory_state_stays_authoritative(self, catalog, notices):
        session = StorefrontSession(BrokenStore(), catalog=catalog, notify=notices)
        session.add_to_cart("rice", 2)
        order = session.place_order(_customer())

        assert session.cart.is_empty()
        assert session.orders.orders == (order,)
        assert notices.titles == ["Agregado", "Pedido creado"]
