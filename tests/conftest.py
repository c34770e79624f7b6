from decimal import Decimal

import pytest

from marketbarrio.data import index_catalog
from marketbarrio.models import Product
from marketbarrio.persistence import MemoryKeyValueStore
from marketbarrio.session import StorefrontSession


def _product(product_id, price, name=None, category="Abarrotes"):
    return Product(
        product_id=product_id,
        name=name or product_id.title(),
        description=f"{product_id} description",
        category=category,
        price=Decimal(price),
        unit="1 und",
    )


@pytest.fixture
def catalog():
    return (
        _product("rice", "4.50", name="Arroz"),
        _product("oil", "9.80", name="Aceite"),
        _product("milk", "4.20", name="Leche", category="Lácteos"),
        _product("exact", "35.00", name="Canasta"),
        _product("almost", "34.99", name="Canasta chica"),
        _product("cent", "0.01", name="Caramelo"),
    )


@pytest.fixture
def products_by_id(catalog):
    return index_catalog(catalog)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


class NoticeRecorder:
    def __init__(self):
        self.notices = []

    def __call__(self, title, message):
        self.notices.append((title, message))

    @property
    def titles(self):
        return [title for title, _ in self.notices]


@pytest.fixture
def notices():
    return NoticeRecorder()


@pytest.fixture
def session(store, catalog, notices):
    return StorefrontSession(store, catalog=catalog, notify=notices)
