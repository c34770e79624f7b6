"""Tests for the static catalog and catalog queries."""

from decimal import Decimal

import pytest

from marketbarrio.constant import PRODUCT_ROWS
from marketbarrio.data import (
    CATALOG,
    PRODUCTS_BY_ID,
    build_catalog,
    categories,
    filter_products,
    product_for_id,
    product_label,
)


class TestCatalog:
    def test_built_from_rows_in_order(self):
        assert [product.product_id for product in CATALOG] == [row["id"] for row in PRODUCT_ROWS]

    def test_ids_are_unique(self):
        assert len(PRODUCTS_BY_ID) == len(CATALOG)

    def test_prices_are_decimal_and_non_negative(self):
        assert all(isinstance(product.price, Decimal) and product.price >= 0 for product in CATALOG)

    def test_duplicate_ids_rejected(self):
        row = {"id": "x", "name": "X", "price": "1.00"}
        with pytest.raises(ValueError):
            build_catalog([row, row])

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            build_catalog([{"id": "x", "name": "X", "price": "-1"}])


class TestLookups:
    def test_product_for_id(self, products_by_id):
        assert product_for_id("rice", products_by_id).name == "Arroz"
        assert product_for_id("ghost", products_by_id) is None

    def test_product_label_placeholder(self, products_by_id):
        assert product_label("rice", products_by_id) == "Arroz"
        assert product_label("ghost", products_by_id) == "Producto #ghost"


class TestFilterProducts:
    def test_no_filters_returns_everything(self, catalog):
        assert filter_products(catalog) == list(catalog)

    def test_category_filter(self, catalog):
        assert [p.product_id for p in filter_products(catalog, category="Lácteos")] == ["milk"]

    def test_query_is_case_insensitive(self, catalog):
        assert [p.product_id for p in filter_products(catalog, query="ARROZ")] == ["rice"]

    def test_query_matches_description_and_category(self, catalog):
        assert [p.product_id for p in filter_products(catalog, query="oil desc")] == ["oil"]
        assert [p.product_id for p in filter_products(catalog, query="lácteos")] == ["milk"]

    def test_query_and_category_combine(self, catalog):
        assert filter_products(catalog, query="arroz", category="Lácteos") == []

    def test_categories_lists_catch_all_first(self, catalog):
        assert categories(catalog) == ["Todos", "Abarrotes", "Lácteos"]
