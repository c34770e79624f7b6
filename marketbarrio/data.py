"""Static catalog data and catalog queries."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from marketbarrio.constant import ALL_CATEGORIES_LABEL, PRODUCT_ROWS
from marketbarrio.models import Product


def _product_from_row(row: Mapping[str, str]) -> Product:
    return Product(
        product_id=str(row["id"]),
        name=str(row["name"]),
        description=str(row.get("description", "")),
        category=str(row.get("category", "")),
        price=Decimal(str(row["price"])),
        unit=str(row.get("unit", "")),
        emoji=str(row.get("emoji", "")),
    )


def build_catalog(rows: Iterable[Mapping[str, str]]) -> tuple[Product, ...]:
    """Wrap raw product rows into Products, rejecting duplicate ids."""
    products: list[Product] = []
    seen: set[str] = set()
    for row in rows:
        product = _product_from_row(row)
        if product.product_id in seen:
            raise ValueError(f"Duplicate product id in catalog: {product.product_id}")
        if product.price < 0:
            raise ValueError(f"Negative price for product {product.product_id}")
        seen.add(product.product_id)
        products.append(product)
    return tuple(products)


def index_catalog(products: Iterable[Product]) -> dict[str, Product]:
    return {product.product_id: product for product in products}


CATALOG: tuple[Product, ...] = build_catalog(PRODUCT_ROWS)
PRODUCTS_BY_ID: dict[str, Product] = index_catalog(CATALOG)


def product_for_id(product_id: str, products_by_id: Mapping[str, Product] = PRODUCTS_BY_ID) -> Product | None:
    """Get a product by id, or None when it is no longer in the catalog."""
    return products_by_id.get(product_id)


def product_label(product_id: str, products_by_id: Mapping[str, Product] = PRODUCTS_BY_ID) -> str:
    """Get display name for a product id, with a placeholder for missing products."""
    product = products_by_id.get(product_id)
    if product is None:
        return f"Producto #{product_id}"
    return product.name


def categories(products: Iterable[Product]) -> list[str]:
    """Return the filter options: the catch-all label followed by sorted categories."""
    return [ALL_CATEGORIES_LABEL, *sorted({product.category for product in products})]


def filter_products(
    products: Iterable[Product],
    query: str = "",
    category: str = ALL_CATEGORIES_LABEL,
) -> list[Product]:
    """Filter by category and case-insensitive text over name, description and category."""
    q = query.lower()
    results: list[Product] = []
    for product in products:
        if category != ALL_CATEGORIES_LABEL and product.category != category:
            continue
        if q and q not in f"{product.name} {product.description} {product.category}".lower():
            continue
        results.append(product)
    return results
