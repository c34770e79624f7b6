"""Checkout error types reported back to the user."""

from __future__ import annotations


class StorefrontError(ValueError):
    """Base class for storefront rule violations."""


class CheckoutError(StorefrontError):
    """An order could not be placed. Nothing was changed."""


class MissingCustomerInfo(CheckoutError):
    """Name, phone or address was left blank."""


class EmptyCart(CheckoutError):
    """Checkout was attempted with no items in the cart."""
