"""Pytest configuration and shared builders for the coupon engine tests."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from couponengine.schemas.cart import Cart, CartItem
from couponengine.schemas.coupon import Coupon

# fixed clock so expiry checks are reproducible
NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def build_cart(*lines) -> Cart:
    """lines are (product_id, quantity, unit_price[, total_discount]) tuples."""
    items = []
    for line in lines:
        product_id, quantity, price = line[:3]
        item = CartItem(product_id=product_id, quantity=quantity, unit_price=Decimal(str(price)))
        if len(line) > 3:
            item.total_discount = Decimal(str(line[3]))
        items.append(item)
    return Cart(items=items)


def build_coupon(coupon_type, details, **kwargs) -> Coupon:
    return Coupon(type=coupon_type, details=details, **kwargs)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_cart():
    return build_cart


@pytest.fixture
def make_coupon():
    return build_coupon


@pytest.fixture
def sample_cart():
    # 2 x 100 + 1 x 50 = 250
    return build_cart((1, 2, 100), (2, 1, 50))


@pytest.fixture
def cart_percent_coupon():
    return build_coupon(
        "CART",
        {"threshold": 100, "discountType": "PERCENT", "discountValue": 10},
        id="cart-10",
        code="CART10",
    )


@pytest.fixture
def bxgy_coupon():
    return build_coupon(
        "BXGY",
        {
            "buyProducts": [{"productId": 1, "quantity": 2}],
            "getProducts": [{"productId": 3, "quantity": 1}],
            "repetitionLimit": 2,
        },
        id="b2g1",
        code="B2G1",
    )
