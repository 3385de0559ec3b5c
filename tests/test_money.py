from decimal import Decimal

from couponengine.services.pricing.money import (
    MONEY_SCALE,
    allocate,
    cart_total,
    divide,
    line_total,
    multiply,
    percent_of,
    quantize,
)


def test_scale_is_six_digits_by_default():
    assert MONEY_SCALE == 6


def test_divide_rounds_half_up():
    assert divide(Decimal("1"), Decimal("3")) == Decimal("0.333333")
    assert divide(Decimal("2"), Decimal("3")) == Decimal("0.666667")
    assert divide(Decimal("0.0000005"), Decimal("1")) == Decimal("0.000001")


def test_quantize_keeps_six_fraction_digits():
    assert str(quantize(Decimal("25"))) == "25.000000"


def test_quantize_large_amounts():
    # 23 integer digits plus the scale is past the default 28 digit context
    value = Decimal("12345678901234567890123.4567891")
    assert quantize(value) == Decimal("12345678901234567890123.456789")
    assert str(quantize(Decimal("1E+24"))) == "1000000000000000000000000.000000"


def test_percent_of():
    assert percent_of(Decimal("250"), Decimal("10")) == Decimal("25")
    assert percent_of(Decimal("0.333333"), Decimal("50")) == Decimal("0.166667")


def test_percent_of_large_amount():
    assert percent_of(Decimal("1E+24"), Decimal("10")) == Decimal("1E+23")
    assert percent_of(Decimal("99999999999999999999999.99"), Decimal("50")) == Decimal("49999999999999999999999.995000")


def test_multiply_is_exact():
    a = Decimal("123456789012345678901234567890")
    assert multiply(a, Decimal("3")) == Decimal("370370367037037036703703703670")


def test_allocate_rounds_the_ratio_first():
    assert allocate(Decimal("10"), Decimal("30"), Decimal("10")) == Decimal("3.333330")
    assert allocate(Decimal("200"), Decimal("250"), Decimal("25")) == Decimal("20")


def test_totals(make_cart):
    cart = make_cart((1, 2, "100.10"), (2, 3, "0.5"))
    assert line_total(cart.items[0]) == Decimal("200.20")
    assert cart_total(cart.items) == Decimal("201.70")
    assert cart_total([]) == Decimal("0")
