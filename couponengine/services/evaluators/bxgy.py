"""
Buy-X-get-Y evaluator.

Greedy and deterministic: the number of repetitions is fixed by the buy side,
then free units are handed out walking ``getProducts`` in declaration order,
so earlier get products are served first when free units run short.
A product listed on both sides is counted on both sides.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Optional, Tuple

from couponengine.schemas.cart import Cart, CartItem
from couponengine.schemas.coupon import CouponType
from couponengine.schemas.details import BxGyDetails
from couponengine.services.evaluators.base import Evaluator
from couponengine.services.pricing.money import ZERO


def _quantities(cart: Cart) -> Dict[int, int]:
    qty: Dict[int, int] = defaultdict(int)
    for item in cart.items:
        qty[item.product_id] += item.quantity
    return qty


def _first_lines(cart: Cart) -> Dict[int, CartItem]:
    lines: Dict[int, CartItem] = {}
    for item in cart.items:
        lines.setdefault(item.product_id, item)
    return lines


class BxGyEvaluator(Evaluator):
    coupon_type = CouponType.BXGY
    details_schema = BxGyDetails

    @staticmethod
    def free_allowance(details: BxGyDetails, qty: Dict[int, int]) -> Optional[Tuple[int, int]]:
        """
        Work out how often the promotion fires and how many units it frees.

        Returns:
            ``(repetitions, free_units)`` or None when nothing is free.
        """
        buy_required = sum(bp.quantity for bp in details.buy_products)
        if buy_required <= 0:
            return None

        total_buy_units = sum(qty.get(bp.product_id, 0) for bp in details.buy_products)
        repetitions = total_buy_units // buy_required
        if details.repetition_limit is not None:
            repetitions = min(repetitions, details.repetition_limit)
        if repetitions <= 0:
            return None

        get_per_apply = sum(gp.quantity for gp in details.get_products)
        get_available = sum(qty.get(gp.product_id, 0) for gp in details.get_products)
        free_units = min(get_available, repetitions * get_per_apply)
        if free_units <= 0:
            return None
        return repetitions, free_units

    def compute_discount(self, details: BxGyDetails, cart: Cart) -> Decimal:
        qty = _quantities(cart)
        allowance = self.free_allowance(details, qty)
        if allowance is None:
            return ZERO
        repetitions, remaining = allowance

        lines = _first_lines(cart)
        discount = ZERO
        for gp in details.get_products:
            if remaining <= 0:
                break
            to_free = min(qty.get(gp.product_id, 0), gp.quantity * repetitions, remaining)
            if to_free > 0:
                line = lines.get(gp.product_id)
                price = line.unit_price if line is not None else ZERO
                discount += price * to_free
                remaining -= to_free
        return discount

    def apply_details(self, details: BxGyDetails, cart: Cart) -> None:
        allowance = self.free_allowance(details, _quantities(cart))
        if allowance is None:
            return
        repetitions, remaining = allowance

        lines = _first_lines(cart)
        for gp in details.get_products:
            if remaining <= 0:
                break
            line = lines.get(gp.product_id)
            if line is None:
                continue
            # the discount lands on the first line of the product and never exceeds its quantity
            to_free = min(line.quantity, gp.quantity * repetitions, remaining)
            if to_free > 0:
                line.total_discount = line.unit_price * to_free
                remaining -= to_free
