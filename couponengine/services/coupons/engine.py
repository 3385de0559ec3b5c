"""
Coupon evaluation entry points.

Every coupon passes the same eligibility gate (present, active, not expired,
known type) before its evaluator runs. None of these functions raise for a
bad coupon: the fail-safe answer is always "no discount".
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from couponengine.schemas.cart import Cart, CartSummary
from couponengine.schemas.coupon import Coupon
from couponengine.services.evaluators import Evaluator, get_evaluator
from couponengine.services.pricing.money import ZERO, cart_total

logger = logging.getLogger(__name__)


@dataclass
class EligibilityResult:
    eligible: bool
    reason: Optional[str] = None
    evaluator: Optional[Evaluator] = None


@dataclass
class ApplicableCoupon:
    coupon_id: str
    code: Optional[str]
    type: Optional[str]
    discount: Decimal

    def dict(self):
        return {"coupon_id": self.coupon_id, "code": self.code, "type": self.type, "discount": self.discount}


def _utc(moment: Optional[datetime]) -> datetime:
    if moment is None:
        return datetime.now(timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def check_eligibility(coupon: Optional[Coupon], now: Optional[datetime] = None) -> EligibilityResult:
    if coupon is None:
        return EligibilityResult(eligible=False, reason="missing")
    if not coupon.active:
        return EligibilityResult(eligible=False, reason="inactive")
    if coupon.expires_at is not None and coupon.expires_at < _utc(now):
        return EligibilityResult(eligible=False, reason="expired")

    evaluator = get_evaluator(coupon.type)
    if evaluator is None:
        return EligibilityResult(eligible=False, reason="unsupported_type")
    return EligibilityResult(eligible=True, evaluator=evaluator)


def evaluate_discount(coupon: Optional[Coupon], cart: Cart, now: Optional[datetime] = None) -> Decimal:
    """discount the coupon would give on this cart, the cart is not touched."""
    gate = check_eligibility(coupon, now)
    if not gate.eligible:
        logger.debug(f"coupon {getattr(coupon, 'id', None)} not eligible: {gate.reason}")
        return ZERO
    try:
        return gate.evaluator.evaluate(coupon, cart)
    except Exception as e:
        logger.error(f"evaluating coupon {coupon.id} failed, treating as not applicable: {e}")
        return ZERO


def applicable_coupons(coupons: Iterable[Coupon], cart: Cart, now: Optional[datetime] = None) -> Dict[str, Decimal]:
    """
    Map coupon id to discount for every coupon giving a positive discount.

    Keeps the order of ``coupons``; results are not sorted by discount.
    """
    now = _utc(now)
    result: Dict[str, Decimal] = {}
    for coupon in coupons:
        discount = evaluate_discount(coupon, cart, now)
        if discount > ZERO:
            result[coupon.id] = discount
    return result


def list_applicable(coupons: Iterable[Coupon], cart: Cart, now: Optional[datetime] = None) -> List[ApplicableCoupon]:
    coupons = list(coupons)
    # absent coupons never apply, they have no id to look up
    by_id = {c.id: c for c in coupons if c is not None}
    return [
        ApplicableCoupon(coupon_id=cid, code=by_id[cid].code, type=by_id[cid].type, discount=discount)
        for cid, discount in applicable_coupons(coupons, cart, now).items()
    ]


def apply_coupon(coupon: Optional[Coupon], cart: Cart, now: Optional[datetime] = None) -> Cart:
    """
    Reset every line discount to zero, then let the coupon's evaluator fill them in.

    The cart is changed in place and returned. An ineligible or broken coupon
    leaves all discounts at zero.
    """
    cart.reset_discounts()

    gate = check_eligibility(coupon, now)
    if not gate.eligible:
        logger.debug(f"coupon {getattr(coupon, 'id', None)} not applied: {gate.reason}")
        return cart
    try:
        gate.evaluator.apply(coupon, cart)
    except Exception as e:
        logger.error(f"applying coupon {coupon.id} failed, cart left as is: {e}")
    return cart


def summarize_cart(cart: Cart) -> CartSummary:
    total_price = cart_total(cart.items)
    total_discount = sum((item.total_discount for item in cart.items), ZERO)
    return CartSummary(
        items=cart.items,
        total_price=total_price,
        total_discount=total_discount,
        final_price=total_price - total_discount,
    )
