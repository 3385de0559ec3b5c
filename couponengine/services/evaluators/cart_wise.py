import logging
from decimal import Decimal

from couponengine.schemas.cart import Cart
from couponengine.schemas.coupon import CouponType
from couponengine.schemas.details import CartWiseDetails, DiscountType
from couponengine.services.evaluators.base import Evaluator
from couponengine.services.pricing.money import ZERO, allocate, cart_total, line_total, percent_of, quantize

logger = logging.getLogger(__name__)


class CartWiseEvaluator(Evaluator):
    """discount on the whole cart once its subtotal reaches a threshold."""
    coupon_type = CouponType.CART
    details_schema = CartWiseDetails

    def compute_discount(self, details: CartWiseDetails, cart: Cart) -> Decimal:
        total = cart_total(cart.items)
        if details.threshold is None or total < details.threshold:
            return ZERO
        if details.discount_type == DiscountType.PERCENT:
            return percent_of(total, details.discount_value)
        # flat amount off the cart, not scaled by the total
        return details.discount_value

    def apply_details(self, details: CartWiseDetails, cart: Cart) -> None:
        discount = self.compute_discount(details, cart)
        if discount <= ZERO:
            return
        total = cart_total(cart.items)
        if total <= ZERO:
            return
        # each line's share of the subtotal is rounded before scaling, residue is kept
        for item in cart.items:
            item.total_discount = allocate(line_total(item), total, discount)
        logger.debug(f"cart-wise discount {quantize(discount)} spread over {len(cart.items)} items")
