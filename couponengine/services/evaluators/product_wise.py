from decimal import Decimal

from couponengine.schemas.cart import Cart, CartItem
from couponengine.schemas.coupon import CouponType
from couponengine.schemas.details import DiscountType, ProductWiseDetails
from couponengine.services.evaluators.base import Evaluator
from couponengine.services.pricing.money import ZERO, line_total, multiply, percent_of


class ProductWiseEvaluator(Evaluator):
    """discount on every cart line of one product."""
    coupon_type = CouponType.PRODUCT
    details_schema = ProductWiseDetails

    @staticmethod
    def item_discount(details: ProductWiseDetails, item: CartItem) -> Decimal:
        if details.discount_type == DiscountType.PERCENT:
            return percent_of(line_total(item), details.discount_value)
        # FLAT is a per-unit rate, not one amount per line
        return multiply(details.discount_value, Decimal(item.quantity))

    def compute_discount(self, details: ProductWiseDetails, cart: Cart) -> Decimal:
        discount = ZERO
        for item in cart.items:
            if item.product_id == details.product_id:
                discount += self.item_discount(details, item)
        return discount

    def apply_details(self, details: ProductWiseDetails, cart: Cart) -> None:
        # other lines keep whatever discount they already carry
        for item in cart.items:
            if item.product_id == details.product_id:
                item.total_discount = self.item_discount(details, item)
