from types import MappingProxyType
from typing import Mapping, Optional

from couponengine.schemas.coupon import CouponType
from .base import Evaluator
from .bxgy import BxGyEvaluator
from .cart_wise import CartWiseEvaluator
from .product_wise import ProductWiseEvaluator

# built once, read-only afterwards; a new coupon type registers here
EVALUATORS: Mapping[CouponType, Evaluator] = MappingProxyType({
    CouponType.CART: CartWiseEvaluator(),
    CouponType.PRODUCT: ProductWiseEvaluator(),
    CouponType.BXGY: BxGyEvaluator(),
})


def get_evaluator(coupon_type) -> Optional[Evaluator]:
    if coupon_type is None:
        return None
    return EVALUATORS.get(coupon_type)
