"""
Coupon evaluators, one per coupon type.

- CART: percentage or flat amount once the cart subtotal reaches a threshold
- PRODUCT: percentage or per-unit amount on one product
- BXGY: buy some products, get others free
"""

from .base import DetailsParseResult, Evaluator
from .bxgy import BxGyEvaluator
from .cart_wise import CartWiseEvaluator
from .factory import EVALUATORS, get_evaluator
from .product_wise import ProductWiseEvaluator

__all__ = [
    'DetailsParseResult',
    'Evaluator',
    'BxGyEvaluator',
    'CartWiseEvaluator',
    'ProductWiseEvaluator',
    'EVALUATORS',
    'get_evaluator'
]
