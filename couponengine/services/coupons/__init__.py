"""
Coupon services: evaluation against a cart and write-side validation.
"""

from .engine import (
    ApplicableCoupon,
    EligibilityResult,
    applicable_coupons,
    apply_coupon,
    check_eligibility,
    evaluate_discount,
    list_applicable,
    summarize_cart
)
from .validation import validate_coupon, validate_details, validate_update

__all__ = [
    'ApplicableCoupon',
    'EligibilityResult',
    'applicable_coupons',
    'apply_coupon',
    'check_eligibility',
    'evaluate_discount',
    'list_applicable',
    'summarize_cart',
    'validate_coupon',
    'validate_details',
    'validate_update'
]
