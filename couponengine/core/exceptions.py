class CouponError(Exception):
    """base error for the coupon engine."""


class CouponValidationError(CouponError, ValueError):
    """coupon record rejected by the create/update rules (maps to a 400)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
