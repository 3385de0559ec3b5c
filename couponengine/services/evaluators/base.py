import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Type

from pydantic import BaseModel, ValidationError

from couponengine.schemas.cart import Cart
from couponengine.schemas.coupon import Coupon, CouponType
from couponengine.schemas.details import DetailsBase
from couponengine.services.pricing.money import ZERO

logger = logging.getLogger(__name__)


@dataclass
class DetailsParseResult:
    """outcome of reading a coupon's details payload."""
    details: Optional[DetailsBase] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.details is not None


class Evaluator:
    """
    base interface for one coupon type.

    Subclasses set ``coupon_type`` and ``details_schema`` and implement
    ``compute_discount`` / ``apply_details`` over already parsed details.
    ``evaluate`` and ``apply`` parse the payload once and turn a bad payload
    into zero discount.
    """
    coupon_type: CouponType
    details_schema: Type[DetailsBase]

    def parse_details(self, payload: Any) -> DetailsParseResult:
        if payload is None:
            return DetailsParseResult(error="details missing")
        if isinstance(payload, self.details_schema):
            return DetailsParseResult(details=payload)
        try:
            if isinstance(payload, (str, bytes)):
                # numbers straight to Decimal, floats would drop digits
                details = self.details_schema.model_validate(json.loads(payload, parse_float=Decimal))
            elif isinstance(payload, BaseModel):
                details = self.details_schema.model_validate(payload.model_dump(by_alias=True))
            else:
                details = self.details_schema.model_validate(payload)
        except (ValidationError, ValueError, TypeError) as e:
            return DetailsParseResult(error=str(e))
        return DetailsParseResult(details=details)

    def evaluate(self, coupon: Coupon, cart: Cart) -> Decimal:
        parsed = self.parse_details(coupon.details)
        if not parsed.ok:
            logger.debug(f"coupon {coupon.id}: unreadable {self.coupon_type.value} details, not applicable ({parsed.error})")
            return ZERO
        return self.compute_discount(parsed.details, cart)

    def apply(self, coupon: Coupon, cart: Cart) -> Cart:
        parsed = self.parse_details(coupon.details)
        if not parsed.ok:
            logger.debug(f"coupon {coupon.id}: unreadable {self.coupon_type.value} details, nothing applied ({parsed.error})")
            return cart
        self.apply_details(parsed.details, cart)
        return cart

    def compute_discount(self, details: DetailsBase, cart: Cart) -> Decimal:  # pragma: no cover
        raise NotImplementedError

    def apply_details(self, details: DetailsBase, cart: Cart) -> None:  # pragma: no cover
        raise NotImplementedError
