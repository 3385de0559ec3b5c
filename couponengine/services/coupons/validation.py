"""
Write-side checks for coupon records.

The storage/API layer calls these before creating or updating a coupon and
turns ``CouponValidationError`` into a bad-request response. The evaluation
path never uses them.
"""
import json
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from couponengine.core.exceptions import CouponValidationError
from couponengine.schemas.coupon import Coupon, CouponType
from couponengine.schemas.details import DetailsBase
from couponengine.services.evaluators import get_evaluator


def _load_payload(coupon_type: CouponType, details: Any) -> Dict[str, Any]:
    if details is None or (isinstance(details, str) and not details.strip()):
        raise CouponValidationError(f"details JSON is required for coupon type {coupon_type.value}", field="details")
    if isinstance(details, BaseModel):
        return details.model_dump(by_alias=True)
    if isinstance(details, (str, bytes)):
        try:
            details = json.loads(details, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise CouponValidationError(f"Invalid details JSON: {e.msg}", field="details") from e
        except UnicodeDecodeError as e:
            raise CouponValidationError(f"Invalid details JSON: {e.reason}", field="details") from e
    if not isinstance(details, dict):
        raise CouponValidationError("details must be a JSON object", field="details")
    return details


def validate_details(coupon_type: Optional[str], details: Any) -> DetailsBase:
    """
    Check a details payload against the rules of its coupon type.

    Returns:
        the parsed details.

    Raises:
        CouponValidationError: with a message suitable for the API client.
    """
    if coupon_type is None:
        raise CouponValidationError("coupon type is required for validation", field="type")
    tag = coupon_type.strip().upper()
    evaluator = get_evaluator(tag)
    if evaluator is None:
        raise CouponValidationError(f"Unknown coupon type: {coupon_type}", field="type")

    data = _load_payload(evaluator.coupon_type, details)
    try:
        return evaluator.details_schema.validate_for_write(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise CouponValidationError(f"Invalid details: {location}: {first.get('msg')}", field="details") from e


def validate_coupon(coupon: Optional[Coupon]) -> Coupon:
    """create-time checks: code, type and details are all required."""
    if coupon is None:
        raise CouponValidationError("coupon payload is required")
    if not coupon.code or not coupon.code.strip():
        raise CouponValidationError("coupon.code is required", field="code")
    if coupon.type is None:
        raise CouponValidationError("coupon.type is required", field="type")
    validate_details(coupon.type, coupon.details)
    return coupon


def validate_update(existing: Coupon, coupon_type: Optional[str] = None, details: Any = None) -> None:
    """
    update-time checks, partial updates allowed.

    Only validates when the update touches type or details; missing details
    fall back to the stored ones.
    """
    if coupon_type is None and details is None:
        return
    effective_type = coupon_type if coupon_type is not None else existing.type
    effective_details = details if details is not None else existing.details
    if effective_type is None:
        return
    if effective_details is None or (isinstance(effective_details, str) and not effective_details.strip()):
        return
    validate_details(effective_type, effective_details)
