import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, validator


class CouponType(str, Enum):
    CART = "CART"
    PRODUCT = "PRODUCT"
    BXGY = "BXGY"


class Coupon(BaseModel):
    """
    Coupon record as handed over by the storage layer.

    ``type`` keeps unknown tags as plain strings so such coupons can still be
    loaded and simply never apply. ``details`` is the raw payload (mapping or
    JSON text); evaluators parse it into the shape matching ``type``.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    code: Optional[str] = None
    type: Optional[str] = None
    active: bool = Field(default=True, validation_alias=AliasChoices("active", "isActive", "is_active"))
    expires_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("expiresAt", "expires_at"),
        serialization_alias="expiresAt",
    )
    details: Any = None

    class Config:
        frozen = True
        populate_by_name = True

    @validator("type")
    def normalize_type(cls, v):
        if v is None:
            return v
        tag = v.strip().upper()
        try:
            return CouponType(tag)
        except ValueError:
            return tag

    @validator("expires_at")
    def expires_at_utc(cls, v):
        # naive timestamps from storage are UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
