"""
Typed shapes of the coupon ``details`` payload, one per coupon type.

Field names on the wire are camelCase (``discountType``, ``buyProducts`` ...),
python attributes are snake_case. ``validate_for_write`` holds the stricter
rules the coupon create/update layer enforces before a record is stored.
"""
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, validator

from couponengine.core.exceptions import CouponValidationError


class DiscountType(str, Enum):
    PERCENT = "PERCENT"
    FLAT = "FLAT"


class DetailsBase(BaseModel):
    class Config:
        populate_by_name = True

    def to_payload(self) -> Dict[str, Any]:
        """dump back to the wire shape, decimals as exact strings."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def validate_for_write(cls, data: Dict[str, Any]) -> "DetailsBase":  # pragma: no cover
        return cls.model_validate(data)


class _DiscountMixin(BaseModel):
    discount_type: DiscountType = Field(..., alias="discountType")
    discount_value: Decimal = Field(..., alias="discountValue")

    @validator("discount_type", pre=True)
    def normalize_discount_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class CartWiseDetails(_DiscountMixin, DetailsBase):
    # no threshold means the coupon never applies
    threshold: Optional[Decimal] = None

    @classmethod
    def validate_for_write(cls, data: Dict[str, Any]) -> "CartWiseDetails":
        if any(data.get(key) is None for key in ("threshold", "discountType", "discountValue")):
            raise CouponValidationError("Cart coupon requires threshold, discountType and discountValue")
        return cls.model_validate(data)


class ProductWiseDetails(_DiscountMixin, DetailsBase):
    product_id: int = Field(..., alias="productId")

    @classmethod
    def validate_for_write(cls, data: Dict[str, Any]) -> "ProductWiseDetails":
        if any(data.get(key) is None for key in ("productId", "discountType", "discountValue")):
            raise CouponValidationError("Product coupon requires productId, discountType and discountValue")
        return cls.model_validate(data)


class ProductQuantity(BaseModel):
    product_id: int = Field(..., alias="productId")
    quantity: int

    class Config:
        populate_by_name = True


class BxGyDetails(DetailsBase):
    buy_products: List[ProductQuantity] = Field(..., alias="buyProducts")
    get_products: List[ProductQuantity] = Field(..., alias="getProducts")
    repetition_limit: Optional[int] = Field(None, alias="repetitionLimit")

    @classmethod
    def validate_for_write(cls, data: Dict[str, Any]) -> "BxGyDetails":
        if not data.get("buyProducts") or not data.get("getProducts"):
            raise CouponValidationError("BxGy coupon requires buyProducts and getProducts")
        for kind, key in (("buyProduct", "buyProducts"), ("getProduct", "getProducts")):
            for entry in data[key]:
                quantity = entry.get("quantity") if isinstance(entry, dict) else None
                product_id = entry.get("productId") if isinstance(entry, dict) else None
                if product_id is None or not isinstance(quantity, int) or quantity <= 0:
                    raise CouponValidationError(f"each {kind} must have productId and positive quantity", field=key)
        limit = data.get("repetitionLimit")
        if limit is not None and (not isinstance(limit, int) or limit <= 0):
            raise CouponValidationError("repetitionLimit must be a positive integer", field="repetitionLimit")
        return cls.model_validate(data)
