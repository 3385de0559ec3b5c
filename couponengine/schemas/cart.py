from decimal import Decimal
from typing import List

from pydantic import AliasChoices, BaseModel, Field


class CartItem(BaseModel):
    product_id: int = Field(..., validation_alias=AliasChoices("productId", "product_id"), serialization_alias="productId")
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("unitPrice", "unit_price", "price"),
        serialization_alias="unitPrice",
    )
    # only ever written by apply, evaluate leaves it alone
    total_discount: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("totalDiscount", "total_discount"),
        serialization_alias="totalDiscount",
    )

    class Config:
        populate_by_name = True

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart(BaseModel):
    items: List[CartItem] = []

    def reset_discounts(self) -> None:
        for item in self.items:
            item.total_discount = Decimal("0")


class CartSummary(BaseModel):
    """priced view of a cart after a coupon was applied."""
    items: List[CartItem]
    total_price: Decimal
    total_discount: Decimal
    final_price: Decimal
