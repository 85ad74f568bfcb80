from decimal import Decimal
from typing import List

from pydantic import BaseModel

from cart_service.models import CartState

class UpdateAmountRequest(BaseModel):
    """Request model for setting a line's quantity."""

    amount: int

class CartLineResponse(BaseModel):
    """Response model for cart line."""

    product_id: int
    title: str
    price: Decimal
    image: str
    amount: int
    subtotal: Decimal

class CartResponse(BaseModel):
    """Response model for cart."""

    items: List[CartLineResponse]
    item_count: int
    subtotal: Decimal

    @classmethod
    def from_state(cls, cart: CartState) -> "CartResponse":
        return cls(
            items=[
                CartLineResponse(
                    product_id=line.product.id,
                    title=line.product.title,
                    price=line.product.price,
                    image=line.product.image,
                    amount=line.amount,
                    subtotal=line.subtotal,
                )
                for line in cart.items
            ],
            item_count=cart.item_count,
            subtotal=cart.subtotal,
        )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
