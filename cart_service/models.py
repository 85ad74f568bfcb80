"""
Cart domain models.

ProductRecord and StockRecord mirror what the catalog and inventory APIs
return. CartLineItem and CartState are owned by the cart engine; every
mutation builds a new CartState instead of editing one in place.
"""

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProductRecord(BaseModel):
    """Catalog entry for a purchasable product."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    price: Decimal
    image: str


class StockRecord(BaseModel):
    """Available quantity of a product as reported by the inventory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: int = Field(alias="id")
    amount: int = Field(ge=0)


class CartLineItem(BaseModel):
    """One product and the quantity requested for it."""

    model_config = ConfigDict(frozen=True)

    product: ProductRecord
    amount: int = Field(ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.amount


class CartState(BaseModel):
    """Ordered cart lines, at most one per product id."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[CartLineItem, ...] = ()

    @model_validator(mode="after")
    def _unique_products(self) -> "CartState":
        ids = [line.product.id for line in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("cart contains more than one line for the same product")
        return self

    def find(self, product_id: int) -> Optional[CartLineItem]:
        for line in self.items:
            if line.product.id == product_id:
                return line
        return None

    def with_line(self, line: CartLineItem) -> "CartState":
        """Replace the line for line.product.id in place, or append it."""
        items = list(self.items)
        for index, existing in enumerate(items):
            if existing.product.id == line.product.id:
                items[index] = line
                break
        else:
            items.append(line)
        return CartState(items=tuple(items))

    def without(self, product_id: int) -> "CartState":
        return CartState(items=tuple(line for line in self.items if line.product.id != product_id))

    @property
    def item_count(self) -> int:
        """Total units across all lines."""
        return sum(line.amount for line in self.items)

    @property
    def distinct_count(self) -> int:
        return len(self.items)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.subtotal for line in self.items), Decimal("0"))
