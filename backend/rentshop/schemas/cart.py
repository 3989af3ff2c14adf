"""
rentshop/schemas/cart.py - Pydantic models for Cart.
"""
from pydantic import BaseModel, Field
from typing import List


class CartItemIn(BaseModel):
    """A cart line before it has a quantity (what add_item receives)."""
    id: str = Field(..., description="Line id (usually the product id)")
    product_id: str = Field(..., min_length=1, description="ID of the product")
    title: str = Field(..., description="Title captured at the time of adding to cart")
    price: float = Field(..., ge=0, description="Price per unit at the time of adding to cart")
    image: str = Field("/placeholder.svg", description="Primary image URI")


class CartLine(CartItemIn):
    quantity: int = Field(..., ge=1, description="Quantity of the product in the cart")


class QuantityBody(BaseModel):
    quantity: int = Field(..., description="Absolute quantity; <= 0 removes the line")


class CartOut(BaseModel):
    items: List[CartLine] = Field(default_factory=list, description="Cart lines in insertion order")
    total_items: int = 0
    total_price: float = 0.0
