from pydantic import BaseModel, Field
from typing import List


class WishlistEntry(BaseModel):
    id: str
    product_id: str = Field(..., min_length=1)
    title: str
    price: float = Field(..., ge=0)
    image: str = "/placeholder.svg"
    category: str = "other"


class WishlistOut(BaseModel):
    items: List[WishlistEntry] = Field(default_factory=list)


class ToggleOut(BaseModel):
    product_id: str
    in_wishlist: bool
