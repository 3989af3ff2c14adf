"""
# `rentshop/schemas/product.py` - Product schema documentation

## General
Pydantic models for rental listings. A listing's `price` is the base rate for one
rental period (a day); weekly/monthly prices are derived in `services/rental.py`.

---

## `ProductCreate`
What the listing form sends. `id`, `created_at`, `updated_at` are assigned by the
remote data service (or synthesized locally when it is unreachable).
| Field              | Type          | Required | Notes |
|--------------------|---------------|----------|-------|
| name               | `str`         | ✔        | Listing title |
| description        | `str`         | ✔        | Free text |
| price              | `float`       | ✔        | Daily base rate (≥0) |
| stock_quantity     | `int`         | ✖        | Units available (≥0, default 1) |
| category           | `str`         | ✔        | One of `CATEGORIES` |
| images             | `list[str]`   | ✖        | URIs, first one is primary |
| seller_id          | `str` / `null`| ✖ here   | Enforced by `ProductsStore.add_product` |
| contact_number     | `str`         | ✔        | Seller contact |
| additional_details | `str` / `null`| ✖        | Optional text |

**Form-Data:** supported through `as_form`.

---

## `Product`
`ProductCreate` plus `id`, `created_at`, `updated_at`. This is what the catalog holds
and what the local `products-storage` snapshot serializes.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import Form, HTTPException
from pydantic import BaseModel, Field, ValidationError, field_validator

CATEGORIES = [
    "electronics",
    "clothing",
    "books",
    "home",
    "sports",
    "beauty",
    "toys",
    "furniture",
    "automotive",
    "other",
]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Listing title")
    description: str = Field("", description="Description")
    price: float = Field(..., ge=0, description="Base rate per rental day")
    stock_quantity: int = Field(1, ge=0, description="Units available")
    category: str = Field(..., description="Category (see CATEGORIES)")
    images: List[str] = Field(default_factory=list, description="Image URIs, first = primary")
    seller_id: Optional[str] = Field(None, description="Opaque owner tag")
    contact_number: str = Field("", description="Seller contact number")
    additional_details: Optional[str] = Field(None, description="Optional extra details")

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in CATEGORIES:
            raise ValueError(f"unknown category: {v!r}")
        return v

    # Form-data support
    @classmethod
    def as_form(
        cls,
        name: str = Form(...),
        description: str = Form(...),
        price: float = Form(...),
        category: str = Form(...),
        contact_number: str = Form(...),
        additional_details: Optional[str] = Form(None),
        stock_quantity: int = Form(1),
    ):
        try:
            return cls(
                name=name,
                description=description,
                price=price,
                category=category,
                contact_number=contact_number,
                additional_details=additional_details,
                stock_quantity=stock_quantity,
            )
        except ValidationError as e:
            # raised inside a dependency, so FastAPI won't turn it into a 422 by itself
            raise HTTPException(
                status_code=422,
                detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
            )


class Product(ProductCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    # Remote rows may carry categories that predate the current list
    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        return (v or "other").strip().lower()

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else "/placeholder.svg"
