from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Display name of the product")
    code: Optional[str] = Field(None, description="Unique code, derived from the name when omitted")
    enabled: bool = True


class VariantCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Display name of the variant")
    code: Optional[str] = None
    price: int = Field(0, ge=0, description="Price in minor units")


class ReviewCreate(BaseModel):
    title: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: Optional[str] = None
    author_email: str = Field("customer@example.com", description="Author of the review")


class OrderItemCreate(BaseModel):
    variant_id: int = Field(..., description="ID of the ordered variant")
    quantity: int = Field(1, gt=0, description="Quantity of the variant")


class OrderCreate(BaseModel):
    customer_email: str = Field(..., description="Email of the customer")
    items: List[OrderItemCreate]
