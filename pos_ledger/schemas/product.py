"""
Pydantic schemas for products.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    category: str = Field(default="", max_length=100)
    price: Decimal = Field(ge=0, decimal_places=4)
    cost: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=0, ge=0)
    supplier: str | None = Field(default=None, max_length=150)


class ProductUpdate(BaseModel):
    """Partial update: only fields that are set are applied."""
    name: str | None = Field(default=None, min_length=1, max_length=150)
    category: str | None = Field(default=None, max_length=100)
    price: Decimal | None = Field(default=None, ge=0, decimal_places=4)
    cost: Decimal | None = Field(default=None, ge=0, decimal_places=4)
    stock: int | None = Field(default=None, ge=0)
    min_stock: int | None = Field(default=None, ge=0)
    supplier: str | None = Field(default=None, max_length=150)


class ProductResponse(BaseModel):
    id: str
    name: str
    category: str
    price: Decimal
    cost: Decimal
    stock: int
    min_stock: int
    supplier: str | None
    is_low_stock: bool
    created_at: datetime.datetime

    model_config = {"from_attributes": True}
