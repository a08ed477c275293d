"""
Pydantic schemas for business events: sales, purchases, expenses.

These are the payloads the recorders hand to the posting rules.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_ledger.models.enums import (
    ExpenseCategory,
    PaymentMethod,
    PaymentStatus,
)


# --- Request Schemas ---

class SaleItemCreate(BaseModel):
    product_id: str = Field(min_length=1, max_length=20)
    product_name: str = Field(default="", max_length=150)
    quantity: int = Field(gt=0)
    price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    # Unit cost override; when absent the product's cost is used
    cost: Decimal | None = Field(default=None, ge=0, decimal_places=4)


class SaleCreate(BaseModel):
    date: datetime.date
    customer: str = Field(default="", max_length=150)
    amount: Decimal = Field(gt=0, decimal_places=4)
    description: str = Field(default="Penjualan", max_length=255)
    status: PaymentStatus = PaymentStatus.PAID
    payment_method: PaymentMethod = PaymentMethod.CASH
    cash_received: Decimal | None = Field(default=None, ge=0)
    items: list[SaleItemCreate] = Field(default_factory=list)


class PurchaseItemCreate(BaseModel):
    product_id: str = Field(min_length=1, max_length=20)
    product_name: str = Field(default="", max_length=150)
    quantity: int = Field(gt=0)
    cost: Decimal = Field(ge=0, decimal_places=4)


class PurchaseCreate(BaseModel):
    date: datetime.date
    supplier: str = Field(default="", max_length=150)
    amount: Decimal = Field(gt=0, decimal_places=4)
    description: str = Field(default="Pembelian", max_length=255)
    status: PaymentStatus = PaymentStatus.PAID
    payment_method: PaymentMethod = PaymentMethod.CASH
    items: list[PurchaseItemCreate] = Field(default_factory=list)


class ExpenseCreate(BaseModel):
    date: datetime.date
    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0, decimal_places=4)
    category: ExpenseCategory
    status: PaymentStatus = PaymentStatus.PAID


# --- Response Schemas ---

class SaleItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    price: Decimal
    cost: Decimal | None

    model_config = {"from_attributes": True}


class SaleResponse(BaseModel):
    id: int
    reference: str
    date: datetime.date
    customer: str
    amount: Decimal
    description: str
    status: PaymentStatus
    payment_method: PaymentMethod
    cash_received: Decimal | None
    change: Decimal | None
    created_at: datetime.datetime
    items: list[SaleItemResponse]

    model_config = {"from_attributes": True}


class PurchaseItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    cost: Decimal

    model_config = {"from_attributes": True}


class PurchaseResponse(BaseModel):
    id: int
    reference: str
    date: datetime.date
    supplier: str
    amount: Decimal
    description: str
    status: PaymentStatus
    payment_method: PaymentMethod
    created_at: datetime.datetime
    items: list[PurchaseItemResponse]

    model_config = {"from_attributes": True}


class ExpenseResponse(BaseModel):
    id: int
    reference: str
    date: datetime.date
    description: str
    amount: Decimal
    category: ExpenseCategory
    status: PaymentStatus
    created_at: datetime.datetime

    model_config = {"from_attributes": True}
