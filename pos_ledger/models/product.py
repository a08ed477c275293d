"""
Product model.

Products carry the unit cost used to post cost of goods sold
and the stock level that sales and purchases adjust.
"""

import datetime
import uuid
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Integer
from sqlalchemy.orm import Mapped, mapped_column

from pos_ledger.models.base import Base, utcnow


def new_product_id() -> str:
    return "PRD" + uuid.uuid4().hex[:8].upper()


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(20), primary_key=True, default=new_product_id
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    cost: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    min_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    supplier: Mapped[str | None] = mapped_column(String(150), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.name} stock={self.stock}>"
