"""
Sale model.

A sale is the business record behind the automatic revenue and
cost-of-goods-sold journal entries. The entries point back to it
through their reference (see Sale.reference).
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, Integer, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base, utcnow
from pos_ledger.models.enums import PaymentMethod, PaymentStatus


class Sale(Base):
    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    customer: Mapped[str] = mapped_column(String(150), nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(PaymentStatus, name="payment_status_enum"),
        nullable=False,
        default=PaymentStatus.PAID,
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        SAEnum(PaymentMethod, name="payment_method_enum"),
        nullable=False,
        default=PaymentMethod.CASH,
    )
    cash_received: Mapped[Decimal | None] = mapped_column(
        Numeric(19, 4), nullable=True
    )
    change: Mapped[Decimal | None] = mapped_column(Numeric(19, 4), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    items: Mapped[list["SaleItem"]] = relationship(
        back_populates="sale",
        cascade="all, delete-orphan",
    )

    @property
    def reference(self) -> str:
        return f"SALE-{self.id}"

    def __repr__(self) -> str:
        return f"<Sale {self.id} {self.date} {self.amount}>"


class SaleItem(Base):
    __tablename__ = "sale_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    sale_id: Mapped[int] = mapped_column(
        ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id"), nullable=False, index=True
    )
    product_name: Mapped[str] = mapped_column(String(150), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    # Unit cost at the time of sale, copied from the product
    cost: Mapped[Decimal | None] = mapped_column(Numeric(19, 4), nullable=True)

    sale: Mapped["Sale"] = relationship(back_populates="items")
