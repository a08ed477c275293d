"""
Purchase model (stock bought from a supplier).
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


class Purchase(Base):
    __tablename__ = "purchases"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    supplier: Mapped[str] = mapped_column(String(150), nullable=False, default="")
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
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    items: Mapped[list["PurchaseItem"]] = relationship(
        back_populates="purchase",
        cascade="all, delete-orphan",
    )

    @property
    def reference(self) -> str:
        return f"PUR-{self.id}"

    def __repr__(self) -> str:
        return f"<Purchase {self.id} {self.date} {self.amount}>"


class PurchaseItem(Base):
    __tablename__ = "purchase_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    purchase_id: Mapped[int] = mapped_column(
        ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id"), nullable=False, index=True
    )
    product_name: Mapped[str] = mapped_column(String(150), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)

    purchase: Mapped["Purchase"] = relationship(back_populates="items")
