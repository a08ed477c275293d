"""
Expense model.

The category and description decide which expense account the
automatic journal entry debits; the status decides whether Cash
or Accounts Payable is credited.
"""

import datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from pos_ledger.models.base import Base, utcnow
from pos_ledger.models.enums import ExpenseCategory, PaymentStatus


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    category: Mapped[ExpenseCategory] = mapped_column(
        SAEnum(ExpenseCategory, name="expense_category_enum"),
        nullable=False,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(PaymentStatus, name="payment_status_enum"),
        nullable=False,
        default=PaymentStatus.PAID,
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    @property
    def reference(self) -> str:
        return f"EXP-{self.id}"

    def __repr__(self) -> str:
        return (
            f"<Expense {self.id} {self.category.value} "
            f"{self.amount} ({self.status.value})>"
        )
