"""
Journal entry models.

A JournalEntry groups the debit and credit lines recorded for
one business event or manual action. Within an entry the sum of
DEBIT amounts must equal the sum of CREDIT amounts. That rule is
enforced by LedgerService, not by the model.
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, ForeignKey, Integer,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base, utcnow
from pos_ledger.models.enums import EntryOrigin, EntrySide


class JournalEntry(Base):
    """
    A posted journal entry.

    `date` is the business date; `created_at` is when the entry
    was stored and is the primary display order.
    """

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    reference: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )
    origin: Mapped[EntryOrigin] = mapped_column(
        SAEnum(EntryOrigin, name="entry_origin_enum"),
        nullable=False,
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryLine.position",
    )

    @property
    def total_debit(self) -> Decimal:
        return sum(
            (line.amount for line in self.lines if line.side == EntrySide.DEBIT),
            Decimal("0"),
        )

    @property
    def total_credit(self) -> Decimal:
        return sum(
            (line.amount for line in self.lines if line.side == EntrySide.CREDIT),
            Decimal("0"),
        )

    def __repr__(self) -> str:
        return (
            f"<JournalEntry {self.id} {self.date} "
            f"{self.origin.value} ref={self.reference}>"
        )


class JournalEntryLine(Base):
    """One debit or credit against a single account."""

    __tablename__ = "journal_entry_lines"

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_id: Mapped[int] = mapped_column(
        ForeignKey("journal_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Chart account ids are seed data, not a table, so no foreign key.
    account_id: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True
    )
    side: Mapped[EntrySide] = mapped_column(
        SAEnum(EntrySide, name="entry_side_enum"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)

    entry: Mapped["JournalEntry"] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        return f"<JournalEntryLine {self.side.value} {self.account_id} {self.amount}>"
