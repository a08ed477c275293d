"""
Ledger service: the store of posted journal entries.

This service enforces the fundamental rules before anything is
written:
1. Every entry must balance (debits = credits)
2. Every line amount is positive
3. Every line names an account that exists in the chart
4. An entry has at least one debit and one credit line

No other service writes journal entries directly. The caller
controls the transaction boundary: it decides when to commit
or roll back.
"""

import datetime
import logging
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from pos_ledger.chart_of_accounts import ChartOfAccounts
from pos_ledger.errors import (
    EntryValidationError,
    NotFoundError,
    account_not_in_chart,
    entry_not_found,
)
from pos_ledger.models.base import utcnow
from pos_ledger.models.enums import EntryOrigin, EntrySide
from pos_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from pos_ledger.schemas.journal import IntegrityReport, JournalEntryCreate

logger = logging.getLogger(__name__)


class LedgerService:
    """
    All journal-entry writes pass through this service.

    The service takes a database session and the chart of
    accounts as constructor arguments; it holds no other state.
    """

    def __init__(self, db: Session, chart: ChartOfAccounts):
        self.db = db
        self.chart = chart

    def validate(self, request: JournalEntryCreate) -> None:
        """
        Check an entry against the ledger invariants.

        Raises EntryValidationError; nothing is written.
        """
        sides = {line.side for line in request.lines}
        if EntrySide.DEBIT not in sides or EntrySide.CREDIT not in sides:
            raise EntryValidationError(
                "Journal entry must contain at least one debit and one credit"
            )

        for line in request.lines:
            if line.amount <= 0:
                raise EntryValidationError(
                    f"Line amount must be positive (got {line.amount} "
                    f"for account {line.account_id})"
                )
            if line.account_id not in self.chart:
                raise EntryValidationError(account_not_in_chart(line.account_id))

        total_debits = request.total_debit
        total_credits = request.total_credit
        if total_debits != total_credits:
            raise EntryValidationError(
                f"Journal entry is not balanced: "
                f"debits={total_debits}, credits={total_credits}"
            )

    def _build_lines(self, request: JournalEntryCreate) -> list[JournalEntryLine]:
        return [
            JournalEntryLine(
                position=position,
                account_id=line.account_id,
                side=line.side,
                amount=line.amount,
            )
            for position, line in enumerate(request.lines)
        ]

    def append(self, request: JournalEntryCreate) -> JournalEntry:
        """
        Post a balanced journal entry.

        The entry gets its id on flush. The caller is responsible
        for calling db.commit() after this method returns.
        """
        self.validate(request)

        entry = JournalEntry(
            date=request.date,
            description=request.description,
            reference=request.reference,
            origin=request.origin,
            created_at=utcnow(),
            lines=self._build_lines(request),
        )
        self.db.add(entry)
        self.db.flush()

        logger.info(
            "Posted %s journal entry %s ref=%s amount=%s",
            entry.origin.value.lower(),
            entry.id,
            entry.reference,
            request.total_debit,
        )
        return entry

    def get(self, entry_id: int) -> JournalEntry:
        entry = self.db.get(JournalEntry, entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> list[JournalEntry]:
        """
        Return entries newest first.

        Ordered by creation time, then business date, so same-day
        entries display in the order they were made.
        """
        query = select(JournalEntry).options(selectinload(JournalEntry.lines))
        if start_date is not None:
            query = query.where(JournalEntry.date >= start_date)
        if end_date is not None:
            query = query.where(JournalEntry.date <= end_date)
        query = query.order_by(
            JournalEntry.created_at.desc(),
            JournalEntry.date.desc(),
            JournalEntry.id.desc(),
        )
        return list(self.db.execute(query).scalars().all())

    def list_by_reference(self, reference: str) -> list[JournalEntry]:
        """Return the entries posted for one business record."""
        entries = self.db.execute(
            select(JournalEntry)
            .where(JournalEntry.reference == reference)
            .order_by(JournalEntry.id)
        ).scalars().all()
        return list(entries)

    def update(self, entry_id: int, request: JournalEntryCreate) -> JournalEntry:
        """
        Replace an entry's date, description, reference and lines.

        The id, origin and creation timestamp are preserved.
        """
        entry = self.get(entry_id)
        self.validate(request)

        if entry.origin == EntryOrigin.AUTOMATIC:
            logger.warning(
                "Automatic journal entry %s (ref=%s) edited by hand; "
                "its source record is not changed",
                entry.id,
                entry.reference,
            )

        entry.date = request.date
        entry.description = request.description
        entry.reference = request.reference
        entry.lines = self._build_lines(request)
        entry.updated_at = utcnow()
        self.db.flush()

        logger.info("Updated journal entry %s", entry.id)
        return entry

    def delete(self, entry_id: int) -> None:
        entry = self.get(entry_id)
        if entry.origin == EntryOrigin.AUTOMATIC:
            logger.warning(
                "Automatic journal entry %s (ref=%s) deleted; "
                "its source record is not changed",
                entry.id,
                entry.reference,
            )
        self.db.delete(entry)
        self.db.flush()
        logger.info("Deleted journal entry %s", entry_id)

    def check_integrity(self) -> IntegrityReport:
        """
        Compare the sum of all debit lines with all credit lines.

        Every entry is balanced on the way in, so a difference
        here means rows were changed outside this service.
        """
        totals = dict(
            self.db.execute(
                select(
                    JournalEntryLine.side,
                    func.coalesce(func.sum(JournalEntryLine.amount), 0),
                ).group_by(JournalEntryLine.side)
            ).all()
        )
        total_debits = Decimal(str(totals.get(EntrySide.DEBIT, 0)))
        total_credits = Decimal(str(totals.get(EntrySide.CREDIT, 0)))
        entry_count = self.db.execute(
            select(func.count(JournalEntry.id))
        ).scalar_one()

        return IntegrityReport(
            total_debits=total_debits,
            total_credits=total_credits,
            difference=total_debits - total_credits,
            is_balanced=total_debits == total_credits,
            entry_count=entry_count,
        )
