"""
Manual journal editor.

Turns the manual journal form (typed account names and amounts)
into a single balanced JournalEntryCreate, or rejects it.
This is the only place where account names are resolved to ids.

Checks run in a fixed order and the first failure wins:
    a. description and reference are filled in
    b. total debit equals total credit, and is more than zero
    c. every kept line names a known account
    d. at least one debit and one credit line remain
A line is kept when it has an account name and a positive amount.
"""

from decimal import Decimal

from sqlalchemy.orm import Session

from pos_ledger.chart_of_accounts import ChartOfAccounts
from pos_ledger.errors import EntryValidationError
from pos_ledger.models.enums import EntryOrigin, EntrySide
from pos_ledger.models.journal_entry import JournalEntry
from pos_ledger.schemas.journal import (
    JournalEntryCreate,
    JournalLineCreate,
    ManualJournalRequest,
    ManualLineInput,
)
from pos_ledger.services.ledger_service import LedgerService


def _total(lines: list[ManualLineInput]) -> Decimal:
    return sum((line.amount for line in lines), Decimal("0"))


def _resolve_lines(
    lines: list[ManualLineInput],
    side: EntrySide,
    chart: ChartOfAccounts,
) -> list[JournalLineCreate]:
    resolved = []
    for line in lines:
        name = line.account_name.strip()
        if not name or line.amount <= 0:
            continue
        account_id = chart.resolve_name(name)
        if account_id is None:
            raise EntryValidationError(f"Unknown account '{name}'")
        resolved.append(JournalLineCreate(
            account_id=account_id,
            side=side,
            amount=line.amount,
        ))
    return resolved


def build_manual_entry(
    request: ManualJournalRequest,
    chart: ChartOfAccounts,
) -> JournalEntryCreate:
    """Validate the form and return the entry to post."""
    description = request.description.strip()
    reference = request.reference.strip()
    if not description or not reference:
        raise EntryValidationError("Description and reference are required")

    total_debit = _total(request.debit_lines)
    total_credit = _total(request.credit_lines)
    if total_debit != total_credit or total_debit <= 0:
        raise EntryValidationError(
            f"Journal entry is not balanced: "
            f"debits={total_debit}, credits={total_credit}"
        )

    debit_lines = _resolve_lines(request.debit_lines, EntrySide.DEBIT, chart)
    credit_lines = _resolve_lines(request.credit_lines, EntrySide.CREDIT, chart)

    if not debit_lines or not credit_lines:
        raise EntryValidationError(
            "Journal entry invalid: at least one debit and one credit "
            "line is required"
        )

    return JournalEntryCreate(
        date=request.date,
        description=description,
        reference=reference,
        origin=EntryOrigin.MANUAL,
        lines=debit_lines + credit_lines,
    )


class ManualJournalEditor:
    """Create and edit user-authored journal entries."""

    def __init__(self, db: Session, chart: ChartOfAccounts):
        self.chart = chart
        self.ledger = LedgerService(db, chart)

    def create(self, request: ManualJournalRequest) -> JournalEntry:
        entry = build_manual_entry(request, self.chart)
        return self.ledger.append(entry)

    def edit(self, entry_id: int, request: ManualJournalRequest) -> JournalEntry:
        """Replace an existing entry in place; id and created_at are kept."""
        entry = build_manual_entry(request, self.chart)
        return self.ledger.update(entry_id, entry)
