"""
Pydantic schemas for journal entries.

JournalEntryCreate is the payload every writer hands to the
ledger store: posting rules build it from business events, the
manual editor builds it from user-typed lines. Manual* schemas
are the raw form input before names are resolved.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from pos_ledger.models.enums import EntryOrigin, EntrySide


# --- Request Schemas ---

class JournalLineCreate(BaseModel):
    """A single debit or credit against a chart account id."""
    account_id: str = Field(min_length=1, max_length=20)
    side: EntrySide
    amount: Decimal = Field(gt=0, decimal_places=4)


class JournalEntryCreate(BaseModel):
    """
    A complete journal entry, not yet posted.

    Balance (debits == credits) is checked by LedgerService so
    that the rejection carries the totals in its message.
    """
    date: datetime.date
    description: str = Field(min_length=1, max_length=255)
    reference: str = Field(min_length=1, max_length=100)
    origin: EntryOrigin = EntryOrigin.MANUAL
    lines: list[JournalLineCreate] = Field(min_length=2)

    @field_validator("lines")
    @classmethod
    def must_have_debits_and_credits(cls, v: list) -> list:
        sides = {line.side for line in v}
        if EntrySide.DEBIT not in sides or EntrySide.CREDIT not in sides:
            raise ValueError(
                "journal entry must contain at least one debit and one credit"
            )
        return v

    @property
    def total_debit(self) -> Decimal:
        return sum(
            (l.amount for l in self.lines if l.side == EntrySide.DEBIT),
            Decimal("0"),
        )

    @property
    def total_credit(self) -> Decimal:
        return sum(
            (l.amount for l in self.lines if l.side == EntrySide.CREDIT),
            Decimal("0"),
        )


class ManualLineInput(BaseModel):
    """One row of the manual journal form: a typed account name and amount."""
    account_name: str = ""
    amount: Decimal = Field(default=Decimal("0"), ge=0)


class ManualJournalRequest(BaseModel):
    """
    The manual journal form as submitted.

    Deliberately permissive: empty rows and blank fields are
    allowed here and judged by the manual journal editor, which
    reports them in a fixed order.
    """
    date: datetime.date
    description: str = ""
    reference: str = ""
    debit_lines: list[ManualLineInput] = Field(default_factory=list)
    credit_lines: list[ManualLineInput] = Field(default_factory=list)


# --- Response Schemas ---

class JournalLineResponse(BaseModel):
    account_id: str
    side: EntrySide
    amount: Decimal

    model_config = {"from_attributes": True}


class JournalEntryResponse(BaseModel):
    id: int
    date: datetime.date
    description: str
    reference: str
    origin: EntryOrigin
    created_at: datetime.datetime
    updated_at: datetime.datetime | None
    lines: list[JournalLineResponse]

    model_config = {"from_attributes": True}


class IntegrityReport(BaseModel):
    """Ledger-wide debit and credit totals."""
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal
    is_balanced: bool
    entry_count: int
