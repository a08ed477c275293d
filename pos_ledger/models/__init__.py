"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from pos_ledger.models.base import Base
from pos_ledger.models.enums import (
    AccountType,
    EntrySide,
    EntryOrigin,
    PaymentStatus,
    PaymentMethod,
    ExpenseCategory,
    StockMovement,
)
from pos_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from pos_ledger.models.product import Product
from pos_ledger.models.sale import Sale, SaleItem
from pos_ledger.models.purchase import Purchase, PurchaseItem
from pos_ledger.models.expense import Expense

__all__ = [
    "Base",
    "AccountType",
    "EntrySide",
    "EntryOrigin",
    "PaymentStatus",
    "PaymentMethod",
    "ExpenseCategory",
    "StockMovement",
    "JournalEntry",
    "JournalEntryLine",
    "Product",
    "Sale",
    "SaleItem",
    "Purchase",
    "PurchaseItem",
    "Expense",
]
