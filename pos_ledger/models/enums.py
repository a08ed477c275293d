"""
Shared enumerations for models, schemas and services.

Using Python enums mapped to database enums ensures that
only valid values can be stored. The business-facing enums
keep the values the shop staff actually type and see.
"""

import enum


class AccountType(str, enum.Enum):
    """The seven account categories of the chart."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"
    OTHER_INCOME = "OTHER_INCOME"
    OTHER_EXPENSE = "OTHER_EXPENSE"


# Types whose normal balance is a credit
CREDIT_NORMAL_TYPES = frozenset({
    AccountType.LIABILITY,
    AccountType.EQUITY,
    AccountType.REVENUE,
    AccountType.OTHER_INCOME,
})


class EntrySide(str, enum.Enum):
    """Side of a journal entry line."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class EntryOrigin(str, enum.Enum):
    """Who authored a journal entry."""
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATIC"


class PaymentStatus(str, enum.Enum):
    PAID = "Lunas"
    UNPAID = "Belum Lunas"


class PaymentMethod(str, enum.Enum):
    CASH = "Tunai"
    TRANSFER = "Transfer"
    CREDIT = "Kredit"


class ExpenseCategory(str, enum.Enum):
    OPERATIONAL = "Operasional"
    ADMINISTRATIVE = "Administrasi"
    SELLING = "Penjualan"
    OTHER = "Lainnya"


class StockMovement(str, enum.Enum):
    """Direction of a stock adjustment."""
    SALE = "sale"
    PURCHASE = "purchase"
