"""
Journal posting rules.

Pure functions that turn a business event into the balanced
journal entries it must produce. Nothing here touches the
database; LedgerService posts what these functions return.

Accounting:
    Sale      DEBIT Cash              CREDIT Sales Revenue
              DEBIT Cost of Goods Sold CREDIT Inventory
    Purchase  DEBIT Inventory         CREDIT Cash | Accounts Payable
    Expense   DEBIT <expense account> CREDIT Cash | Accounts Payable

A rule whose amount is not positive posts nothing. A rule that
needs an account the chart does not have raises
ConfigurationError; nothing is posted to a substitute account
except along the explicit expense fallback chain below.
"""

import logging
import re
from decimal import Decimal
from typing import Mapping

from pos_ledger.chart_of_accounts import AccountCode, ChartOfAccounts
from pos_ledger.errors import ConfigurationError
from pos_ledger.models.enums import (
    EntryOrigin,
    EntrySide,
    ExpenseCategory,
    PaymentMethod,
    PaymentStatus,
)
from pos_ledger.schemas.events import ExpenseCreate, PurchaseCreate, SaleCreate
from pos_ledger.schemas.journal import JournalEntryCreate, JournalLineCreate

logger = logging.getLogger(__name__)

AMOUNT_QUANTUM = Decimal("0.0001")

# Length limit of JournalEntryCreate.description
DESCRIPTION_MAX_LENGTH = 255

# Payment methods that move cash immediately
CASH_PAYMENT_METHODS = frozenset({PaymentMethod.CASH, PaymentMethod.TRANSFER})

# Description keywords, tried in order. Matched at the start of a word,
# case-insensitively, so "air" matches "Bayar air PDAM" but not "pair".
EXPENSE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("gaji",), AccountCode.SALARY_EXPENSE),
    (("sewa",), AccountCode.RENT_EXPENSE),
    (("listrik", "air", "telepon"), AccountCode.UTILITIES_EXPENSE),
    (("penyusutan",), AccountCode.DEPRECIATION_EXPENSE),
)


def _two_line_entry(
    *,
    date,
    description: str,
    reference: str,
    debit_account: str,
    credit_account: str,
    amount: Decimal,
) -> JournalEntryCreate:
    return JournalEntryCreate(
        date=date,
        description=description,
        reference=reference,
        origin=EntryOrigin.AUTOMATIC,
        lines=[
            JournalLineCreate(
                account_id=debit_account,
                side=EntrySide.DEBIT,
                amount=amount,
            ),
            JournalLineCreate(
                account_id=credit_account,
                side=EntrySide.CREDIT,
                amount=amount,
            ),
        ],
    )


def cost_of_goods_sold(
    sale: SaleCreate, unit_costs: Mapping[str, Decimal]
) -> Decimal:
    """
    Sum quantity x unit cost over the sale's items.

    An item's own cost wins over the product cost in unit_costs.
    Items with no known cost contribute nothing.
    """
    total = Decimal("0")
    for item in sale.items:
        unit_cost = item.cost
        if unit_cost is None:
            unit_cost = unit_costs.get(item.product_id)
        if unit_cost is None:
            logger.debug(
                "No unit cost for product %s; excluded from COGS",
                item.product_id,
            )
            continue
        total += Decimal(item.quantity) * Decimal(unit_cost)
    return total.quantize(AMOUNT_QUANTUM)


def sale_entries(
    sale: SaleCreate,
    reference: str,
    chart: ChartOfAccounts,
    unit_costs: Mapping[str, Decimal] | None = None,
) -> list[JournalEntryCreate]:
    """
    Revenue entry plus, when the sold goods have a cost, a COGS entry.

    Both required account pairs are checked before anything is
    built, so a misconfigured chart never yields half a sale.
    """
    cash = chart.require(AccountCode.CASH)
    revenue = chart.require(AccountCode.SALES_REVENUE)

    cogs_amount = cost_of_goods_sold(sale, unit_costs or {})
    cogs_pair = None
    if cogs_amount > 0:
        cogs_pair = (
            chart.require(AccountCode.COST_OF_GOODS_SOLD),
            chart.require(AccountCode.INVENTORY),
        )

    entries: list[JournalEntryCreate] = []
    if sale.amount > 0:
        entries.append(_two_line_entry(
            date=sale.date,
            description=sale.description or "Penjualan",
            reference=reference,
            debit_account=cash.id,
            credit_account=revenue.id,
            amount=sale.amount,
        ))

    if cogs_pair is not None:
        cogs, inventory = cogs_pair
        entries.append(_two_line_entry(
            date=sale.date,
            description=f"HPP {sale.description or 'Penjualan'}"[:DESCRIPTION_MAX_LENGTH],
            reference=reference,
            debit_account=cogs.id,
            credit_account=inventory.id,
            amount=cogs_amount,
        ))

    return entries


def purchase_entries(
    purchase: PurchaseCreate,
    reference: str,
    chart: ChartOfAccounts,
) -> list[JournalEntryCreate]:
    """Stock bought: inventory up, paid from cash or owed to the supplier."""
    inventory = chart.require(AccountCode.INVENTORY)
    if purchase.payment_method in CASH_PAYMENT_METHODS:
        credit = chart.require(AccountCode.CASH)
    else:
        credit = chart.require(AccountCode.ACCOUNTS_PAYABLE)

    if purchase.amount <= 0:
        return []

    return [_two_line_entry(
        date=purchase.date,
        description=purchase.description or "Pembelian",
        reference=reference,
        debit_account=inventory.id,
        credit_account=credit.id,
        amount=purchase.amount,
    )]


def _matches_keyword(description: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}", description, re.IGNORECASE) is not None


def match_expense_keyword(description: str) -> str | None:
    """Return the expense account id the description points at, if any."""
    for keywords, account_id in EXPENSE_KEYWORDS:
        if any(_matches_keyword(description, kw) for kw in keywords):
            return account_id
    return None


def select_expense_account(
    category: ExpenseCategory,
    description: str,
    chart: ChartOfAccounts,
) -> str:
    """
    Choose the expense account to debit.

    Candidates are tried in order and the first one present in
    the chart wins:
        1. the keyword match (not for category Lainnya)
        2. Beban Operasional, for category Operasional
        3. Beban Lain-lain
    If none exists, ConfigurationError.
    """
    candidates: list[str] = []
    if category != ExpenseCategory.OTHER:
        matched = match_expense_keyword(description)
        if matched is not None:
            candidates.append(matched)
        if category == ExpenseCategory.OPERATIONAL:
            candidates.append(AccountCode.OPERATING_EXPENSE)
    candidates.append(AccountCode.OTHER_EXPENSE)

    for position, account_id in enumerate(candidates):
        if account_id in chart:
            return account_id
        remaining = candidates[position + 1:]
        if remaining:
            logger.warning(
                "Expense account %s missing from chart; falling back to %s",
                account_id,
                remaining[0],
            )

    raise ConfigurationError(
        f"No expense account available for category '{category.value}' "
        f"(tried {', '.join(candidates)})"
    )


def expense_entries(
    expense: ExpenseCreate,
    reference: str,
    chart: ChartOfAccounts,
) -> list[JournalEntryCreate]:
    """Expense incurred: paid from cash, or owed when not yet paid."""
    debit_account = select_expense_account(
        expense.category, expense.description, chart
    )
    if expense.status == PaymentStatus.PAID:
        credit = chart.require(AccountCode.CASH)
    else:
        credit = chart.require(AccountCode.ACCOUNTS_PAYABLE)

    if expense.amount <= 0:
        return []

    return [_two_line_entry(
        date=expense.date,
        description=expense.description,
        reference=reference,
        debit_account=debit_account,
        credit_account=credit.id,
        amount=expense.amount,
    )]
