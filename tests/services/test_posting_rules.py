"""
Tests for the journal posting rules.

The rules are pure: they take a business event and the chart
and return the entries to post, so no database is needed.
"""

import datetime
import logging
from decimal import Decimal

import pytest

from pos_ledger.chart_of_accounts import (
    DEFAULT_CHART_OF_ACCOUNTS,
    AccountCode,
    ChartOfAccounts,
)
from pos_ledger.errors import ConfigurationError
from pos_ledger.models.enums import (
    EntryOrigin,
    EntrySide,
    ExpenseCategory,
    PaymentMethod,
    PaymentStatus,
)
from pos_ledger.schemas.events import (
    ExpenseCreate,
    PurchaseCreate,
    SaleCreate,
    SaleItemCreate,
)
from pos_ledger.services.posting_rules import (
    cost_of_goods_sold,
    expense_entries,
    match_expense_keyword,
    purchase_entries,
    sale_entries,
    select_expense_account,
)

DAY = datetime.date(2024, 3, 15)


# --- Helpers ---

def chart_without(*account_ids):
    """The default chart minus the given accounts."""
    return ChartOfAccounts(
        a for a in DEFAULT_CHART_OF_ACCOUNTS if a.id not in account_ids
    )


def lines_of(entry):
    """(account_id, side, amount) triples of an entry."""
    return [(l.account_id, l.side, l.amount) for l in entry.lines]


def make_expense(description, category, amount="75000", status=PaymentStatus.PAID):
    return ExpenseCreate(
        date=DAY,
        description=description,
        amount=Decimal(amount),
        category=category,
        status=status,
    )


# --- Sales ---

class TestSaleEntries:

    def test_sale_posts_revenue_and_cogs(self, chart):
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("50000"),
            items=[SaleItemCreate(product_id="P1", quantity=2)],
        )

        entries = sale_entries(sale, "SALE-1", chart, {"P1": Decimal("10000")})

        assert len(entries) == 2
        assert lines_of(entries[0]) == [
            (AccountCode.CASH, EntrySide.DEBIT, Decimal("50000")),
            (AccountCode.SALES_REVENUE, EntrySide.CREDIT, Decimal("50000")),
        ]
        assert lines_of(entries[1]) == [
            (AccountCode.COST_OF_GOODS_SOLD, EntrySide.DEBIT, Decimal("20000")),
            (AccountCode.INVENTORY, EntrySide.CREDIT, Decimal("20000")),
        ]

    def test_sale_entries_are_automatic_and_share_reference(self, chart):
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("50000"),
            items=[SaleItemCreate(product_id="P1", quantity=2)],
        )

        entries = sale_entries(sale, "SALE-7", chart, {"P1": Decimal("10000")})

        assert all(e.origin == EntryOrigin.AUTOMATIC for e in entries)
        assert {e.reference for e in entries} == {"SALE-7"}
        assert all(e.date == DAY for e in entries)

    def test_cogs_description_is_cut_to_fit(self, chart):
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("50000"),
            description="x" * 255,
            items=[SaleItemCreate(product_id="P1", quantity=2)],
        )

        entries = sale_entries(sale, "SALE-1", chart, {"P1": Decimal("10000")})

        assert len(entries) == 2
        assert entries[1].description == ("HPP " + "x" * 255)[:255]

    def test_sale_without_known_cost_posts_revenue_only(self, chart):
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("50000"),
            items=[SaleItemCreate(product_id="UNKNOWN", quantity=2)],
        )

        entries = sale_entries(sale, "SALE-1", chart, {})

        assert len(entries) == 1
        assert entries[0].lines[1].account_id == AccountCode.SALES_REVENUE

    def test_item_cost_overrides_product_cost(self, chart):
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("50000"),
            items=[
                SaleItemCreate(product_id="P1", quantity=3, cost=Decimal("5000")),
            ],
        )

        cogs = cost_of_goods_sold(sale, {"P1": Decimal("10000")})

        assert cogs == Decimal("15000")

    def test_cogs_sums_over_items(self, chart):
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("90000"),
            items=[
                SaleItemCreate(product_id="P1", quantity=2),
                SaleItemCreate(product_id="P2", quantity=1),
            ],
        )

        cogs = cost_of_goods_sold(
            sale, {"P1": Decimal("10000"), "P2": Decimal("12500.50")}
        )

        assert cogs == Decimal("32500.50")

    def test_sale_without_cogs_account_is_refused(self):
        chart = chart_without(AccountCode.COST_OF_GOODS_SOLD)
        sale = SaleCreate(
            date=DAY,
            amount=Decimal("50000"),
            items=[SaleItemCreate(product_id="P1", quantity=2)],
        )

        with pytest.raises(ConfigurationError, match="501"):
            sale_entries(sale, "SALE-1", chart, {"P1": Decimal("10000")})

    def test_sale_without_cash_account_is_refused(self):
        chart = chart_without(AccountCode.CASH)
        sale = SaleCreate(date=DAY, amount=Decimal("50000"))

        with pytest.raises(ConfigurationError, match="101"):
            sale_entries(sale, "SALE-1", chart)


# --- Purchases ---

class TestPurchaseEntries:

    def test_cash_purchase_credits_cash(self, chart):
        purchase = PurchaseCreate(
            date=DAY,
            amount=Decimal("200000"),
            payment_method=PaymentMethod.CASH,
        )

        [entry] = purchase_entries(purchase, "PUR-1", chart)

        assert lines_of(entry) == [
            (AccountCode.INVENTORY, EntrySide.DEBIT, Decimal("200000")),
            (AccountCode.CASH, EntrySide.CREDIT, Decimal("200000")),
        ]

    def test_transfer_purchase_credits_cash(self, chart):
        purchase = PurchaseCreate(
            date=DAY,
            amount=Decimal("200000"),
            payment_method=PaymentMethod.TRANSFER,
        )

        [entry] = purchase_entries(purchase, "PUR-1", chart)

        assert entry.lines[1].account_id == AccountCode.CASH

    def test_credit_purchase_credits_accounts_payable(self, chart):
        purchase = PurchaseCreate(
            date=DAY,
            amount=Decimal("200000"),
            payment_method=PaymentMethod.CREDIT,
            status=PaymentStatus.UNPAID,
        )

        [entry] = purchase_entries(purchase, "PUR-1", chart)

        assert entry.lines[1].account_id == AccountCode.ACCOUNTS_PAYABLE


# --- Expenses ---

class TestExpenseAccountSelection:

    @pytest.mark.parametrize("description, expected", [
        ("Gaji karyawan Maret", AccountCode.SALARY_EXPENSE),
        ("Bayar sewa toko", AccountCode.RENT_EXPENSE),
        ("Bayar token listrik", AccountCode.UTILITIES_EXPENSE),
        ("Tagihan AIR PDAM", AccountCode.UTILITIES_EXPENSE),
        ("Pulsa telepon kantor", AccountCode.UTILITIES_EXPENSE),
        ("Penyusutan peralatan", AccountCode.DEPRECIATION_EXPENSE),
    ])
    def test_keyword_match(self, description, expected):
        assert match_expense_keyword(description) == expected

    def test_keyword_must_start_a_word(self):
        assert match_expense_keyword("Beli repair kit") is None

    def test_operational_without_keyword_uses_operating_expense(self, chart):
        account = select_expense_account(
            ExpenseCategory.OPERATIONAL, "Beli kantong plastik", chart
        )
        assert account == AccountCode.OPERATING_EXPENSE

    def test_other_category_ignores_keywords(self, chart):
        account = select_expense_account(
            ExpenseCategory.OTHER, "Bayar listrik", chart
        )
        assert account == AccountCode.OTHER_EXPENSE

    def test_administrative_without_keyword_uses_other_expense(self, chart):
        account = select_expense_account(
            ExpenseCategory.ADMINISTRATIVE, "Fotokopi dokumen", chart
        )
        assert account == AccountCode.OTHER_EXPENSE

    def test_missing_keyword_account_falls_back(self, caplog):
        chart = chart_without(AccountCode.UTILITIES_EXPENSE)

        with caplog.at_level(logging.WARNING):
            account = select_expense_account(
                ExpenseCategory.OPERATIONAL, "Bayar token listrik", chart
            )

        assert account == AccountCode.OPERATING_EXPENSE
        assert "504" in caplog.text

    def test_fallback_chain_ends_at_other_expense(self):
        chart = chart_without(
            AccountCode.UTILITIES_EXPENSE, AccountCode.OPERATING_EXPENSE
        )
        account = select_expense_account(
            ExpenseCategory.OPERATIONAL, "Bayar token listrik", chart
        )
        assert account == AccountCode.OTHER_EXPENSE

    def test_no_expense_account_is_a_configuration_error(self):
        chart = chart_without(
            AccountCode.UTILITIES_EXPENSE,
            AccountCode.OPERATING_EXPENSE,
            AccountCode.OTHER_EXPENSE,
        )
        with pytest.raises(ConfigurationError, match="No expense account"):
            select_expense_account(
                ExpenseCategory.OPERATIONAL, "Bayar token listrik", chart
            )


class TestExpenseEntries:

    def test_unpaid_utility_expense_goes_to_payable(self, chart):
        expense = make_expense(
            "Bayar token listrik",
            ExpenseCategory.OPERATIONAL,
            status=PaymentStatus.UNPAID,
        )

        [entry] = expense_entries(expense, "EXP-1", chart)

        assert lines_of(entry) == [
            (AccountCode.UTILITIES_EXPENSE, EntrySide.DEBIT, Decimal("75000")),
            (AccountCode.ACCOUNTS_PAYABLE, EntrySide.CREDIT, Decimal("75000")),
        ]

    def test_paid_expense_credits_cash(self, chart):
        expense = make_expense("Gaji karyawan", ExpenseCategory.OPERATIONAL)

        [entry] = expense_entries(expense, "EXP-1", chart)

        assert entry.lines[0].account_id == AccountCode.SALARY_EXPENSE
        assert entry.lines[1].account_id == AccountCode.CASH
        assert entry.description == "Gaji karyawan"
