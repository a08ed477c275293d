"""
Tests for balance aggregation.

Entries here are plain, unsaved JournalEntry objects: the
aggregator only reads them.
"""

import datetime
import logging
import random
from decimal import Decimal

from pos_ledger.chart_of_accounts import (
    Account,
    AccountCode,
    ChartOfAccounts,
)
from pos_ledger.models.enums import AccountType, EntrySide
from pos_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from pos_ledger.services.balance_service import aggregate_balances

JAN_15 = datetime.date(2024, 1, 15)


def entry(entry_id, debit, credit, amount, date=JAN_15):
    return JournalEntry(
        id=entry_id,
        date=date,
        description=f"Entry {entry_id}",
        reference=f"JU-{entry_id}",
        lines=[
            JournalEntryLine(account_id=debit, side=EntrySide.DEBIT, amount=Decimal(amount)),
            JournalEntryLine(account_id=credit, side=EntrySide.CREDIT, amount=Decimal(amount)),
        ],
    )


class TestAggregation:

    def test_empty_journal_gives_opening_balances(self, chart):
        balances = aggregate_balances([], chart)

        assert all(balances.get_balance(a.id) == 0 for a in chart)
        assert balances.skipped_account_ids == []

    def test_debits_add_to_assets(self, chart):
        balances = aggregate_balances(
            [entry(1, AccountCode.CASH, AccountCode.SALES_REVENUE, "50000")],
            chart,
        )

        assert balances.get_balance(AccountCode.CASH) == Decimal("50000")
        assert balances.get_raw(AccountCode.SALES_REVENUE) == Decimal("-50000")

    def test_revenue_is_displayed_positive(self):
        chart = ChartOfAccounts([
            Account(id="401", name="Pendapatan", type=AccountType.REVENUE),
            Account(id="101", name="Kas", type=AccountType.ASSET),
        ])
        entries = [
            entry(1, "101", "401", "100"),
            entry(2, "101", "401", "200"),
            entry(3, "101", "401", "300"),
        ]

        balances = aggregate_balances(entries, chart)

        assert balances.get_balance("401") == Decimal("600")
        assert balances.get_raw("401") == Decimal("-600")

    def test_asset_with_credit_balance_is_shown_negative(self, chart):
        balances = aggregate_balances(
            [entry(1, AccountCode.DEPRECIATION_EXPENSE, AccountCode.ACCUMULATED_DEPRECIATION, "10000")],
            chart,
        )

        assert balances.get_balance(AccountCode.ACCUMULATED_DEPRECIATION) == Decimal("-10000")

    def test_opening_balances_use_normal_side(self):
        chart = ChartOfAccounts([
            Account(id="101", name="Kas", type=AccountType.ASSET, initial_balance=Decimal("500")),
            Account(id="301", name="Modal", type=AccountType.EQUITY, initial_balance=Decimal("500")),
        ])

        balances = aggregate_balances([], chart)

        assert balances.get_raw("101") == Decimal("500")
        assert balances.get_raw("301") == Decimal("-500")
        assert balances.get_balance("301") == Decimal("500")

    def test_idempotent(self, chart):
        entries = [
            entry(1, AccountCode.CASH, AccountCode.PAID_IN_CAPITAL, "1000000"),
            entry(2, AccountCode.INVENTORY, AccountCode.CASH, "200000"),
        ]

        first = aggregate_balances(entries, chart)
        second = aggregate_balances(entries, chart)

        assert first == second

    def test_order_independent(self, chart):
        entries = [
            entry(1, AccountCode.CASH, AccountCode.PAID_IN_CAPITAL, "1000000"),
            entry(2, AccountCode.INVENTORY, AccountCode.CASH, "200000"),
            entry(3, AccountCode.CASH, AccountCode.SALES_REVENUE, "50000"),
            entry(4, AccountCode.COST_OF_GOODS_SOLD, AccountCode.INVENTORY, "20000"),
            entry(5, AccountCode.RENT_EXPENSE, AccountCode.ACCOUNTS_PAYABLE, "1500000"),
        ]
        shuffled = list(entries)
        random.Random(7).shuffle(shuffled)

        assert aggregate_balances(entries, chart).balances == (
            aggregate_balances(shuffled, chart).balances
        )

    def test_unknown_account_is_skipped(self, chart, caplog):
        with caplog.at_level(logging.WARNING):
            balances = aggregate_balances(
                [entry(1, AccountCode.CASH, "999", "50000")],
                chart,
            )

        assert balances.get_balance(AccountCode.CASH) == Decimal("50000")
        assert balances.skipped_account_ids == ["999"]
        assert "999" in caplog.text


class TestPeriodFilter:

    def test_end_date_is_included(self, chart):
        end = datetime.date(2024, 1, 31)
        entries = [
            entry(1, AccountCode.CASH, AccountCode.SALES_REVENUE, "100", date=end),
            entry(2, AccountCode.CASH, AccountCode.SALES_REVENUE, "200",
                  date=end + datetime.timedelta(days=1)),
        ]

        balances = aggregate_balances(
            entries, chart, start_date=datetime.date(2024, 1, 1), end_date=end
        )

        assert balances.get_balance(AccountCode.SALES_REVENUE) == Decimal("100")

    def test_start_date_is_included(self, chart):
        start = datetime.date(2024, 2, 1)
        entries = [
            entry(1, AccountCode.CASH, AccountCode.SALES_REVENUE, "100",
                  date=start - datetime.timedelta(days=1)),
            entry(2, AccountCode.CASH, AccountCode.SALES_REVENUE, "200", date=start),
        ]

        balances = aggregate_balances(entries, chart, start_date=start)

        assert balances.get_balance(AccountCode.SALES_REVENUE) == Decimal("200")

    def test_opening_balance_always_counts(self):
        chart = ChartOfAccounts([
            Account(id="101", name="Kas", type=AccountType.ASSET, initial_balance=Decimal("500")),
            Account(id="401", name="Pendapatan", type=AccountType.REVENUE),
        ])
        entries = [entry(1, "101", "401", "100", date=datetime.date(2023, 12, 31))]

        balances = aggregate_balances(
            entries, chart, start_date=datetime.date(2024, 1, 1)
        )

        assert balances.get_balance("101") == Decimal("500")
