"""
Financial statements derived from aggregated balances.

All figures use displayed balances (see balance_service), so
revenues, liabilities and equity are positive on their natural
side. Nothing here is stored: every call recomputes from the
journal.
"""

import datetime
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from pos_ledger.chart_of_accounts import AccountCode, ChartOfAccounts
from pos_ledger.errors import NotFoundError, account_not_in_chart
from pos_ledger.schemas.report import AccountBalanceResponse, FinancialSummary
from pos_ledger.services.balance_service import (
    AggregatedBalances,
    aggregate_balances,
    display_balance,
)
from pos_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

REVENUE_ACCOUNTS = (AccountCode.SALES_REVENUE, AccountCode.SERVICE_REVENUE, AccountCode.OTHER_INCOME)
OPERATING_EXPENSE_ACCOUNTS = (
    AccountCode.SALARY_EXPENSE,
    AccountCode.RENT_EXPENSE,
    AccountCode.UTILITIES_EXPENSE,
    AccountCode.DEPRECIATION_EXPENSE,
    AccountCode.OPERATING_EXPENSE,
)
CURRENT_ASSET_ACCOUNTS = (
    AccountCode.CASH,
    AccountCode.BANK,
    AccountCode.ACCOUNTS_RECEIVABLE,
    AccountCode.INVENTORY,
)
CURRENT_LIABILITY_ACCOUNTS = (AccountCode.ACCOUNTS_PAYABLE, AccountCode.SALARIES_PAYABLE)
CASH_ACCOUNTS = (AccountCode.CASH, AccountCode.BANK)


def _sum(balances: AggregatedBalances, account_ids) -> Decimal:
    return sum((balances.get_balance(a) for a in account_ids), Decimal("0"))


def _opening_cash(chart: ChartOfAccounts) -> Decimal:
    total = Decimal("0")
    for account_id in CASH_ACCOUNTS:
        account = chart.get(account_id)
        if account is not None:
            total += display_balance(account, account.opening_raw_balance())
    return total


def build_financial_summary(
    balances: AggregatedBalances,
    chart: ChartOfAccounts,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
) -> FinancialSummary:
    """
    Income statement, balance sheet and cash-flow summary.

    Equity closes the period's profit into retained earnings, so
    total assets equal total liabilities plus equity whenever every
    account sits on its normal side. Any difference is reported,
    never hidden.
    """
    warnings: list[str] = []
    for account_id in balances.skipped_account_ids:
        warnings.append(
            f"Journal lines for unknown account '{account_id}' were skipped"
        )

    # Income statement
    sales_revenue = balances.get_balance(AccountCode.SALES_REVENUE)
    service_revenue = balances.get_balance(AccountCode.SERVICE_REVENUE)
    other_income = balances.get_balance(AccountCode.OTHER_INCOME)
    total_revenue = _sum(balances, REVENUE_ACCOUNTS)
    cost_of_goods_sold = balances.get_balance(AccountCode.COST_OF_GOODS_SOLD)
    gross_profit = total_revenue - cost_of_goods_sold
    operating_expense = _sum(balances, OPERATING_EXPENSE_ACCOUNTS)
    other_expense = balances.get_balance(AccountCode.OTHER_EXPENSE)
    net_profit = gross_profit - operating_expense - other_expense

    # Balance sheet
    current_assets = _sum(balances, CURRENT_ASSET_ACCOUNTS)
    fixed_assets = (
        balances.get_balance(AccountCode.OFFICE_EQUIPMENT)
        - abs(balances.get_balance(AccountCode.ACCUMULATED_DEPRECIATION))
    )
    total_assets = current_assets + fixed_assets

    current_liabilities = _sum(balances, CURRENT_LIABILITY_ACCOUNTS)
    long_term_liabilities = balances.get_balance(AccountCode.LONG_TERM_BANK_DEBT)
    total_liabilities = current_liabilities + long_term_liabilities

    paid_in_capital = balances.get_balance(AccountCode.PAID_IN_CAPITAL)
    opening_retained_earnings = balances.get_balance(AccountCode.RETAINED_EARNINGS)
    drawings = balances.get_balance(AccountCode.DRAWINGS)
    retained_earnings = opening_retained_earnings + net_profit - drawings
    total_equity = paid_in_capital + retained_earnings
    total_liabilities_and_equity = total_liabilities + total_equity

    balance_difference = total_assets - total_liabilities_and_equity
    is_balanced = balance_difference == 0
    if not is_balanced:
        logger.warning(
            "Balance sheet out of balance: assets=%s liabilities+equity=%s "
            "difference=%s",
            total_assets,
            total_liabilities_and_equity,
            balance_difference,
        )
        warnings.append(
            f"Total assets differ from liabilities plus equity by "
            f"{balance_difference}"
        )

    # Cash flow
    opening_cash = _opening_cash(chart)
    ending_cash = _sum(balances, CASH_ACCOUNTS)
    net_cash_change = ending_cash - opening_cash

    return FinancialSummary(
        start_date=start_date,
        end_date=end_date,
        sales_revenue=sales_revenue,
        service_revenue=service_revenue,
        other_income=other_income,
        total_revenue=total_revenue,
        cost_of_goods_sold=cost_of_goods_sold,
        gross_profit=gross_profit,
        operating_expense=operating_expense,
        other_expense=other_expense,
        net_profit=net_profit,
        current_assets=current_assets,
        fixed_assets=fixed_assets,
        total_assets=total_assets,
        current_liabilities=current_liabilities,
        long_term_liabilities=long_term_liabilities,
        total_liabilities=total_liabilities,
        paid_in_capital=paid_in_capital,
        opening_retained_earnings=opening_retained_earnings,
        drawings=drawings,
        retained_earnings=retained_earnings,
        total_equity=total_equity,
        total_liabilities_and_equity=total_liabilities_and_equity,
        balance_difference=balance_difference,
        is_balanced=is_balanced,
        operating_cash_flow=net_cash_change,
        investing_cash_flow=Decimal("0"),
        financing_cash_flow=Decimal("0"),
        net_cash_change=net_cash_change,
        opening_cash=opening_cash,
        ending_cash=ending_cash,
        warnings=warnings,
    )


class ReportService:
    """Read-only reports over the journal."""

    def __init__(self, db: Session, chart: ChartOfAccounts):
        self.chart = chart
        self.ledger = LedgerService(db, chart)

    def aggregate(
        self,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> AggregatedBalances:
        entries = self.ledger.list_entries(start_date, end_date)
        return aggregate_balances(entries, self.chart, start_date, end_date)

    def get_financial_summary(
        self,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> FinancialSummary:
        balances = self.aggregate(start_date, end_date)
        return build_financial_summary(balances, self.chart, start_date, end_date)

    def get_account_balances(
        self,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> list[AccountBalanceResponse]:
        """Displayed balance of every account, in chart order."""
        balances = self.aggregate(start_date, end_date)
        return [
            AccountBalanceResponse(
                account_id=account.id,
                account_name=account.name,
                account_type=account.type,
                balance=balances.get_balance(account.id),
            )
            for account in self.chart
        ]

    def get_account_balance(
        self,
        account_id: str,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> AccountBalanceResponse:
        account = self.chart.get(account_id)
        if account is None:
            raise NotFoundError(account_not_in_chart(account_id))
        balances = self.aggregate(start_date, end_date)
        return AccountBalanceResponse(
            account_id=account.id,
            account_name=account.name,
            account_type=account.type,
            balance=balances.get_balance(account.id),
        )
