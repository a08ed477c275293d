"""
Pydantic schemas for accounts, balances and financial statements.

FinancialSummary is the single, fully typed result of
ReportService.get_financial_summary: every line of the income
statement, balance sheet and cash-flow summary is always present.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_ledger.models.enums import AccountType


class AccountResponse(BaseModel):
    id: str
    name: str
    type: AccountType
    initial_balance: Decimal

    model_config = {"from_attributes": True}


class AccountBalanceResponse(BaseModel):
    """Displayed balance of one account."""
    account_id: str
    account_name: str
    account_type: AccountType
    balance: Decimal


class FinancialSummary(BaseModel):
    # Period (None means the whole ledger)
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None

    # Income statement
    sales_revenue: Decimal
    service_revenue: Decimal
    other_income: Decimal
    total_revenue: Decimal
    cost_of_goods_sold: Decimal
    gross_profit: Decimal
    operating_expense: Decimal
    other_expense: Decimal
    net_profit: Decimal

    # Balance sheet
    current_assets: Decimal
    fixed_assets: Decimal
    total_assets: Decimal
    current_liabilities: Decimal
    long_term_liabilities: Decimal
    total_liabilities: Decimal
    paid_in_capital: Decimal
    opening_retained_earnings: Decimal
    drawings: Decimal
    retained_earnings: Decimal
    total_equity: Decimal
    total_liabilities_and_equity: Decimal
    balance_difference: Decimal
    is_balanced: bool

    # Cash flow (operating activities only)
    operating_cash_flow: Decimal
    investing_cash_flow: Decimal
    financing_cash_flow: Decimal
    net_cash_change: Decimal
    opening_cash: Decimal
    ending_cash: Decimal

    # Data-quality and reconciliation diagnostics
    warnings: list[str] = Field(default_factory=list)
