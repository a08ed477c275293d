"""
Chart of accounts and account balance endpoints.

Balances are calculated from the journal on every request;
nothing is stored.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.chart_of_accounts import ChartOfAccounts, get_chart
from pos_ledger.models.base import get_db
from pos_ledger.schemas.report import AccountBalanceResponse, AccountResponse
from pos_ledger.services.report_service import ReportService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
def list_accounts(chart: ChartOfAccounts = Depends(get_chart)):
    """The chart of accounts, in chart order."""
    return [AccountResponse.model_validate(account) for account in chart]


@router.get("/balances", response_model=list[AccountBalanceResponse])
def list_account_balances(
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Displayed balance of every account, optionally for a period."""
    service = ReportService(db, chart)
    return service.get_account_balances(start_date, end_date)


@router.get("/{account_id}/balance", response_model=AccountBalanceResponse)
def get_account_balance(
    account_id: str,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Displayed balance of one account."""
    service = ReportService(db, chart)
    try:
        return service.get_account_balance(account_id, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
