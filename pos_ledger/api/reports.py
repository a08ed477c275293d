"""
Financial report endpoints.

Reports are computed from the journal on every request.
"""

import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_ledger.api.errors import to_http_exception
from pos_ledger.chart_of_accounts import ChartOfAccounts, get_chart
from pos_ledger.models.base import get_db
from pos_ledger.schemas.report import FinancialSummary
from pos_ledger.services.periods import period_dates
from pos_ledger.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/financial-summary", response_model=FinancialSummary)
def get_financial_summary(
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """
    Income statement, balance sheet and cash-flow summary.

    Without dates the whole journal is used. Both dates are
    inclusive.
    """
    return ReportService(db, chart).get_financial_summary(start_date, end_date)


@router.get("/financial-summary/{preset}", response_model=FinancialSummary)
def get_financial_summary_for_period(
    preset: str,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """
    Summary for a named period: this-month, last-month,
    this-quarter, this-year or all-time.
    """
    try:
        start_date, end_date = period_dates(preset)
    except ValueError as e:
        raise to_http_exception(e)
    return ReportService(db, chart).get_financial_summary(start_date, end_date)
