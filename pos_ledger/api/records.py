"""
Sales, purchases and expenses.

Recording one of these stores the business record, adjusts
stock and posts the automatic journal entries, all in one
database transaction: either everything is committed or
nothing is.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_ledger.api.errors import to_http_exception
from pos_ledger.chart_of_accounts import ChartOfAccounts, get_chart
from pos_ledger.models.base import get_db
from pos_ledger.schemas.events import (
    ExpenseCreate,
    ExpenseResponse,
    PurchaseCreate,
    PurchaseResponse,
    SaleCreate,
    SaleResponse,
)
from pos_ledger.services.recording_service import RecordingService

router = APIRouter(tags=["Records"])


# --- Sales ---

@router.post("/sales", response_model=SaleResponse, status_code=201)
def record_sale(
    request: SaleCreate,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """
    Record a sale.

    Posts revenue (Cash / Sales Revenue) and, when the items have
    a cost, cost of goods sold (COGS / Inventory).
    """
    service = RecordingService(db, chart)
    try:
        sale = service.record_sale(request)
        db.commit()
        return sale
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("/sales", response_model=list[SaleResponse])
def list_sales(
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    return RecordingService(db, chart).list_sales()


@router.get("/sales/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    try:
        return RecordingService(db, chart).get_sale(sale_id)
    except ValueError as e:
        raise to_http_exception(e)


# --- Purchases ---

@router.post("/purchases", response_model=PurchaseResponse, status_code=201)
def record_purchase(
    request: PurchaseCreate,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Record a stock purchase (Inventory / Cash or Accounts Payable)."""
    service = RecordingService(db, chart)
    try:
        purchase = service.record_purchase(request)
        db.commit()
        return purchase
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("/purchases", response_model=list[PurchaseResponse])
def list_purchases(
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    return RecordingService(db, chart).list_purchases()


@router.get("/purchases/{purchase_id}", response_model=PurchaseResponse)
def get_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    try:
        return RecordingService(db, chart).get_purchase(purchase_id)
    except ValueError as e:
        raise to_http_exception(e)


# --- Expenses ---

@router.post("/expenses", response_model=ExpenseResponse, status_code=201)
def record_expense(
    request: ExpenseCreate,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Record an expense (expense account / Cash or Accounts Payable)."""
    service = RecordingService(db, chart)
    try:
        expense = service.record_expense(request)
        db.commit()
        return expense
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("/expenses", response_model=list[ExpenseResponse])
def list_expenses(
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    return RecordingService(db, chart).list_expenses()


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    try:
        return RecordingService(db, chart).get_expense(expense_id)
    except ValueError as e:
        raise to_http_exception(e)
