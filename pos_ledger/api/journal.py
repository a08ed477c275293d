"""
Journal API endpoints.

Manual entries are created and edited through the manual
journal editor, which resolves account names and validates
the form. Automatic entries are only ever created by
recording sales, purchases and expenses.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from pos_ledger.api.errors import to_http_exception
from pos_ledger.chart_of_accounts import ChartOfAccounts, get_chart
from pos_ledger.models.base import get_db
from pos_ledger.schemas.journal import (
    IntegrityReport,
    JournalEntryResponse,
    ManualJournalRequest,
)
from pos_ledger.services.journal_editor import ManualJournalEditor
from pos_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/journal", tags=["Journal"])


@router.post("", response_model=JournalEntryResponse, status_code=201)
def create_manual_entry(
    request: ManualJournalRequest,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """
    Post a manual journal entry.

    Debits must equal credits and every account name must
    match an account in the chart exactly.
    """
    editor = ManualJournalEditor(db, chart)
    try:
        entry = editor.create(request)
        db.commit()
        return entry
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("", response_model=list[JournalEntryResponse])
def list_entries(
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """All journal entries, newest first."""
    return LedgerService(db, chart).list_entries()


@router.get("/integrity", response_model=IntegrityReport)
def check_integrity(
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Compare total debits with total credits across the journal."""
    return LedgerService(db, chart).check_integrity()


@router.get("/{entry_id}", response_model=JournalEntryResponse)
def get_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    try:
        return LedgerService(db, chart).get(entry_id)
    except ValueError as e:
        raise to_http_exception(e)


@router.put("/{entry_id}", response_model=JournalEntryResponse)
def edit_entry(
    entry_id: int,
    request: ManualJournalRequest,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Replace an entry in place; its id and creation time are kept."""
    editor = ManualJournalEditor(db, chart)
    try:
        entry = editor.edit(entry_id, request)
        db.commit()
        return entry
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.delete("/{entry_id}", status_code=204)
def delete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    try:
        LedgerService(db, chart).delete(entry_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)
    return Response(status_code=204)
