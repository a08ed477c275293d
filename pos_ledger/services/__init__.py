"""Business logic services."""

from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.services.journal_editor import ManualJournalEditor, build_manual_entry
from pos_ledger.services.balance_service import AggregatedBalances, aggregate_balances
from pos_ledger.services.report_service import ReportService, build_financial_summary
from pos_ledger.services.product_service import ProductService
from pos_ledger.services.recording_service import RecordingService
from pos_ledger.services.periods import period_dates

__all__ = [
    "LedgerService",
    "ManualJournalEditor",
    "build_manual_entry",
    "AggregatedBalances",
    "aggregate_balances",
    "ReportService",
    "build_financial_summary",
    "ProductService",
    "RecordingService",
    "period_dates",
]
