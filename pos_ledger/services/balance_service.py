"""
Balance aggregation.

Folds a list of journal entries into one balance per account.
Internally every balance is debit-positive (debits add, credits
subtract); the displayed value is the absolute amount for
credit-normal accounts and the raw amount otherwise.

The fold is a pure function of its inputs: it does not depend on
entry order and calling it twice gives the same result.
"""

import datetime
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from pos_ledger.chart_of_accounts import Account, ChartOfAccounts
from pos_ledger.models.enums import EntrySide
from pos_ledger.models.journal_entry import JournalEntry

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def display_balance(account: Account, raw: Decimal) -> Decimal:
    """Convert a debit-positive balance to the value shown to users."""
    if account.is_credit_normal:
        return abs(raw)
    return raw


def in_period(
    entry_date: datetime.date,
    start_date: datetime.date | None,
    end_date: datetime.date | None,
) -> bool:
    """Both ends are inclusive; a missing end is unbounded."""
    if start_date is not None and entry_date < start_date:
        return False
    if end_date is not None and entry_date > end_date:
        return False
    return True


@dataclass
class AggregatedBalances:
    raw: dict[str, Decimal]
    balances: dict[str, Decimal]
    skipped_account_ids: list[str] = field(default_factory=list)

    def get_raw(self, account_id: str) -> Decimal:
        return self.raw.get(account_id, ZERO)

    def get_balance(self, account_id: str) -> Decimal:
        """Displayed balance; zero for an account not in the chart."""
        return self.balances.get(account_id, ZERO)


def aggregate_balances(
    entries: Iterable[JournalEntry],
    chart: ChartOfAccounts,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
) -> AggregatedBalances:
    """
    Compute every account's balance from its opening balance and
    the lines of the entries dated within the period.

    Lines naming an account that is not in the chart are skipped
    and reported in skipped_account_ids.
    """
    raw = {account.id: account.opening_raw_balance() for account in chart}
    skipped: list[str] = []

    for entry in entries:
        if not in_period(entry.date, start_date, end_date):
            continue
        for line in entry.lines:
            if line.account_id not in raw:
                logger.warning(
                    "Skipping line for unknown account %s in journal entry %s",
                    line.account_id,
                    entry.id,
                )
                if line.account_id not in skipped:
                    skipped.append(line.account_id)
                continue
            if line.side == EntrySide.DEBIT:
                raw[line.account_id] += line.amount
            else:
                raw[line.account_id] -= line.amount

    balances = {
        account.id: display_balance(account, raw[account.id])
        for account in chart
    }
    return AggregatedBalances(
        raw=raw,
        balances=balances,
        skipped_account_ids=sorted(skipped),
    )
