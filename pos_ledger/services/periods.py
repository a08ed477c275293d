"""Reporting period presets."""

import datetime

from dateutil.relativedelta import relativedelta

from pos_ledger.errors import LedgerError

PERIOD_PRESETS = ("this-month", "last-month", "this-quarter", "this-year", "all-time")


def period_dates(
    preset: str, today: datetime.date | None = None
) -> tuple[datetime.date | None, datetime.date | None]:
    """Return the inclusive (start, end) dates for a preset.

    "all-time" returns (None, None), which means no date filter.

    Raises:
        LedgerError: If the preset is not known
    """
    if today is None:
        today = datetime.date.today()

    if preset == "this-month":
        start = today.replace(day=1)
        return start, start + relativedelta(months=1, days=-1)
    if preset == "last-month":
        start = today.replace(day=1) - relativedelta(months=1)
        return start, today.replace(day=1) - relativedelta(days=1)
    if preset == "this-quarter":
        first_month = 3 * ((today.month - 1) // 3) + 1
        start = today.replace(month=first_month, day=1)
        return start, start + relativedelta(months=3, days=-1)
    if preset == "this-year":
        return today.replace(month=1, day=1), today.replace(month=12, day=31)
    if preset == "all-time":
        return None, None

    raise LedgerError(
        f"Unknown period '{preset}' (expected one of: {', '.join(PERIOD_PRESETS)})"
    )
