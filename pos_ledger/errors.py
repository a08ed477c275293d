"""
Ledger error types.

All errors subclass ValueError so callers that only know
about ValueError (the API layer, older scripts) keep working.
"""


class LedgerError(ValueError):
    """Base class for every error raised by the ledger core."""


class EntryValidationError(LedgerError):
    """
    A journal entry or business event failed validation.

    Raised before anything is written.
    """


class ConfigurationError(LedgerError):
    """
    The chart of accounts cannot satisfy a posting rule.

    This is a setup defect, not a runtime condition, so it is
    never recovered from silently.
    """


class NotFoundError(LedgerError):
    """A requested entry, record or account does not exist."""


def account_not_in_chart(account_id: str) -> str:
    """Return message for an account id missing from the chart."""
    return f"Account '{account_id}' is not in the chart of accounts"


def entry_not_found(entry_id: int) -> str:
    """Return message for a missing journal entry."""
    return f"Journal entry {entry_id} not found"


def record_not_found(kind: str, record_id) -> str:
    """Return message for a missing product, sale, purchase or expense."""
    return f"{kind} {record_id} not found"
