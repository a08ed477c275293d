"""
Chart of accounts.

The chart is fixed seed data: it is built once at startup and
never changes while the application runs. Everything else in the
ledger refers to accounts by their stable id (see AccountCode);
resolving a human-typed name to an id only happens at the
manual-entry boundary, through an index built here.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from pos_ledger.errors import ConfigurationError, account_not_in_chart
from pos_ledger.models.enums import AccountType, CREDIT_NORMAL_TYPES


class AccountCode:
    """Stable ids of the accounts the posting rules and reports use."""
    CASH = "101"
    BANK = "102"
    ACCOUNTS_RECEIVABLE = "103"
    INVENTORY = "104"
    OFFICE_EQUIPMENT = "151"
    ACCUMULATED_DEPRECIATION = "152"

    ACCOUNTS_PAYABLE = "201"
    SALARIES_PAYABLE = "202"
    LONG_TERM_BANK_DEBT = "251"

    PAID_IN_CAPITAL = "301"
    RETAINED_EARNINGS = "302"
    DRAWINGS = "303"

    SALES_REVENUE = "401"
    SERVICE_REVENUE = "402"
    OTHER_INCOME = "499"

    COST_OF_GOODS_SOLD = "501"
    SALARY_EXPENSE = "502"
    RENT_EXPENSE = "503"
    UTILITIES_EXPENSE = "504"
    DEPRECIATION_EXPENSE = "505"
    OPERATING_EXPENSE = "510"
    OTHER_EXPENSE = "599"


class Account(BaseModel):
    """A single account in the chart. Immutable."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=100)
    type: AccountType
    # Expressed on the account's normal side: a positive opening
    # balance on a liability is a credit balance.
    initial_balance: Decimal = Decimal("0")

    @property
    def is_credit_normal(self) -> bool:
        return is_credit_normal(self.type)

    def opening_raw_balance(self) -> Decimal:
        """Opening balance in the debit-positive aggregation convention."""
        if self.is_credit_normal:
            return -self.initial_balance
        return self.initial_balance


def is_credit_normal(account_type: AccountType) -> bool:
    """True for liability, equity, revenue and other-income accounts."""
    return account_type in CREDIT_NORMAL_TYPES


def _account(id: str, name: str, account_type: AccountType) -> Account:
    return Account(id=id, name=name, type=account_type)


DEFAULT_CHART_OF_ACCOUNTS: tuple[Account, ...] = (
    # Assets (100s)
    _account(AccountCode.CASH, "Kas", AccountType.ASSET),
    _account(AccountCode.BANK, "Bank", AccountType.ASSET),
    _account(AccountCode.ACCOUNTS_RECEIVABLE, "Piutang Usaha", AccountType.ASSET),
    _account(AccountCode.INVENTORY, "Persediaan Barang Dagang", AccountType.ASSET),
    _account(AccountCode.OFFICE_EQUIPMENT, "Peralatan Kantor", AccountType.ASSET),
    _account(
        AccountCode.ACCUMULATED_DEPRECIATION,
        "Akumulasi Penyusutan Peralatan",
        AccountType.ASSET,
    ),

    # Liabilities (200s)
    _account(AccountCode.ACCOUNTS_PAYABLE, "Utang Usaha", AccountType.LIABILITY),
    _account(AccountCode.SALARIES_PAYABLE, "Utang Gaji", AccountType.LIABILITY),
    _account(
        AccountCode.LONG_TERM_BANK_DEBT,
        "Utang Bank Jangka Panjang",
        AccountType.LIABILITY,
    ),

    # Equity (300s)
    _account(AccountCode.PAID_IN_CAPITAL, "Modal Disetor", AccountType.EQUITY),
    _account(AccountCode.RETAINED_EARNINGS, "Laba Ditahan", AccountType.EQUITY),
    _account(AccountCode.DRAWINGS, "Prive", AccountType.EQUITY),

    # Revenue (400s)
    _account(
        AccountCode.SALES_REVENUE,
        "Pendapatan Penjualan Barang",
        AccountType.REVENUE,
    ),
    _account(AccountCode.SERVICE_REVENUE, "Pendapatan Jasa", AccountType.REVENUE),
    _account(
        AccountCode.OTHER_INCOME,
        "Pendapatan Lain-lain",
        AccountType.OTHER_INCOME,
    ),

    # Expenses (500s)
    _account(
        AccountCode.COST_OF_GOODS_SOLD,
        "Harga Pokok Penjualan",
        AccountType.EXPENSE,
    ),
    _account(AccountCode.SALARY_EXPENSE, "Beban Gaji", AccountType.EXPENSE),
    _account(AccountCode.RENT_EXPENSE, "Beban Sewa", AccountType.EXPENSE),
    _account(
        AccountCode.UTILITIES_EXPENSE,
        "Beban Listrik, Air, Telepon",
        AccountType.EXPENSE,
    ),
    _account(
        AccountCode.DEPRECIATION_EXPENSE,
        "Beban Penyusutan Peralatan",
        AccountType.EXPENSE,
    ),
    _account(AccountCode.OPERATING_EXPENSE, "Beban Operasional", AccountType.EXPENSE),
    _account(AccountCode.OTHER_EXPENSE, "Beban Lain-lain", AccountType.OTHER_EXPENSE),
)


class ChartOfAccounts:
    """
    Read-only index over a list of accounts.

    Lookups by id and by name are dictionary hits; both
    indexes are built once in the constructor. Duplicate ids
    or names are rejected because names are the join key for
    manually entered lines.
    """

    def __init__(self, accounts: Iterable[Account]):
        self._accounts: tuple[Account, ...] = tuple(accounts)
        self._by_id: dict[str, Account] = {}
        self._id_by_name: dict[str, str] = {}

        for account in self._accounts:
            if account.id in self._by_id:
                raise ConfigurationError(
                    f"Duplicate account id '{account.id}' in chart of accounts"
                )
            if account.name in self._id_by_name:
                raise ConfigurationError(
                    f"Duplicate account name '{account.name}' in chart of accounts"
                )
            self._by_id[account.id] = account
            self._id_by_name[account.name] = account.id

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._by_id

    def get(self, account_id: str) -> Account | None:
        return self._by_id.get(account_id)

    def require(self, account_id: str) -> Account:
        """
        Return the account or raise ConfigurationError.

        Posting rules call this: a missing account means the
        chart was set up wrong and the post must not happen.
        """
        account = self._by_id.get(account_id)
        if account is None:
            raise ConfigurationError(account_not_in_chart(account_id))
        return account

    def resolve_name(self, name: str) -> str | None:
        """Map an exact display name to its account id."""
        return self._id_by_name.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._id_by_name)


@lru_cache()
def get_chart() -> ChartOfAccounts:
    """Return the application's chart, built once from the seed list."""
    return ChartOfAccounts(DEFAULT_CHART_OF_ACCOUNTS)
