"""
Tests for the RecordingService.

Recording a sale, purchase or expense must store the record,
adjust stock and post the matching automatic journal entries.
"""

import datetime
from decimal import Decimal

import pytest

from pos_ledger.chart_of_accounts import (
    AccountCode,
    ChartOfAccounts,
    DEFAULT_CHART_OF_ACCOUNTS,
)
from pos_ledger.errors import ConfigurationError, EntryValidationError, NotFoundError
from pos_ledger.models.enums import (
    EntryOrigin,
    ExpenseCategory,
    PaymentMethod,
    PaymentStatus,
)
from pos_ledger.models.journal_entry import JournalEntry
from pos_ledger.models.sale import Sale
from pos_ledger.schemas.events import (
    ExpenseCreate,
    PurchaseCreate,
    PurchaseItemCreate,
    SaleCreate,
    SaleItemCreate,
)
from pos_ledger.schemas.product import ProductCreate
from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.services.product_service import ProductService
from pos_ledger.services.recording_service import RecordingService

DAY = datetime.date(2024, 3, 15)


# --- Helpers ---

def make_product(db_session, stock=10, cost="10000"):
    product = ProductService(db_session).create(ProductCreate(
        name="Kopi Bubuk 200g",
        price=Decimal("25000"),
        cost=Decimal(cost),
        stock=stock,
        min_stock=2,
    ))
    db_session.commit()
    return product


def make_sale(product_id, quantity=2, amount="50000", **kwargs):
    return SaleCreate(
        date=DAY,
        amount=Decimal(amount),
        items=[SaleItemCreate(product_id=product_id, quantity=quantity)],
        **kwargs,
    )


def lines_of(entry):
    return [(l.account_id, l.side.value, l.amount) for l in entry.lines]


# --- Sales ---

class TestRecordSale:

    def test_sale_posts_revenue_and_cogs(self, db_session, chart):
        product = make_product(db_session)
        service = RecordingService(db_session, chart)

        sale = service.record_sale(make_sale(product.id))
        db_session.commit()

        entries = LedgerService(db_session, chart).list_by_reference(sale.reference)
        assert len(entries) == 2
        assert lines_of(entries[0]) == [
            (AccountCode.CASH, "DEBIT", Decimal("50000")),
            (AccountCode.SALES_REVENUE, "CREDIT", Decimal("50000")),
        ]
        assert lines_of(entries[1]) == [
            (AccountCode.COST_OF_GOODS_SOLD, "DEBIT", Decimal("20000")),
            (AccountCode.INVENTORY, "CREDIT", Decimal("20000")),
        ]
        assert all(e.origin == EntryOrigin.AUTOMATIC for e in entries)

    def test_sale_reduces_stock(self, db_session, chart):
        product = make_product(db_session, stock=10)

        RecordingService(db_session, chart).record_sale(make_sale(product.id, quantity=3))
        db_session.commit()

        assert ProductService(db_session).get(product.id).stock == 7

    def test_sale_copies_product_cost_and_name(self, db_session, chart):
        product = make_product(db_session, cost="12000")

        sale = RecordingService(db_session, chart).record_sale(make_sale(product.id))
        db_session.commit()

        assert sale.reference == f"SALE-{sale.id}"
        assert sale.items[0].cost == Decimal("12000")
        assert sale.items[0].product_name == "Kopi Bubuk 200g"

    def test_cash_sale_records_change(self, db_session, chart):
        product = make_product(db_session)

        sale = RecordingService(db_session, chart).record_sale(
            make_sale(product.id, cash_received=Decimal("60000"))
        )

        assert sale.change == Decimal("10000")

    def test_cash_received_below_amount_rejected(self, db_session, chart):
        product = make_product(db_session)

        with pytest.raises(EntryValidationError, match="less than"):
            RecordingService(db_session, chart).record_sale(
                make_sale(product.id, cash_received=Decimal("40000"))
            )

    def test_non_cash_sale_records_no_change(self, db_session, chart):
        product = make_product(db_session)

        sale = RecordingService(db_session, chart).record_sale(make_sale(
            product.id,
            payment_method=PaymentMethod.TRANSFER,
            cash_received=Decimal("20000"),
        ))

        assert sale.change is None

    def test_long_description_fits_cogs_entry(self, db_session, chart):
        product = make_product(db_session)

        sale = RecordingService(db_session, chart).record_sale(
            make_sale(product.id, description="x" * 255)
        )

        [revenue, cogs] = LedgerService(db_session, chart).list_by_reference(sale.reference)
        assert revenue.description == "x" * 255
        assert len(cogs.description) == 255
        assert cogs.description.startswith("HPP x")

    def test_credit_sale_still_debits_cash(self, db_session, chart):
        product = make_product(db_session)

        sale = RecordingService(db_session, chart).record_sale(make_sale(
            product.id,
            payment_method=PaymentMethod.CREDIT,
            status=PaymentStatus.UNPAID,
        ))

        [revenue, _] = LedgerService(db_session, chart).list_by_reference(sale.reference)
        assert revenue.lines[0].account_id == AccountCode.CASH

    def test_unknown_product_rejected(self, db_session, chart):
        with pytest.raises(NotFoundError, match="Product P404 not found"):
            RecordingService(db_session, chart).record_sale(make_sale("P404"))

    def test_failed_posting_leaves_nothing_behind(self, db_session):
        # A chart without COGS cannot post the second entry of the sale
        chart = ChartOfAccounts(
            a for a in DEFAULT_CHART_OF_ACCOUNTS
            if a.id != AccountCode.COST_OF_GOODS_SOLD
        )
        product = make_product(db_session, stock=10)

        with pytest.raises(ConfigurationError):
            RecordingService(db_session, chart).record_sale(make_sale(product.id))
        db_session.rollback()

        assert db_session.query(Sale).count() == 0
        assert db_session.query(JournalEntry).count() == 0
        assert ProductService(db_session).get(product.id).stock == 10

    def test_list_sales(self, db_session, chart):
        product = make_product(db_session)
        service = RecordingService(db_session, chart)
        service.record_sale(make_sale(product.id, quantity=1, amount="25000"))
        service.record_sale(make_sale(product.id, quantity=1, amount="25000"))
        db_session.commit()

        assert len(service.list_sales()) == 2


# --- Purchases ---

class TestRecordPurchase:

    def test_purchase_adds_stock_and_posts(self, db_session, chart):
        product = make_product(db_session, stock=1)
        service = RecordingService(db_session, chart)

        purchase = service.record_purchase(PurchaseCreate(
            date=DAY,
            supplier="CV Sumber Rejeki",
            amount=Decimal("200000"),
            payment_method=PaymentMethod.CREDIT,
            status=PaymentStatus.UNPAID,
            items=[PurchaseItemCreate(
                product_id=product.id, quantity=20, cost=Decimal("10000")
            )],
        ))
        db_session.commit()

        assert purchase.reference == f"PUR-{purchase.id}"
        assert ProductService(db_session).get(product.id).stock == 21
        [entry] = LedgerService(db_session, chart).list_by_reference(purchase.reference)
        assert lines_of(entry) == [
            (AccountCode.INVENTORY, "DEBIT", Decimal("200000")),
            (AccountCode.ACCOUNTS_PAYABLE, "CREDIT", Decimal("200000")),
        ]

    def test_get_unknown_purchase(self, db_session, chart):
        with pytest.raises(NotFoundError):
            RecordingService(db_session, chart).get_purchase(99)


# --- Expenses ---

class TestRecordExpense:

    def test_unpaid_electricity_goes_to_payable(self, db_session, chart):
        service = RecordingService(db_session, chart)

        expense = service.record_expense(ExpenseCreate(
            date=DAY,
            description="Bayar token listrik",
            amount=Decimal("75000"),
            category=ExpenseCategory.OPERATIONAL,
            status=PaymentStatus.UNPAID,
        ))
        db_session.commit()

        [entry] = LedgerService(db_session, chart).list_by_reference(expense.reference)
        assert lines_of(entry) == [
            (AccountCode.UTILITIES_EXPENSE, "DEBIT", Decimal("75000")),
            (AccountCode.ACCOUNTS_PAYABLE, "CREDIT", Decimal("75000")),
        ]

    def test_list_expenses(self, db_session, chart):
        service = RecordingService(db_session, chart)
        service.record_expense(ExpenseCreate(
            date=DAY,
            description="Sewa toko",
            amount=Decimal("1500000"),
            category=ExpenseCategory.OPERATIONAL,
        ))
        db_session.commit()

        [expense] = service.list_expenses()
        assert expense.reference == f"EXP-{expense.id}"
