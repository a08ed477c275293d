"""
Recording service: sales, purchases and expenses.

Each record_* call is one unit of work inside the caller's
session:
1. Check the products the record refers to
2. Store the business record
3. Adjust stock
4. Post the journal entries the posting rules produce

Nothing is committed here. If any step raises, the caller rolls
the session back and none of the steps survive, so a sale never
ends up with its revenue entry but without its COGS entry.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from pos_ledger.chart_of_accounts import ChartOfAccounts
from pos_ledger.errors import EntryValidationError, NotFoundError, record_not_found
from pos_ledger.models.enums import PaymentMethod, StockMovement
from pos_ledger.models.expense import Expense
from pos_ledger.models.product import Product
from pos_ledger.models.purchase import Purchase, PurchaseItem
from pos_ledger.models.sale import Sale, SaleItem
from pos_ledger.schemas.events import ExpenseCreate, PurchaseCreate, SaleCreate
from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.services.posting_rules import (
    expense_entries,
    purchase_entries,
    sale_entries,
)
from pos_ledger.services.product_service import ProductService

logger = logging.getLogger(__name__)


class RecordingService:

    def __init__(self, db: Session, chart: ChartOfAccounts):
        self.db = db
        self.chart = chart
        self.ledger = LedgerService(db, chart)
        self.products = ProductService(db)

    def _load_products(self, product_ids: list[str]) -> dict[str, Product]:
        """Fetch every referenced product or raise NotFoundError."""
        products = {}
        for product_id in product_ids:
            if product_id not in products:
                products[product_id] = self.products.get(product_id)
        return products

    def _post(self, entries, reference: str) -> None:
        for entry in entries:
            self.ledger.append(entry)
        if not entries:
            logger.info("No journal entries to post for %s", reference)

    # --- Sales ---

    def record_sale(self, request: SaleCreate) -> Sale:
        """
        Record a sale, take its items out of stock and post
        revenue and cost of goods sold.
        """
        products = self._load_products([item.product_id for item in request.items])

        # Change is only given on cash sales
        change = None
        if (
            request.cash_received is not None
            and request.payment_method == PaymentMethod.CASH
        ):
            if request.cash_received < request.amount:
                raise EntryValidationError(
                    f"Cash received {request.cash_received} is less than "
                    f"the sale amount {request.amount}"
                )
            change = request.cash_received - request.amount

        sale = Sale(
            date=request.date,
            customer=request.customer,
            amount=request.amount,
            description=request.description,
            status=request.status,
            payment_method=request.payment_method,
            cash_received=request.cash_received,
            change=change,
            items=[
                SaleItem(
                    product_id=item.product_id,
                    product_name=item.product_name or products[item.product_id].name,
                    quantity=item.quantity,
                    price=item.price,
                    cost=(
                        item.cost
                        if item.cost is not None
                        else products[item.product_id].cost
                    ),
                )
                for item in request.items
            ],
        )
        self.db.add(sale)
        self.db.flush()

        for item in request.items:
            self.products.adjust_stock(
                item.product_id, item.quantity, StockMovement.SALE
            )

        unit_costs = {
            product_id: product.cost for product_id, product in products.items()
        }
        self._post(
            sale_entries(request, sale.reference, self.chart, unit_costs),
            sale.reference,
        )

        logger.info("Recorded sale %s amount=%s", sale.reference, sale.amount)
        return sale

    def get_sale(self, sale_id: int) -> Sale:
        sale = self.db.get(Sale, sale_id)
        if sale is None:
            raise NotFoundError(record_not_found("Sale", sale_id))
        return sale

    def list_sales(self) -> list[Sale]:
        sales = self.db.execute(
            select(Sale)
            .options(selectinload(Sale.items))
            .order_by(Sale.date.desc(), Sale.id.desc())
        ).scalars().all()
        return list(sales)

    # --- Purchases ---

    def record_purchase(self, request: PurchaseCreate) -> Purchase:
        """Record a purchase, put its items into stock and post it."""
        products = self._load_products([item.product_id for item in request.items])

        purchase = Purchase(
            date=request.date,
            supplier=request.supplier,
            amount=request.amount,
            description=request.description,
            status=request.status,
            payment_method=request.payment_method,
            items=[
                PurchaseItem(
                    product_id=item.product_id,
                    product_name=item.product_name or products[item.product_id].name,
                    quantity=item.quantity,
                    cost=item.cost,
                )
                for item in request.items
            ],
        )
        self.db.add(purchase)
        self.db.flush()

        for item in request.items:
            self.products.adjust_stock(
                item.product_id, item.quantity, StockMovement.PURCHASE
            )

        self._post(
            purchase_entries(request, purchase.reference, self.chart),
            purchase.reference,
        )

        logger.info(
            "Recorded purchase %s amount=%s", purchase.reference, purchase.amount
        )
        return purchase

    def get_purchase(self, purchase_id: int) -> Purchase:
        purchase = self.db.get(Purchase, purchase_id)
        if purchase is None:
            raise NotFoundError(record_not_found("Purchase", purchase_id))
        return purchase

    def list_purchases(self) -> list[Purchase]:
        purchases = self.db.execute(
            select(Purchase)
            .options(selectinload(Purchase.items))
            .order_by(Purchase.date.desc(), Purchase.id.desc())
        ).scalars().all()
        return list(purchases)

    # --- Expenses ---

    def record_expense(self, request: ExpenseCreate) -> Expense:
        """Record an expense and post it to the matching expense account."""
        expense = Expense(
            date=request.date,
            description=request.description,
            amount=request.amount,
            category=request.category,
            status=request.status,
        )
        self.db.add(expense)
        self.db.flush()

        self._post(
            expense_entries(request, expense.reference, self.chart),
            expense.reference,
        )

        logger.info(
            "Recorded expense %s amount=%s category=%s",
            expense.reference,
            expense.amount,
            expense.category.value,
        )
        return expense

    def get_expense(self, expense_id: int) -> Expense:
        expense = self.db.get(Expense, expense_id)
        if expense is None:
            raise NotFoundError(record_not_found("Expense", expense_id))
        return expense

    def list_expenses(self) -> list[Expense]:
        expenses = self.db.execute(
            select(Expense).order_by(Expense.date.desc(), Expense.id.desc())
        ).scalars().all()
        return list(expenses)
