"""
Product service: the product catalogue and its stock levels.

Stock is adjusted by the recording service when sales and
purchases are recorded; stock never goes below zero.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_ledger.errors import NotFoundError, record_not_found
from pos_ledger.models.enums import StockMovement
from pos_ledger.models.product import Product
from pos_ledger.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, db: Session):
        self.db = db

    def create(self, request: ProductCreate) -> Product:
        product = Product(**request.model_dump())
        self.db.add(product)
        self.db.flush()
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def get(self, product_id: str) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError(record_not_found("Product", product_id))
        return product

    def list_products(self) -> list[Product]:
        products = self.db.execute(
            select(Product).order_by(Product.name, Product.id)
        ).scalars().all()
        return list(products)

    def update(self, product_id: str, request: ProductUpdate) -> Product:
        """Apply only the fields that were sent."""
        product = self.get(product_id)
        for name, value in request.model_dump(exclude_unset=True).items():
            setattr(product, name, value)
        self.db.flush()
        logger.info("Updated product %s", product.id)
        return product

    def delete(self, product_id: str) -> None:
        product = self.get(product_id)
        self.db.delete(product)
        self.db.flush()
        logger.info("Deleted product %s", product_id)

    def adjust_stock(
        self, product_id: str, quantity: int, kind: StockMovement
    ) -> Product:
        """
        Move stock for a sale (down) or a purchase (up).

        A sale larger than the stock on hand floors the stock at
        zero and logs a warning; the sale itself is not refused.
        """
        product = self.get(product_id)
        if kind == StockMovement.PURCHASE:
            product.stock += quantity
        else:
            if quantity > product.stock:
                logger.warning(
                    "Product %s sold %s with only %s in stock; stock set to 0",
                    product.id,
                    quantity,
                    product.stock,
                )
            product.stock = max(0, product.stock - quantity)
        self.db.flush()
        return product

    def low_stock(self) -> list[Product]:
        """Products at or below their minimum stock level."""
        products = self.db.execute(
            select(Product)
            .where(Product.stock <= Product.min_stock)
            .order_by(Product.stock, Product.name)
        ).scalars().all()
        return list(products)
