"""
Product catalogue endpoints.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from pos_ledger.api.errors import to_http_exception
from pos_ledger.models.base import get_db
from pos_ledger.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from pos_ledger.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    request: ProductCreate,
    db: Session = Depends(get_db),
):
    service = ProductService(db)
    try:
        product = service.create(request)
        db.commit()
        return product
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("", response_model=list[ProductResponse])
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).list_products()


@router.get("/low-stock", response_model=list[ProductResponse])
def list_low_stock(db: Session = Depends(get_db)):
    """Products at or below their minimum stock level."""
    return ProductService(db).low_stock()


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get(product_id)
    except ValueError as e:
        raise to_http_exception(e)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    request: ProductUpdate,
    db: Session = Depends(get_db),
):
    """Update only the fields present in the request body."""
    service = ProductService(db)
    try:
        product = service.update(product_id, request)
        db.commit()
        return product
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    service = ProductService(db)
    try:
        service.delete(product_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http_exception(e)
    return Response(status_code=204)
