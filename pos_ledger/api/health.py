"""
Health check endpoint.

Reports whether the application is up and whether the
database answers a trivial query.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_ledger.chart_of_accounts import ChartOfAccounts, get_chart
from pos_ledger.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    chart: ChartOfAccounts = Depends(get_chart),
):
    """Return application health including database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "pos-ledger",
        "database": db_status,
        "accounts": len(chart),
    }
