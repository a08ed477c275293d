"""
POS Ledger: FastAPI application.

Entry point for the application. Logging is configured and
all routers are registered here.
"""

import logging

from fastapi import FastAPI

from pos_ledger.config import get_settings
from pos_ledger.logging_config import setup_logging
from pos_ledger.api.health import router as health_router
from pos_ledger.api.accounts import router as accounts_router
from pos_ledger.api.journal import router as journal_router
from pos_ledger.api.products import router as products_router
from pos_ledger.api.records import router as records_router
from pos_ledger.api.reports import router as reports_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry bookkeeping for a small point-of-sale business",
    debug=settings.DEBUG,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(journal_router)
app.include_router(products_router)
app.include_router(records_router)
app.include_router(reports_router)

logger.info(
    "%s %s started (environment=%s)",
    settings.APP_NAME,
    settings.APP_VERSION,
    settings.ENVIRONMENT,
)
