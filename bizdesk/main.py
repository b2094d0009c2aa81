"""
FastAPI Application — entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizdesk.config import settings
from bizdesk.database import close_db, init_db
from bizdesk.routes import router
from bizdesk.routes.account import auth_router, settings_router
from bizdesk.routes.activity import activity_router
from bizdesk.routes.invoices import invoice_router
from bizdesk.routes.records import (
    contact_router, employee_router, expense_router, payment_router, quotation_router,
)
from bizdesk.routes.rentals import router as rental_router
from bizdesk.routes.reports import router as report_router
from bizdesk.services.store import build_store, set_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown hook."""
    logger.info(f"🚀 Starting BizDesk API v{VERSION}")

    if settings.store_backend == "sql":
        await init_db()
        logger.info("✅ Database ready")

    store = build_store(
        settings.store_backend,
        cred_path=settings.firebase_cred_path,
        project_id=settings.firebase_project_id,
    )
    set_store(store)
    logger.info(f"✅ Document store ready ({store.name})")

    yield

    # Shutdown
    await store.close()
    set_store(None)
    if settings.store_backend == "sql":
        await close_db()
    logger.info("👋 Shutdown complete")


app = FastAPI(
    title="BizDesk API",
    description=(
        "Small-business management API — employees, invoices, quotations, "
        "payments, expenses, contacts and rentals."
    ),
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")
app.include_router(invoice_router, prefix="/api")
app.include_router(activity_router, prefix="/api")
app.include_router(employee_router, prefix="/api")
app.include_router(quotation_router, prefix="/api")
app.include_router(payment_router, prefix="/api")
app.include_router(expense_router, prefix="/api")
app.include_router(contact_router, prefix="/api")
app.include_router(rental_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(settings_router, prefix="/api")
app.include_router(report_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": "BizDesk API",
        "version": VERSION,
        "docs": "/docs",
    }
