"""BizDesk API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BizDeskError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: the FastAPI-recommended startup/shutdown hook
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizdesk.api.error_handlers import register_error_handlers
from bizdesk.api.routes import (
    balances, bills, bookings, customers, deals, health, payouts, pricing, revenue,
)
from bizdesk.config import get_settings
from bizdesk.infrastructure.database import init_db
from bizdesk.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("BizDesk API started")
    yield
    logger.info("BizDesk API shutting down")


app = FastAPI(
    title="BizDesk API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(deals.router)
app.include_router(bills.router)
app.include_router(bookings.router)
app.include_router(pricing.router)
app.include_router(payouts.router)
app.include_router(balances.router)
app.include_router(revenue.router)

register_error_handlers(app)
