from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

from app.api.routes import router  # noqa: E402 (importing routes loads the RGB order table)
from app.rent_engine.rgb_orders import coverage_window, get_orders  # noqa: E402

VERSION = "1.0.0"

app = FastAPI(
    title="NYC Rent Stabilized Renewal Calculator",
    description=(
        "Calculate legal rent increases for NYC rent-stabilized lease renewals "
        "under the Rent Guidelines Board orders: 1-year and 2-year offers, "
        "preferential rent and month-by-month schedules."
    ),
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins + ["http://localhost:8000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Return API info."""
    return {
        "name": "NYC Rent Stabilized Renewal Calculator",
        "version": VERSION,
        "endpoints": {
            "api_docs": "/docs",
            "health": "/health",
            "calculate": "POST /api/calculate",
            "renewal_options": "POST /api/renewal-options",
            "guideline": "GET /api/guideline?date=YYYY-MM-DD&term=1",
            "orders": "GET /api/orders",
        },
    }


@app.get("/health")
async def health():
    """Health check with RGB order table coverage."""
    first, last = coverage_window()
    orders = get_orders()
    return {
        "status": "healthy",
        "version": VERSION,
        "orders": {
            "count": len(orders),
            "first_order": orders[0].order_number,
            "last_order": orders[-1].order_number,
            "covers_from": first.isoformat(),
            "covers_to": last.isoformat(),
        },
    }
