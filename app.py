"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router
from store import DivisorStore


def create_app(store: DivisorStore | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional store for testing; creates a fresh one if omitted.
    """
    if store is None:
        store = DivisorStore()

    app = FastAPI(
        title="Divisor Registry API",
        description=(
            "Registers fixed divisors once, deriving shift or magic-multiplier "
            "constants and verifying them against native truncating division, "
            "then divides dividends with the stored strategy."
        ),
        version="0.1.0",
    )
    app.state.store = store
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
