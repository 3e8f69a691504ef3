"""FastAPI REST endpoints for the divisor registry.

Routes
------
POST   /divisors                 Register a divisor (201 new, 200 existing)
GET    /divisors                 List divisors (filterable by kind)
GET    /divisors/{id}            Retrieve a single divisor
GET    /divisors/{id}/divide     Divide a dividend by a registered divisor
DELETE /divisors/{id}            Delete a divisor
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel

from models import DivideResult, DivisorCreate, DivisorKind, DivisorRecord
from store import DivisorNotFoundError, DivisorStore

router = APIRouter(prefix="/divisors", tags=["divisors"])


def get_store(request: Request) -> DivisorStore:
    """The registry attached to the running app by ``create_app``."""
    return request.app.state.store


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

class DivisorListResponse(BaseModel):
    items: list[DivisorRecord]
    total: int


def _not_found(divisor_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Divisor not found: {divisor_id}")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=DivisorRecord, status_code=201)
def register_divisor(
    payload: DivisorCreate,
    response: Response,
    store: DivisorStore = Depends(get_store),
) -> DivisorRecord:
    """Register a divisor, deriving and verifying its constants.

    Registering the same divisor again returns the existing record with 200.
    """
    existing = store.find(payload)
    if existing is not None:
        response.status_code = 200
        return existing
    return store.register(payload)


@router.get("", response_model=DivisorListResponse)
def list_divisors(
    kind: DivisorKind | None = Query(default=None, description="Filter by strategy kind"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    limit: int = Query(default=50, ge=1, le=200, description="Pagination limit"),
    store: DivisorStore = Depends(get_store),
) -> DivisorListResponse:
    """List registered divisors."""
    items = store.list(kind=kind, offset=offset, limit=limit)
    return DivisorListResponse(items=items, total=store.count())


@router.get("/{divisor_id}", response_model=DivisorRecord)
def get_divisor(
    divisor_id: str, store: DivisorStore = Depends(get_store)
) -> DivisorRecord:
    """Retrieve a single divisor by id."""
    try:
        return store.get(divisor_id)
    except DivisorNotFoundError:
        raise _not_found(divisor_id)


@router.get("/{divisor_id}/divide", response_model=DivideResult)
def divide(
    divisor_id: str,
    dividend: int = Query(...),
    store: DivisorStore = Depends(get_store),
) -> DivideResult:
    """Divide ``dividend`` by the registered divisor, truncating toward zero."""
    try:
        quotient = store.divide(divisor_id, dividend)
    except DivisorNotFoundError:
        raise _not_found(divisor_id)
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return DivideResult(dividend=dividend, quotient=quotient)


@router.delete("/{divisor_id}", response_model=DivisorRecord)
def delete_divisor(
    divisor_id: str, store: DivisorStore = Depends(get_store)
) -> DivisorRecord:
    """Delete a divisor and return the deleted record."""
    try:
        return store.delete(divisor_id)
    except DivisorNotFoundError:
        raise _not_found(divisor_id)
