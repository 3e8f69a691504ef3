"""In-memory divisor registry.

Registering a divisor runs the factory once: classification, constant
derivation and verification all happen at registration time, and every
later division reuses the stored strategy.  Registration is idempotent
per (divisor, width, overflow) so the same divisor is never built twice.
"""

from __future__ import annotations

import logging

from divisor import Divisor
from factory import DivisorFactory
from models import DivisorCreate, DivisorKind, DivisorRecord
from word import WORDS

logger = logging.getLogger(__name__)


class DivisorNotFoundError(Exception):
    """Raised when a divisor lookup fails."""

    def __init__(self, divisor_id: str) -> None:
        self.divisor_id = divisor_id
        super().__init__(f"Divisor not found: {divisor_id}")


class DivisorStore:
    """In-memory registry of verified divisors."""

    def __init__(self) -> None:
        self._records: dict[str, DivisorRecord] = {}
        self._strategies: dict[str, Divisor] = {}
        self._by_key: dict[tuple, str] = {}

    # -- CRUD ----------------------------------------------------------------

    def find(self, payload: DivisorCreate) -> DivisorRecord | None:
        """The record already registered for ``payload``, if any."""
        existing = self._by_key.get(payload.key)
        return None if existing is None else self._records[existing]

    def register(self, payload: DivisorCreate) -> DivisorRecord:
        """Build and verify a divisor, or return the existing record."""
        existing = self.find(payload)
        if existing is not None:
            return existing

        strategy = DivisorFactory.create(
            payload.divisor, WORDS[payload.width], payload.overflow.mode
        )
        record = DivisorRecord.from_strategy(payload, strategy)
        self._records[record.id] = record
        self._strategies[record.id] = strategy
        self._by_key[payload.key] = record.id
        logger.debug(
            "registered %s divisor %d as %s",
            record.kind.value, record.divisor, record.id,
        )
        return record

    def get(self, divisor_id: str) -> DivisorRecord:
        """Retrieve a divisor record by id."""
        try:
            return self._records[divisor_id]
        except KeyError:
            raise DivisorNotFoundError(divisor_id) from None

    def list(
        self,
        *,
        kind: DivisorKind | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> list[DivisorRecord]:
        """List records with optional filtering and pagination."""
        items = list(self._records.values())

        if kind is not None:
            items = [r for r in items if r.kind == kind]

        items.sort(key=lambda r: r.created_at, reverse=True)
        return items[offset : offset + limit]

    def divide(self, divisor_id: str, dividend: int) -> int:
        """Divide ``dividend`` by a registered divisor."""
        self.get(divisor_id)
        return self._strategies[divisor_id].divide(dividend)

    def delete(self, divisor_id: str) -> DivisorRecord:
        """Delete a divisor and return the deleted record."""
        record = self.get(divisor_id)
        del self._records[divisor_id]
        del self._strategies[divisor_id]
        self._by_key = {k: v for k, v in self._by_key.items() if v != divisor_id}
        logger.debug("deleted divisor %s", divisor_id)
        return record

    def count(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        """Remove all divisors (useful for testing)."""
        self._records.clear()
        self._strategies.clear()
        self._by_key.clear()
