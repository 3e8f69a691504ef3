"""Divisor registry models.

A DivisorRecord describes one registered divisor: the value, the word it
divides in, the overflow policy, and the constants the factory derived
for it.  This module defines the data models only -- the strategies
themselves live in divisor.py and are held by the store.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from divisor import Divisor, MagicDivisor
from word import WORDS, OverflowMode


class OverflowPolicy(str, Enum):
    WRAP = "wrap"
    ERROR = "error"

    @property
    def mode(self) -> OverflowMode:
        return OverflowMode[self.name]


class DivisorKind(str, Enum):
    SHIFT = "shift"
    MAGIC = "magic"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class DivisorCreate(BaseModel):
    """Payload for registering a divisor."""

    divisor: int
    width: int = Field(default=32, description="Word width in bits: 8, 16, 32 or 64")
    overflow: OverflowPolicy = OverflowPolicy.WRAP

    @field_validator("width")
    @classmethod
    def width_is_supported(cls, v: int) -> int:
        if v not in WORDS:
            raise ValueError(f"width must be one of {sorted(WORDS)}, got {v}")
        return v

    @field_validator("divisor")
    @classmethod
    def divisor_not_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("divisor must be non-zero")
        return v

    @model_validator(mode="after")
    def divisor_fits_word(self) -> DivisorCreate:
        word = WORDS[self.width]
        if not word.contains(self.divisor):
            raise ValueError(
                f"divisor {self.divisor} is outside [{word.lo}, {word.hi}]"
            )
        return self

    @property
    def key(self) -> tuple[int, int, OverflowPolicy]:
        return (self.divisor, self.width, self.overflow)


class DivisorRecord(BaseModel):
    """Full divisor record as stored and returned by the API."""

    id: str = Field(default_factory=_new_id)
    divisor: int
    width: int
    overflow: OverflowPolicy
    kind: DivisorKind
    shift: int
    magic: int | None = None
    is_negative: bool
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_strategy(
        cls, payload: DivisorCreate, strategy: Divisor
    ) -> DivisorRecord:
        return cls(
            divisor=payload.divisor,
            width=payload.width,
            overflow=payload.overflow,
            kind=DivisorKind(strategy.kind),
            shift=strategy.shift,
            magic=strategy.magic if isinstance(strategy, MagicDivisor) else None,
            is_negative=strategy.is_negative,
        )


class DivideResult(BaseModel):
    dividend: int
    quotient: int
