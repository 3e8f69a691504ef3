"""Tests for the in-memory divisor registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from models import DivisorCreate, DivisorKind, DivisorRecord, OverflowPolicy
from store import DivisorNotFoundError
from word import INT32, OverflowMode


class TestModels:

    def test_defaults(self):
        payload = DivisorCreate(divisor=3)
        assert payload.width == 32
        assert payload.overflow == OverflowPolicy.WRAP
        assert payload.key == (3, 32, OverflowPolicy.WRAP)

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="non-zero"):
            DivisorCreate(divisor=0)

    def test_unsupported_width_rejected(self):
        with pytest.raises(ValidationError, match="width"):
            DivisorCreate(divisor=3, width=12)

    def test_divisor_must_fit_word(self):
        with pytest.raises(ValidationError, match="outside"):
            DivisorCreate(divisor=128, width=8)
        assert DivisorCreate(divisor=-128, width=8).divisor == -128

    def test_policy_maps_to_mode(self):
        assert OverflowPolicy.WRAP.mode is OverflowMode.WRAP
        assert OverflowPolicy.ERROR.mode is OverflowMode.ERROR


class TestRegister:

    def test_register_magic(self, store, seven):
        record = store.register(seven)
        assert isinstance(record, DivisorRecord)
        assert record.id
        assert record.kind == DivisorKind.MAGIC
        assert record.magic == INT32.wrap(0x92492493)
        assert record.shift == 2
        assert not record.is_negative

    def test_register_shift(self, store):
        record = store.register(DivisorCreate(divisor=-8))
        assert record.kind == DivisorKind.SHIFT
        assert record.shift == 3
        assert record.magic is None
        assert record.is_negative

    def test_register_is_idempotent(self, store, seven):
        first = store.register(seven)
        second = store.register(DivisorCreate(divisor=7))
        assert first.id == second.id
        assert store.count() == 1

    def test_find(self, store, seven):
        assert store.find(seven) is None
        record = store.register(seven)
        assert store.find(DivisorCreate(divisor=7)) == record
        assert store.find(DivisorCreate(divisor=7, width=16)) is None

    def test_policy_is_part_of_identity(self, store, minus_one_checked):
        wrapped = store.register(DivisorCreate(divisor=-1))
        checked = store.register(minus_one_checked)
        assert wrapped.id != checked.id
        assert store.count() == 2

    def test_width_is_part_of_identity(self, store):
        a = store.register(DivisorCreate(divisor=7, width=8))
        b = store.register(DivisorCreate(divisor=7, width=16))
        assert a.id != b.id
        assert a.magic != b.magic


class TestDivide:

    def test_divide(self, store, seven):
        record = store.register(seven)
        assert store.divide(record.id, 100) == 14
        assert store.divide(record.id, -100) == -14

    def test_divide_unknown_raises(self, store):
        with pytest.raises(DivisorNotFoundError):
            store.divide("nope", 1)

    def test_divide_out_of_range(self, store, seven):
        record = store.register(seven)
        with pytest.raises(ValueError):
            store.divide(record.id, 2**31)

    def test_overflow_policies(self, store, minus_one_checked):
        wrapped = store.register(DivisorCreate(divisor=-1))
        checked = store.register(minus_one_checked)
        assert store.divide(wrapped.id, INT32.lo) == INT32.lo
        with pytest.raises(OverflowError):
            store.divide(checked.id, INT32.lo)


class TestListAndDelete:

    def test_list_empty_store(self, store):
        assert store.list() == []

    def test_list_filter_by_kind(self, store):
        store.register(DivisorCreate(divisor=3))
        store.register(DivisorCreate(divisor=4))
        store.register(DivisorCreate(divisor=5))
        assert {r.divisor for r in store.list(kind=DivisorKind.MAGIC)} == {3, 5}
        assert [r.divisor for r in store.list(kind=DivisorKind.SHIFT)] == [4]

    def test_list_pagination(self, store):
        for d in range(3, 13):
            store.register(DivisorCreate(divisor=d))
        assert len(store.list(limit=4)) == 4
        assert len(store.list(offset=8)) == 2

    def test_get_nonexistent_raises(self, store):
        with pytest.raises(DivisorNotFoundError, match="missing"):
            store.get("missing")

    def test_delete(self, store, seven):
        record = store.register(seven)
        deleted = store.delete(record.id)
        assert deleted.id == record.id
        assert store.count() == 0
        with pytest.raises(DivisorNotFoundError):
            store.get(record.id)

    def test_register_after_delete_creates_new_record(self, store, seven):
        first = store.register(seven)
        store.delete(first.id)
        second = store.register(seven)
        assert second.id != first.id

    def test_clear(self, store, seven):
        store.register(seven)
        store.clear()
        assert store.count() == 0
        assert store.list() == []
