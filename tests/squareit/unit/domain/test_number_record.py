"""Tests for the NumberRecord aggregate."""

from datetime import timedelta
from uuid import uuid4

import pytest

from squareit.domain.numbers import (
    MAX_VALUE,
    MIN_VALUE,
    NumberOutOfRangeError,
    NumberRecord,
)
from tests.shared.fixtures.factories import T0


class TestNumberRecord:
    """Tests for creation and soft deletion."""

    def test_create_accepts_64_bit_bounds(self):
        owner = uuid4()

        low = NumberRecord.create(owner, MIN_VALUE, T0)
        high = NumberRecord.create(owner, MAX_VALUE, T0)

        assert low.value == MIN_VALUE
        assert high.value == MAX_VALUE
        assert low.id is None
        assert not low.deleted

    @pytest.mark.parametrize("value", [MIN_VALUE - 1, MAX_VALUE + 1])
    def test_values_outside_64_bits_are_rejected(self, value):
        with pytest.raises(NumberOutOfRangeError):
            NumberRecord.create(uuid4(), value, T0)

    def test_mark_deleted(self):
        record = NumberRecord.create(uuid4(), 7, T0)

        record.mark_deleted(T0 + timedelta(minutes=1))

        assert record.deleted
        assert record.updated_at == T0 + timedelta(minutes=1)

    def test_ownership(self):
        owner = uuid4()
        record = NumberRecord.create(owner, 7, T0)

        assert record.is_owned_by(owner)
        assert not record.is_owned_by(uuid4())
