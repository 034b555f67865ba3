"""
Pytest configuration for squareit_identity tests.

Provides a controllable clock, a recording notification gateway and
ready-made accounts in each lifecycle state.
"""

import pytest

from squareit_identity import Account, SessionPolicy
from tests.shared.fixtures.factories import (
    DEFAULT_POLICY,
    FakeClock,
    RecordingGateway,
    make_account,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def policy() -> SessionPolicy:
    return DEFAULT_POLICY


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def unconfirmed_account(clock) -> Account:
    return make_account(now=clock())


@pytest.fixture
def active_account(clock) -> Account:
    return make_account(now=clock(), enabled=True)


@pytest.fixture
def deleted_account(clock) -> Account:
    return make_account(now=clock(), enabled=True, deleted=True)
