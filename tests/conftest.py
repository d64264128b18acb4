"""Shared test fixtures for clipfolio tests."""

import pytest

from clipfolio.gateway.memory import InMemoryGateway
from clipfolio.organizer.service import DraftOrganizer


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def organizer(gateway) -> DraftOrganizer:
    return DraftOrganizer(gateway)
