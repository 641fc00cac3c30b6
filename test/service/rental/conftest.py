"""
Rental test fixtures

FakeUnitOfWork carries AsyncMock repositories and records commit/rollback,
so use case tests can assert what was written and whether it was committed.
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self):
        self.reservations = AsyncMock()
        self.books = AsyncMock()
        self.users = AsyncMock()
        self.committed = False
        self.rollback_count = 0

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rollback_count += 1


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()
