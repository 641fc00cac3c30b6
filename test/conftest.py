"""
Test Configuration and Fixtures

- Unit tests (test/**/unit/): use cases run against a fake unit of work with AsyncMock repos
- Integration tests (test/**/integration/): real SQLAlchemy engine on a throwaway SQLite file
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('SERVICE_NAME', 'library-rental-test')
    os.environ.setdefault('DEPLOY_ENV', 'test')


_early_setup_test_environment()

from datetime import date, datetime, timezone  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from src.service.rental.domain.entity.book_entity import Book  # noqa: E402
from src.service.rental.domain.entity.reservation_entity import (  # noqa: E402
    Reservation,
    ReservationStatus,
)
from src.service.rental.domain.entity.user_entity import User  # noqa: E402


TEST_USER_ID = 1
TEST_BOOK_EXTERNAL_ID = 258027
TEST_BOOK_PRICE = Decimal('15.99')
TEST_START_DATE = date(2025, 1, 10)


@pytest.fixture
def test_user() -> User:
    return User(id=TEST_USER_ID, name='Juan Pérez', email='juan@example.com')


@pytest.fixture
def test_book() -> Book:
    return Book(
        id=1,
        external_id=TEST_BOOK_EXTERNAL_ID,
        title='The Lord of the Rings',
        author='J.R.R. Tolkien',
        price=TEST_BOOK_PRICE,
        stock_quantity=10,
        available_quantity=5,
    )


@pytest.fixture
def active_reservation() -> Reservation:
    """7-day rental of the 15.99 book, due 2025-01-17"""
    return Reservation(
        id=1,
        user_id=TEST_USER_ID,
        book_external_id=TEST_BOOK_EXTERNAL_ID,
        rental_days=7,
        start_date=TEST_START_DATE,
        expected_return_date=date(2025, 1, 17),
        daily_rate=TEST_BOOK_PRICE,
        total_fee=Decimal('111.93'),
        status=ReservationStatus.ACTIVE,
        created_at=datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc),
    )
