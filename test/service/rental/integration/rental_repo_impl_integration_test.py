"""
Integration tests for the SQLAlchemy repositories and unit of work
"""

from datetime import date
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError, UnavailableError
from src.service.rental.app.command.create_reservation_use_case import CreateReservationUseCase
from src.service.rental.domain.entity.reservation_entity import Reservation, ReservationStatus
from src.service.rental.driven_adapter.repo.book_catalog_repo_impl import BookCatalogRepoImpl


LOTR = 258027
DUNE = 8101356
CLEAN_CODE = 3296


def _reservation(*, user_id: int, start: date, days: int = 7) -> Reservation:
    return Reservation.create(
        user_id=user_id,
        book_external_id=LOTR,
        daily_rate=Decimal('15.99'),
        rental_days=days,
        start_date=start,
    )


@pytest.mark.integration
class TestReservationRepo:
    @pytest.mark.asyncio
    async def test_create_and_get_round_trip(self, uow_factory, seeded):
        # Arrange
        async with uow_factory() as uow:
            created = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 10))
            )
            await uow.commit()

        # Act
        async with uow_factory() as uow:
            loaded = await uow.reservations.get_by_id(reservation_id=created.id)

        # Assert
        assert loaded is not None
        assert loaded.id == created.id
        assert loaded.status == ReservationStatus.ACTIVE
        assert loaded.total_fee == Decimal('111.93')
        assert loaded.expected_return_date == date(2025, 1, 17)
        assert loaded.late_fee is None
        assert loaded.user_name == 'Juan Pérez'
        assert loaded.book_title == 'The Lord of the Rings'

    @pytest.mark.asyncio
    async def test_create_returns_display_names(self, uow_factory, seeded):
        async with uow_factory() as uow:
            created = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.other_user_id, start=date(2025, 1, 10))
            )

        assert created.user_name == 'Ana García'
        assert created.book_title == 'The Lord of the Rings'

    @pytest.mark.asyncio
    async def test_get_by_id_for_update(self, uow_factory, seeded):
        async with uow_factory() as uow:
            created = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 10))
            )
            locked = await uow.reservations.get_by_id_for_update(reservation_id=created.id)
            missing = await uow.reservations.get_by_id_for_update(reservation_id=999)

        assert locked == created
        assert missing is None

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, uow_factory, seeded):
        async with uow_factory() as uow:
            assert await uow.reservations.get_by_id(reservation_id=999) is None

    @pytest.mark.asyncio
    async def test_update_persists_return(self, uow_factory, seeded):
        # Arrange
        async with uow_factory() as uow:
            created = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 10))
            )
            await uow.commit()

        # Act
        async with uow_factory() as uow:
            await uow.reservations.update(
                reservation=created.mark_as_returned(
                    return_date=date(2025, 1, 20), book_price=Decimal('15.99')
                )
            )
            await uow.commit()

        # Assert
        async with uow_factory() as uow:
            loaded = await uow.reservations.get_by_id(reservation_id=created.id)
        assert loaded.status == ReservationStatus.OVERDUE
        assert loaded.late_fee == Decimal('7.20')
        assert loaded.actual_return_date == date(2025, 1, 20)

    @pytest.mark.asyncio
    async def test_update_unknown_reservation_raises(self, uow_factory, seeded):
        ghost = _reservation(user_id=seeded.user_id, start=date(2025, 1, 10))
        ghost.id = 999

        async with uow_factory() as uow:
            with pytest.raises(NotFoundError):
                await uow.reservations.update(reservation=ghost)

    @pytest.mark.asyncio
    async def test_list_queries(self, uow_factory, seeded):
        # Arrange: two ACTIVE for user, one returned for other user
        async with uow_factory() as uow:
            first = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 1))
            )
            second = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 20))
            )
            third = await uow.reservations.create(
                reservation=_reservation(user_id=seeded.other_user_id, start=date(2025, 1, 1))
            )
            await uow.reservations.update(
                reservation=third.mark_as_returned(
                    return_date=date(2025, 1, 5), book_price=Decimal('15.99')
                )
            )
            await uow.commit()

        # Act
        async with uow_factory() as uow:
            all_ids = [r.id for r in await uow.reservations.list_all()]
            user_ids = [
                r.id for r in await uow.reservations.list_by_user_id(user_id=seeded.user_id)
            ]
            active_ids = [
                r.id
                for r in await uow.reservations.list_by_status(status=ReservationStatus.ACTIVE)
            ]
            overdue_ids = [
                r.id for r in await uow.reservations.list_overdue(today=date(2025, 1, 15))
            ]

        # Assert
        assert all_ids == [first.id, second.id, third.id]
        assert user_ids == [first.id, second.id]
        assert active_ids == [first.id, second.id]
        # first is due 2025-01-08; second due 2025-01-27; third is closed
        assert overdue_ids == [first.id]

    @pytest.mark.asyncio
    async def test_not_overdue_on_expected_return_date(self, uow_factory, seeded):
        async with uow_factory() as uow:
            await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 1))
            )
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.reservations.list_overdue(today=date(2025, 1, 8)) == []


@pytest.mark.integration
class TestBookCatalogRepo:
    @pytest.mark.asyncio
    async def test_decrease_and_increase_available_quantity(self, uow_factory, seeded):
        async with uow_factory() as uow:
            book = await uow.books.decrease_available_quantity(external_id=DUNE)
            assert book.available_quantity == 0
            book = await uow.books.increase_available_quantity(external_id=DUNE)
            assert book.available_quantity == 1

    @pytest.mark.asyncio
    async def test_decrease_at_zero_raises_unavailable(self, uow_factory, seeded):
        async with uow_factory() as uow:
            with pytest.raises(UnavailableError):
                await uow.books.decrease_available_quantity(external_id=CLEAN_CODE)

    @pytest.mark.asyncio
    async def test_increase_beyond_stock_raises_conflict(self, uow_factory, seeded):
        async with uow_factory() as uow:
            with pytest.raises(ConflictError):
                await uow.books.increase_available_quantity(external_id=LOTR)

    @pytest.mark.asyncio
    async def test_unknown_book(self, uow_factory, seeded):
        async with uow_factory() as uow:
            assert await uow.books.get_by_external_id(external_id=1) is None
            with pytest.raises(NotFoundError):
                await uow.books.decrease_available_quantity(external_id=1)


@pytest.mark.integration
class TestUnitOfWorkAtomicity:
    @pytest.mark.asyncio
    async def test_uncommitted_work_is_rolled_back(self, uow_factory, seeded):
        async with uow_factory() as uow:
            await uow.reservations.create(
                reservation=_reservation(user_id=seeded.user_id, start=date(2025, 1, 10))
            )
            await uow.books.decrease_available_quantity(external_id=LOTR)

        async with uow_factory() as uow:
            assert await uow.reservations.list_all() == []
            book = await uow.books.get_by_external_id(external_id=LOTR)
            assert book.available_quantity == 10

    @pytest.mark.asyncio
    async def test_failed_decrement_leaves_no_reservation(
        self, uow_factory, seeded, monkeypatch
    ):
        """
        Given: Stock decrement fails after the reservation row was flushed
        When: Create reservation through the use case
        Then: No reservation survives and the stock is unchanged
        """

        # Arrange
        async def _fail(self, *, external_id: int):
            raise UnavailableError(f'No copies of book {external_id} available to reserve')

        monkeypatch.setattr(BookCatalogRepoImpl, 'decrease_available_quantity', _fail)
        use_case = CreateReservationUseCase(uow=uow_factory())

        # Act
        with pytest.raises(UnavailableError):
            await use_case.create_reservation(
                user_id=seeded.user_id,
                book_external_id=LOTR,
                rental_days=7,
                start_date=date(2025, 1, 10),
            )

        # Assert
        async with uow_factory() as uow:
            assert await uow.reservations.list_all() == []
            book = await uow.books.get_by_external_id(external_id=LOTR)
            assert book.available_quantity == 10
