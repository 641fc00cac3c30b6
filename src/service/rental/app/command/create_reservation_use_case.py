from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, UnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.entity.reservation_entity import Reservation


class CreateReservationUseCase:
    """
    Create reservation use case

    Flow (single unit of work):
    1. Resolve user and book (Fail Fast: NotFound)
    2. Check availability (Fail Fast: Unavailable, nothing written yet)
    3. Build reservation with fee snapshot, persist it
    4. Decrement book stock
    5. Commit - a failed decrement rolls back the persisted reservation
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_reservation(
        self,
        *,
        user_id: int,
        book_external_id: int,
        rental_days: int,
        start_date: date,
    ) -> Reservation:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id=user_id)
            if not user:
                raise NotFoundError(f'User not found with ID: {user_id}')

            book = await self.uow.books.get_by_external_id(external_id=book_external_id)
            if not book:
                raise NotFoundError(f'Book not found with external ID: {book_external_id}')

            if not book.is_available:
                raise UnavailableError(f'No copies of book {book_external_id} available to reserve')

            reservation = Reservation.create(
                user_id=user_id,
                book_external_id=book_external_id,
                daily_rate=book.price,
                rental_days=rental_days,
                start_date=start_date,
            )

            created = await self.uow.reservations.create(reservation=reservation)
            await self.uow.books.decrease_available_quantity(external_id=book_external_id)
            await self.uow.commit()

        Logger.base.info(
            f'📝 [CREATE-RESERVATION] id={created.id} user={user_id} book={book_external_id} '
            f'total_fee={created.total_fee}'
        )
        return created
