from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.entity.reservation_entity import Reservation, ReservationStatus


class ReturnBookUseCase:
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
    async def return_book(self, *, reservation_id: int, return_date: date) -> Reservation:
        """
        Close an ACTIVE reservation and put the copy back on the shelf.

        The late fee is charged on the book's current catalog price.

        Raises:
            NotFoundError: Unknown reservation (or its book vanished from the catalog)
            InvalidStateError: Reservation already returned
        """
        async with self.uow:
            reservation = await self.uow.reservations.get_by_id_for_update(
                reservation_id=reservation_id
            )
            if not reservation:
                raise NotFoundError(f'Reservation not found with ID: {reservation_id}')
            reservation.validate_can_be_returned()

            book = await self.uow.books.get_by_external_id(
                external_id=reservation.book_external_id
            )
            if not book:
                raise NotFoundError(
                    f'Book not found with external ID: {reservation.book_external_id}'
                )

            returned = reservation.mark_as_returned(return_date=return_date, book_price=book.price)

            saved = await self.uow.reservations.update(reservation=returned)
            await self.uow.books.increase_available_quantity(
                external_id=reservation.book_external_id
            )
            await self.uow.commit()

        if saved.status == ReservationStatus.OVERDUE:
            Logger.base.info(
                f'⏰ [RETURN-BOOK] Reservation {reservation_id} returned '
                f'{saved.days_late(return_date)} days late, late fee: {saved.late_fee}'
            )
        Logger.base.info(f'📚 [RETURN-BOOK] Book returned for reservation {reservation_id}')
        return saved
