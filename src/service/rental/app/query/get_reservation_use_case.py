from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.entity.reservation_entity import Reservation


class GetReservationUseCase:
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
    async def get_reservation(self, reservation_id: int) -> Reservation:
        async with self.uow:
            reservation = await self.uow.reservations.get_by_id(reservation_id=reservation_id)

            if not reservation:
                raise NotFoundError(f'Reservation not found with ID: {reservation_id}')

            return reservation
