from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.entity.reservation_entity import Reservation, ReservationStatus


class ListReservationsUseCase:
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
    async def list_all_reservations(self) -> List[Reservation]:
        async with self.uow:
            return await self.uow.reservations.list_all()

    @Logger.io
    async def list_user_reservations(self, user_id: int) -> List[Reservation]:
        async with self.uow:
            return await self.uow.reservations.list_by_user_id(user_id=user_id)

    @Logger.io
    async def list_active_reservations(self) -> List[Reservation]:
        async with self.uow:
            return await self.uow.reservations.list_by_status(status=ReservationStatus.ACTIVE)

    @Logger.io
    async def list_overdue_reservations(self, today: Optional[date] = None) -> List[Reservation]:
        """Still-ACTIVE reservations past their expected return date (as of `today`)"""
        async with self.uow:
            return await self.uow.reservations.list_overdue(today=today or date.today())
