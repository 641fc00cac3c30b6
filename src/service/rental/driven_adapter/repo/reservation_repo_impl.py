from datetime import date
from typing import List

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_reservation_repo import IReservationRepo
from src.service.rental.domain.entity.reservation_entity import Reservation, ReservationStatus
from src.service.rental.driven_adapter.model import ReservationModel


class ReservationRepoImpl(IReservationRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _select() -> Select:
        return select(ReservationModel).options(
            selectinload(ReservationModel.user), selectinload(ReservationModel.book)
        )

    @staticmethod
    def _to_entity(db_reservation: ReservationModel) -> Reservation:
        """Requires `user` and `book` to be loaded (see _select)"""
        return Reservation(
            user_id=db_reservation.user_id,
            book_external_id=db_reservation.book_external_id,
            rental_days=db_reservation.rental_days,
            start_date=db_reservation.start_date,
            expected_return_date=db_reservation.expected_return_date,
            actual_return_date=db_reservation.actual_return_date,
            daily_rate=db_reservation.daily_rate,
            total_fee=db_reservation.total_fee,
            late_fee=db_reservation.late_fee,
            status=ReservationStatus(db_reservation.status),
            created_at=db_reservation.created_at,
            id=db_reservation.id,
            user_name=db_reservation.user.name,
            book_title=db_reservation.book.title,
        )

    async def _fetch_all(self, query: Select) -> List[Reservation]:
        result = await self.session.execute(query.order_by(ReservationModel.id))
        return [ReservationRepoImpl._to_entity(row) for row in result.scalars().all()]

    async def _fetch_one(self, query: Select) -> Reservation | None:
        # populate_existing reloads rows already in the identity map after a flush
        result = await self.session.execute(query.execution_options(populate_existing=True))
        db_reservation = result.scalar_one_or_none()

        if not db_reservation:
            return None

        return ReservationRepoImpl._to_entity(db_reservation)

    async def _reload(self, reservation_id: int) -> Reservation:
        reservation = await self._fetch_one(
            self._select().where(ReservationModel.id == reservation_id)
        )
        if reservation is None:
            raise NotFoundError(f'Reservation not found with ID: {reservation_id}')
        return reservation

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        db_reservation = ReservationModel(
            user_id=reservation.user_id,
            book_external_id=reservation.book_external_id,
            rental_days=reservation.rental_days,
            start_date=reservation.start_date,
            expected_return_date=reservation.expected_return_date,
            actual_return_date=reservation.actual_return_date,
            daily_rate=reservation.daily_rate,
            total_fee=reservation.total_fee,
            late_fee=reservation.late_fee,
            status=reservation.status.value,
            created_at=reservation.created_at,
        )
        self.session.add(db_reservation)
        await self.session.flush()

        return await self._reload(db_reservation.id)

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        if reservation.id is None:
            raise ValueError('Reservation must have an ID before it can be updated')

        db_reservation = await self.session.get(ReservationModel, reservation.id)
        if not db_reservation:
            raise NotFoundError(f'Reservation not found with ID: {reservation.id}')

        db_reservation.actual_return_date = reservation.actual_return_date
        db_reservation.late_fee = reservation.late_fee
        db_reservation.status = reservation.status.value
        await self.session.flush()

        return await self._reload(reservation.id)

    @Logger.io
    async def get_by_id(self, *, reservation_id: int) -> Reservation | None:
        return await self._fetch_one(self._select().where(ReservationModel.id == reservation_id))

    @Logger.io
    async def get_by_id_for_update(self, *, reservation_id: int) -> Reservation | None:
        # Row lock on PostgreSQL; SQLite ignores FOR UPDATE
        return await self._fetch_one(
            self._select()
            .where(ReservationModel.id == reservation_id)
            .with_for_update(of=ReservationModel)
        )

    @Logger.io
    async def list_all(self) -> List[Reservation]:
        return await self._fetch_all(self._select())

    @Logger.io
    async def list_by_user_id(self, *, user_id: int) -> List[Reservation]:
        return await self._fetch_all(self._select().where(ReservationModel.user_id == user_id))

    @Logger.io
    async def list_by_status(self, *, status: ReservationStatus) -> List[Reservation]:
        return await self._fetch_all(
            self._select().where(ReservationModel.status == status.value)
        )

    @Logger.io
    async def list_overdue(self, *, today: date) -> List[Reservation]:
        return await self._fetch_all(
            self._select()
            .where(ReservationModel.expected_return_date < today)
            .where(ReservationModel.status == ReservationStatus.ACTIVE.value)
        )
