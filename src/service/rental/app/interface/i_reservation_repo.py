from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.rental.domain.entity.reservation_entity import Reservation, ReservationStatus


class IReservationRepo(ABC):
    """Repository interface for reservation records"""

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        """Persist a new reservation and return it with its assigned id"""
        pass

    @abstractmethod
    async def update(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def get_by_id(self, *, reservation_id: int) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def get_by_id_for_update(self, *, reservation_id: int) -> Optional[Reservation]:
        """Same as get_by_id, but locks the row until the transaction ends"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_user_id(self, *, user_id: int) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_status(self, *, status: ReservationStatus) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_overdue(self, *, today: date) -> List[Reservation]:
        """ACTIVE reservations whose expected return date is before `today`"""
        pass
