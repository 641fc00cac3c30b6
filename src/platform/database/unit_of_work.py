"""
Unit of Work Pattern - one database session and its repositories per operation

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories receive the shared session from the UoW
- Use cases coordinate several repositories through the UoW, so a reservation
  write and the matching stock adjustment commit together or not at all
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.rental.app.interface.i_book_catalog_repo import IBookCatalogRepo
    from src.service.rental.app.interface.i_reservation_repo import IReservationRepo
    from src.service.rental.app.interface.i_user_directory_repo import IUserDirectoryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the rental service

    Usage:
        async with uow:
            reservation = await uow.reservations.create(reservation=...)
            await uow.books.decrease_available_quantity(external_id=...)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    reservations: IReservationRepo
    books: IBookCatalogRepo
    users: IUserDirectoryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        from src.service.rental.driven_adapter.repo.book_catalog_repo_impl import (
            BookCatalogRepoImpl,
        )
        from src.service.rental.driven_adapter.repo.reservation_repo_impl import (
            ReservationRepoImpl,
        )
        from src.service.rental.driven_adapter.repo.user_directory_repo_impl import (
            UserDirectoryRepoImpl,
        )

        self.session = self.session_factory()
        self.reservations = ReservationRepoImpl(self.session)
        self.books = BookCatalogRepoImpl(self.session)
        self.users = UserDirectoryRepoImpl(self.session)
        return await super().__aenter__()

    async def __aexit__(self, *args):
        await super().__aexit__(*args)
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def _commit(self):
        if self.session is None:
            raise RuntimeError('Unit of work used outside of "async with"')
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
