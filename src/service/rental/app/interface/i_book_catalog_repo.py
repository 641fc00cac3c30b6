from abc import ABC, abstractmethod
from typing import Optional

from src.service.rental.domain.entity.book_entity import Book


class IBookCatalogRepo(ABC):
    """
    Repository interface for the book catalog.

    The catalog owns the stock counters; the rental service only moves
    available_quantity by one copy at a time.
    """

    @abstractmethod
    async def get_by_external_id(self, *, external_id: int) -> Optional[Book]:
        pass

    @abstractmethod
    async def create(self, *, book: Book) -> Book:
        pass

    @abstractmethod
    async def decrease_available_quantity(self, *, external_id: int) -> Book:
        """
        Raises:
            NotFoundError: Unknown external id
            UnavailableError: No copies left
        """
        pass

    @abstractmethod
    async def increase_available_quantity(self, *, external_id: int) -> Book:
        """
        Raises:
            NotFoundError: Unknown external id
            ConflictError: All copies are already on the shelf
        """
        pass
