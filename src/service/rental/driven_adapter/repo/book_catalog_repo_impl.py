from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, NotFoundError, UnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_book_catalog_repo import IBookCatalogRepo
from src.service.rental.domain.entity.book_entity import Book
from src.service.rental.driven_adapter.model.book_model import BookModel


class BookCatalogRepoImpl(IBookCatalogRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_book: BookModel) -> Book:
        return Book(
            external_id=db_book.external_id,
            title=db_book.title,
            author=db_book.author,
            price=db_book.price,
            stock_quantity=db_book.stock_quantity,
            available_quantity=db_book.available_quantity,
            id=db_book.id,
        )

    async def _get_for_update(self, external_id: int) -> BookModel:
        # Row lock on PostgreSQL; SQLite ignores FOR UPDATE
        result = await self.session.execute(
            select(BookModel).where(BookModel.external_id == external_id).with_for_update()
        )
        db_book = result.scalar_one_or_none()
        if not db_book:
            raise NotFoundError(f'Book not found with external ID: {external_id}')
        return db_book

    @Logger.io
    async def get_by_external_id(self, *, external_id: int) -> Book | None:
        result = await self.session.execute(
            select(BookModel).where(BookModel.external_id == external_id)
        )
        db_book = result.scalar_one_or_none()

        if not db_book:
            return None

        return BookCatalogRepoImpl._to_entity(db_book)

    @Logger.io
    async def create(self, *, book: Book) -> Book:
        db_book = BookModel(
            external_id=book.external_id,
            title=book.title,
            author=book.author,
            price=book.price,
            stock_quantity=book.stock_quantity,
            available_quantity=book.available_quantity,
        )
        self.session.add(db_book)
        await self.session.flush()
        await self.session.refresh(db_book)

        return BookCatalogRepoImpl._to_entity(db_book)

    @Logger.io
    async def decrease_available_quantity(self, *, external_id: int) -> Book:
        db_book = await self._get_for_update(external_id)
        if db_book.available_quantity <= 0:
            raise UnavailableError(f'No copies of book {external_id} available to reserve')

        db_book.available_quantity -= 1
        await self.session.flush()

        return BookCatalogRepoImpl._to_entity(db_book)

    @Logger.io
    async def increase_available_quantity(self, *, external_id: int) -> Book:
        db_book = await self._get_for_update(external_id)
        if db_book.available_quantity >= db_book.stock_quantity:
            raise ConflictError(f'All copies of book {external_id} are already available')

        db_book.available_quantity += 1
        await self.session.flush()

        return BookCatalogRepoImpl._to_entity(db_book)
