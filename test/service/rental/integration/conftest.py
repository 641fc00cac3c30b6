"""
Integration fixtures: one throwaway SQLite database per test

- database: engine + tables on tmp_path (aiosqlite driver)
- seeded: one user and three books (10 / 1 / 0 copies available)
- client: httpx client against the real app, DI container pointed at `database`
"""

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from decimal import Decimal

from dependency_injector import providers
import httpx
import pytest
import pytest_asyncio

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.rental.domain.entity.book_entity import Book
from src.service.rental.domain.entity.user_entity import User


LOTR = 258027
DUNE = 8101356
CLEAN_CODE = 3296


@dataclass
class SeededData:
    user_id: int
    other_user_id: int


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    db = Database(db_url=f'sqlite+aiosqlite:///{tmp_path / "rental.db"}')
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session_maker)


@pytest_asyncio.fixture
async def seeded(uow_factory) -> SeededData:
    async with uow_factory() as uow:
        user = await uow.users.create(user=User(name='Juan Pérez', email='juan@example.com'))
        other = await uow.users.create(user=User(name='Ana García', email='ana@example.com'))
        for book in (
            Book(
                external_id=LOTR,
                title='The Lord of the Rings',
                author='J.R.R. Tolkien',
                price=Decimal('15.99'),
                stock_quantity=10,
                available_quantity=10,
            ),
            Book(
                external_id=DUNE,
                title='Dune',
                author='Frank Herbert',
                price=Decimal('12.50'),
                stock_quantity=1,
                available_quantity=1,
            ),
            Book(
                external_id=CLEAN_CODE,
                title='Clean Code',
                author='Robert C. Martin',
                price=Decimal('20.00'),
                stock_quantity=1,
                available_quantity=0,
            ),
        ):
            await uow.books.create(book=book)
        await uow.commit()

    return SeededData(user_id=user.id, other_user_id=other.id)  # type: ignore[arg-type]


@pytest_asyncio.fixture
async def client(database: Database, seeded: SeededData) -> AsyncIterator[httpx.AsyncClient]:
    container.database.override(providers.Object(database))
    container.wire(modules=WIRE_MODULES)
    app = create_app(title_suffix=' (Test)')

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url='http://test'
    ) as http_client:
        yield http_client

    container.unwire()
    container.database.reset_override()
