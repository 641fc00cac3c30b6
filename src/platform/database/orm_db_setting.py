"""
SQLAlchemy async engine and session management

Database owns one AsyncEngine and its session maker. It is created once by the
DI container (see src.platform.config.di) and handed to the unit of work, so
every request shares the engine's connection pool.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def _engine_options(db_url: str) -> dict:
    # SQLite drivers do not take pool sizing arguments
    if db_url.startswith('sqlite'):
        return {}
    return {
        'pool_size': settings.DB_POOL_SIZE,
        'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
        'pool_timeout': settings.DB_POOL_TIMEOUT,
        'pool_recycle': settings.DB_POOL_RECYCLE,
        'pool_pre_ping': settings.DB_POOL_PRE_PING,
    }


class Database:
    def __init__(self, *, db_url: str) -> None:
        self.engine: AsyncEngine = create_async_engine(
            db_url, echo=False, future=True, **_engine_options(db_url)
        )
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked, for logs and console output"""
        return self.engine.url.render_as_string(hide_password=True)

    async def create_tables(self) -> None:
        """Create database tables if they don't exist"""
        # Models register themselves on Base.metadata at import time
        import src.service.rental.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️  [DB] Tables ensured')

    async def drop_tables(self) -> None:
        import src.service.rental.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        Logger.base.info('🔌 [DB] Engine disposed')
