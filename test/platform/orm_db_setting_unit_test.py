import pytest

from src.platform.database.orm_db_setting import Database


@pytest.mark.unit
class TestDatabaseSafeUrl:
    @pytest.mark.asyncio
    async def test_password_masked(self):
        """Engine creation does not connect, so no server is needed"""
        database = Database(db_url='postgresql+asyncpg://library:s3cr3t-pw@db:5432/library_rental')

        try:
            url = database.safe_url
        finally:
            await database.engine.dispose()

        assert 's3cr3t-pw' not in url
        assert url == 'postgresql+asyncpg://library:***@db:5432/library_rental'
