import pytest

from src.platform.config.core_setting import Settings


@pytest.mark.unit
class TestSettings:
    def test_database_url_built_from_postgres_settings(self, monkeypatch):
        monkeypatch.delenv('DATABASE_URL', raising=False)

        settings = Settings(
            POSTGRES_SERVER='db',
            POSTGRES_USER='rental',
            POSTGRES_PASSWORD='secret',
            POSTGRES_DB='library',
            POSTGRES_PORT=5433,
            DATABASE_URL=None,
        )

        assert settings.DATABASE_URL_ASYNC == 'postgresql+asyncpg://rental:secret@db:5433/library'

    def test_explicit_database_url_wins(self):
        settings = Settings(DATABASE_URL='sqlite+aiosqlite:///./rental.db')

        assert settings.DATABASE_URL_ASYNC == 'sqlite+aiosqlite:///./rental.db'

    def test_password_is_not_leaked_in_repr(self):
        settings = Settings(POSTGRES_PASSWORD='secret')

        assert 'secret' not in repr(settings)

    @pytest.mark.parametrize(
        'raw,expected',
        [
            ('http://a.test, http://b.test', ['http://a.test', 'http://b.test']),
            (['http://a.test'], ['http://a.test']),
        ],
    )
    def test_cors_origins_accept_comma_separated(self, raw, expected):
        assert Settings(BACKEND_CORS_ORIGINS=raw).BACKEND_CORS_ORIGINS == expected
