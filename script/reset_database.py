#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate the rental tables

Features:
1. Drop all tables (users, books, reservations)
2. Recreate the latest schema

Notes:
- This script only resets database structure, does not seed test data
- To seed test data, run `python -m script.seed_data`
"""

import asyncio

from src.platform.config.di import container


async def main() -> None:
    print('🔄 Starting database reset...')
    database = container.database()
    print(f'Database URL: {database.safe_url}')
    print('=' * 50)

    try:
        print('🗑️ Dropping tables...')
        await database.drop_tables()

        print('🏗️ Creating tables...')
        await database.create_tables()
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e
    finally:
        await database.dispose()

    print('=' * 50)
    print('✅ Database reset completed!')
    print('💡 To seed test data, run: python -m script.seed_data')


if __name__ == '__main__':
    asyncio.run(main())
