#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create tables if missing
2. Create demo users
3. Create demo books with stock

Usage:
    python -m script.seed_data

Run once against a fresh database: user emails are unique.
"""

import asyncio
from dataclasses import dataclass
from decimal import Decimal

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.entity.book_entity import Book
from src.service.rental.domain.entity.user_entity import User


@dataclass
class BookConfig:
    """Book seed configuration"""

    external_id: int
    title: str
    author: str
    price: Decimal
    stock: int


TEST_USERS = [
    User(name='Juan Pérez', email='juan@example.com'),
    User(name='Ana García', email='ana@example.com'),
]

TEST_BOOKS = [
    BookConfig(258027, 'The Lord of the Rings', 'J.R.R. Tolkien', Decimal('15.99'), 10),
    BookConfig(8101356, 'Dune', 'Frank Herbert', Decimal('12.50'), 3),
    BookConfig(3296, 'Clean Code', 'Robert C. Martin', Decimal('20.00'), 1),
]


async def seed() -> None:
    database = container.database()
    await database.create_tables()

    async with container.unit_of_work() as uow:
        for user in TEST_USERS:
            created = await uow.users.create(user=user)
            Logger.base.info(f'👤 [SEED] user id={created.id} name={created.name}')

        for config in TEST_BOOKS:
            existing = await uow.books.get_by_external_id(external_id=config.external_id)
            if existing:
                Logger.base.info(f'📘 [SEED] book {config.external_id} already exists, skipping')
                continue
            book = await uow.books.create(
                book=Book(
                    external_id=config.external_id,
                    title=config.title,
                    author=config.author,
                    price=config.price,
                    stock_quantity=config.stock,
                    available_quantity=config.stock,
                )
            )
            Logger.base.info(f'📘 [SEED] book {book.external_id} "{book.title}" x{book.stock_quantity}')

        await uow.commit()

    await database.dispose()


if __name__ == '__main__':
    asyncio.run(seed())
