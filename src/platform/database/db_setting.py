"""
Database configuration re-exports

Import Base and Database from here in models and wiring code.
"""

from src.platform.database.orm_db_setting import Base, Database

__all__ = [
    'Base',
    'Database',
]
