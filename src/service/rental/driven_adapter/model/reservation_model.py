from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.rental.driven_adapter.model.book_model import BookModel
    from src.service.rental.driven_adapter.model.user_model import UserModel


class ReservationModel(Base):
    __tablename__ = 'reservations'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    book_external_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('books.external_id'), nullable=False, index=True
    )
    rental_days: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_return_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    actual_return_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    daily_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    late_fee: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default='active', nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Loaded explicitly with selectinload; lazy loading is not available on AsyncSession
    user: Mapped['UserModel'] = relationship(lazy='raise')
    book: Mapped['BookModel'] = relationship(lazy='raise')
