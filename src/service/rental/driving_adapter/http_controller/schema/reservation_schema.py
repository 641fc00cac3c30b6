from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from src.service.rental.domain.entity.reservation_entity import Reservation


# Money travels as a 2-place decimal string ("111.93"), never as float
Money = Annotated[Decimal, PlainSerializer(lambda v: f'{v:.2f}', return_type=str)]


class ReservationCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'user_id': 1,
                'book_external_id': 258027,
                'rental_days': 7,
                'start_date': '2025-01-10',
            }
        }
    )

    user_id: int
    book_external_id: int
    rental_days: int = Field(gt=0)
    start_date: date


class ReturnBookRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'example': {'return_date': '2025-01-20'}})

    return_date: date


class ReservationResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': 1,
                'user_id': 1,
                'user_name': 'Juan Pérez',
                'book_external_id': 258027,
                'book_title': 'The Lord of the Rings',
                'rental_days': 7,
                'start_date': '2025-01-10',
                'expected_return_date': '2025-01-17',
                'actual_return_date': '2025-01-20',
                'daily_rate': '15.99',
                'total_fee': '111.93',
                'late_fee': '7.20',
                'status': 'overdue',
                'created_at': '2025-01-10T10:30:00Z',
            }
        }
    )

    id: int
    user_id: int
    user_name: Optional[str] = None
    book_external_id: int
    book_title: Optional[str] = None
    rental_days: int
    start_date: date
    expected_return_date: date
    actual_return_date: Optional[date] = None
    daily_rate: Money
    total_fee: Money
    late_fee: Optional[Money] = None
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        if reservation.id is None:
            raise ValueError('Reservation ID should not be None after persistence.')

        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            user_name=reservation.user_name,
            book_external_id=reservation.book_external_id,
            book_title=reservation.book_title,
            rental_days=reservation.rental_days,
            start_date=reservation.start_date,
            expected_return_date=reservation.expected_return_date,
            actual_return_date=reservation.actual_return_date,
            daily_rate=reservation.daily_rate,
            total_fee=reservation.total_fee,
            late_fee=reservation.late_fee,
            status=reservation.status.value,
            created_at=reservation.created_at,
        )
