from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.rental_fee_domain import (
    ZERO_FEE,
    calculate_late_fee,
    calculate_total_fee,
    to_money,
)


class ReservationStatus(StrEnum):
    ACTIVE = 'active'
    RETURNED = 'returned'
    OVERDUE = 'overdue'


def validate_positive_rental_days(instance, attribute, value):
    if value <= 0:
        raise DomainError('Rental days must be positive', 400)


@attrs.define
class Reservation:
    user_id: int = attrs.field(validator=attrs.validators.instance_of(int))
    book_external_id: int = attrs.field(validator=attrs.validators.instance_of(int))
    rental_days: int = attrs.field(
        validator=[attrs.validators.instance_of(int), validate_positive_rental_days]
    )
    start_date: date
    expected_return_date: date
    daily_rate: Decimal = attrs.field(converter=to_money)
    total_fee: Decimal = attrs.field(converter=to_money)
    status: ReservationStatus = attrs.field(
        default=ReservationStatus.ACTIVE, validator=attrs.validators.instance_of(ReservationStatus)
    )
    actual_return_date: Optional[date] = None
    late_fee: Optional[Decimal] = attrs.field(
        default=None, converter=attrs.converters.optional(to_money)
    )
    created_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None
    # Display names resolved by the store on read
    user_name: Optional[str] = None
    book_title: Optional[str] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        book_external_id: int,
        daily_rate: Decimal,
        rental_days: int,
        start_date: date,
    ) -> 'Reservation':
        if rental_days <= 0:
            raise DomainError('Rental days must be positive', 400)

        try:
            expected_return_date = start_date + timedelta(days=rental_days)
        except OverflowError:
            raise DomainError(
                f'Rental of {rental_days} days from {start_date} ends past {date.max}', 400
            ) from None

        return cls(
            user_id=user_id,
            book_external_id=book_external_id,
            rental_days=rental_days,
            start_date=start_date,
            expected_return_date=expected_return_date,
            daily_rate=daily_rate,
            total_fee=calculate_total_fee(daily_rate=daily_rate, rental_days=rental_days),
            status=ReservationStatus.ACTIVE,
            created_at=datetime.now(timezone.utc),
        )

    def days_late(self, return_date: date) -> int:
        return max((return_date - self.expected_return_date).days, 0)

    @Logger.io
    def validate_can_be_returned(self) -> None:
        """
        Raises:
            InvalidStateError: When the reservation was already returned
        """
        if self.status != ReservationStatus.ACTIVE:
            raise InvalidStateError(
                f'Reservation {self.id} was already returned (status: {self.status})'
            )

    @Logger.io
    def mark_as_returned(self, *, return_date: date, book_price: Decimal) -> 'Reservation':
        """
        Close the reservation. ACTIVE is the only status that can be returned,
        and the result is final: OVERDUE when late (with a late fee), RETURNED otherwise.
        """
        self.validate_can_be_returned()

        days_late = self.days_late(return_date)
        if days_late > 0:
            return attrs.evolve(
                self,
                actual_return_date=return_date,
                late_fee=calculate_late_fee(book_price=book_price, days_late=days_late),
                status=ReservationStatus.OVERDUE,
            )

        return attrs.evolve(
            self,
            actual_return_date=return_date,
            late_fee=ZERO_FEE,
            status=ReservationStatus.RETURNED,
        )
