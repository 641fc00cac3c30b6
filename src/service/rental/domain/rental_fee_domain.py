"""
Rental fee rules

All money is Decimal and rounded to cents with ROUND_HALF_UP:
- total fee: daily rate x rental days
- late fee: 15% of the book price per day late, linear in days

Fees are stored as NUMERIC(10, 2), so anything above MAX_FEE is rejected.
"""

from decimal import ROUND_HALF_UP, Decimal

from src.platform.exception.exceptions import DomainError


LATE_FEE_PERCENTAGE = Decimal('0.15')
CENT = Decimal('0.01')
ZERO_FEE = Decimal('0.00')
MAX_FEE = Decimal('99999999.99')


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Quantize to 2 decimal places, half-up. Floats go through str() to avoid binary noise."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _within_max_fee(fee: Decimal, *, label: str) -> Decimal:
    if fee > MAX_FEE:
        raise DomainError(f'{label} {fee} exceeds the maximum of {MAX_FEE}', 400)
    return fee


def calculate_total_fee(*, daily_rate: Decimal, rental_days: int) -> Decimal:
    return _within_max_fee(to_money(daily_rate * Decimal(rental_days)), label='Total fee')


def calculate_late_fee(*, book_price: Decimal, days_late: int) -> Decimal:
    if days_late <= 0:
        return ZERO_FEE
    daily_late_fee = book_price * LATE_FEE_PERCENTAGE
    return _within_max_fee(to_money(daily_late_fee * Decimal(days_late)), label='Late fee')
