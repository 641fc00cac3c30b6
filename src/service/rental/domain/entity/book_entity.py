from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.rental.domain.rental_fee_domain import to_money


def validate_non_negative(instance, attribute, value):
    if value < 0:
        raise DomainError(f'{attribute.name} must not be negative', 400)


@attrs.define
class Book:
    external_id: int = attrs.field(validator=attrs.validators.instance_of(int))
    title: str
    price: Decimal = attrs.field(converter=to_money, validator=validate_non_negative)
    stock_quantity: int = attrs.field(validator=validate_non_negative)
    available_quantity: int = attrs.field(validator=validate_non_negative)
    author: str = ''
    id: Optional[int] = None

    @property
    def is_available(self) -> bool:
        return self.available_quantity > 0
