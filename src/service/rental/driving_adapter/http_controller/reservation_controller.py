from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.rental.app.command.create_reservation_use_case import CreateReservationUseCase
from src.service.rental.app.command.return_book_use_case import ReturnBookUseCase
from src.service.rental.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.rental.app.query.list_reservations_use_case import ListReservationsUseCase
from src.service.rental.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationCreateRequest,
    ReservationResponse,
    ReturnBookRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.create_reservation(
        user_id=request.user_id,
        book_external_id=request.book_external_id,
        rental_days=request.rental_days,
        start_date=request.start_date,
    )
    return ReservationResponse.from_entity(reservation)


@router.post('/{reservation_id}/return')
@Logger.io
async def return_book(
    reservation_id: int,
    request: ReturnBookRequest,
    use_case: ReturnBookUseCase = Depends(ReturnBookUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.return_book(
        reservation_id=reservation_id, return_date=request.return_date
    )
    return ReservationResponse.from_entity(reservation)


@router.get('')
@Logger.io
async def list_reservations(
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_all_reservations()
    return [ReservationResponse.from_entity(r) for r in reservations]


# Static paths are registered before /{reservation_id} so they are not captured by it


@router.get('/active')
@Logger.io
async def list_active_reservations(
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_active_reservations()
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get('/overdue')
@Logger.io
async def list_overdue_reservations(
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_overdue_reservations()
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get('/user/{user_id}')
@Logger.io
async def list_user_reservations(
    user_id: int,
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_user_reservations(user_id)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get('/{reservation_id}')
@Logger.io
async def get_reservation(
    reservation_id: int,
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.get_reservation(reservation_id)
    return ReservationResponse.from_entity(reservation)
