from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import raise_for_error
from src.api.routes.auth import PHONE_PATTERN, PINCODE_PATTERN
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base_dto import CamelModel
from src.app.use_cases.bookings import (
    BookingListResponse,
    BookingResponse,
    CreateBookingCommand,
    CreateBookingUseCase,
    GetBookingUseCase,
    ListBookingsUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import VehicleType
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/bookings", tags=["Bookings"])


class CreateBookingRequest(CamelModel):
    """
    Create booking HTTP request payload (field names as the booking form sends them)
    """

    sender_name: str = Field(..., min_length=1, max_length=255)
    sender_phone: str = Field(..., pattern=PHONE_PATTERN)
    pickup_door_number: str = Field(..., min_length=1, max_length=50)
    pickup_building_name: Optional[str] = Field(None, max_length=255)
    pickup_street: str = Field(..., min_length=1, max_length=255)
    pickup_city: str = Field(..., min_length=1, max_length=100)
    pickup_state: str = Field(..., min_length=1, max_length=100)
    pickup_pincode: str = Field(..., pattern=PINCODE_PATTERN)

    receiver_name: str = Field(..., min_length=1, max_length=255)
    receiver_phone: str = Field(..., pattern=PHONE_PATTERN)
    delivery_door_number: str = Field(..., min_length=1, max_length=50)
    delivery_building_name: Optional[str] = Field(None, max_length=255)
    delivery_street: str = Field(..., min_length=1, max_length=255)
    delivery_city: str = Field(..., min_length=1, max_length=100)
    delivery_state: str = Field(..., min_length=1, max_length=100)
    delivery_pincode: str = Field(..., pattern=PINCODE_PATTERN)

    description: Optional[str] = Field(None, max_length=1000)
    package_type: str = Field(..., min_length=1, max_length=100)
    vehicle_type: VehicleType
    service_type: Optional[str] = Field(None, max_length=100)
    pickup_date: datetime


@router.post("", status_code=status.HTTP_200_OK, response_model=BookingResponse)
async def create_booking(
    request: CreateBookingRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Booking

    Raises:
        - 400 Bad Request: Missing or invalid fields
        - 401 Unauthorized: Missing, invalid or expired token
    """
    command = CreateBookingCommand(
        **request.model_dump(exclude={"vehicle_type"}),
        vehicle_type=request.vehicle_type.value,
    )

    use_case = CreateBookingUseCase(uow)
    result = await use_case.execute(user_id, command)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=BookingListResponse)
async def list_bookings(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Bookings (newest first)

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
    """
    use_case = ListBookingsUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


@router.get("/{booking_id}", status_code=status.HTTP_200_OK, response_model=BookingResponse)
async def get_booking(
    booking_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Booking

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
        - 404 Not Found: No such booking for this user
    """
    use_case = GetBookingUseCase(uow)
    result = await use_case.execute(user_id, booking_id)

    if result.is_err():
        raise_for_error(result.error, {ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND})

    return result.value
