from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import raise_for_error
from src.api.routes.auth import PHONE_PATTERN, PINCODE_PATTERN
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base_dto import CamelModel
from src.app.use_cases.profile import (
    GetProfileUseCase,
    ProfileResponse,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_profile(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User Profile

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
        - 404 Not Found: Account no longer exists
    """
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error, {ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND})

    return result.value


class UpdateProfileRequest(CamelModel):
    """
    Profile update payload. Name and email cannot be changed here.
    """

    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    door_number: Optional[str] = Field(None, max_length=50)
    building_name: Optional[str] = Field(None, max_length=255)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, pattern=PINCODE_PATTERN)


@router.put("", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Profile

    Changes phone and default address; omitted fields keep their value.

    Raises:
        - 400 Bad Request: Invalid phone or pincode
        - 401 Unauthorized: Missing, invalid or expired token
        - 404 Not Found: Account no longer exists
    """
    command = UpdateProfileCommand(**request.model_dump())

    use_case = UpdateProfileUseCase(uow)
    result = await use_case.execute(user_id, command)

    if result.is_err():
        raise_for_error(result.error, {ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND})

    return result.value
