"""
Get Profile Use Case

Loads the authenticated user's profile.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.register_dto import UserInfo
from src.domain.errors import ErrorCode
from .dtos import ProfileResponse


class GetProfileUseCase:
    """
    Use case for loading the current user's profile.

    Business Rules:
    - User id comes from a verified session token
    - The account may have been removed since the token was issued
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

            return Return.ok(ProfileResponse(user=UserInfo.from_entity(user)))
