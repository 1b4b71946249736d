from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.register_dto import UserInfo
from src.domain.errors import ErrorCode
from .dtos import ProfileResponse, UpdateProfileCommand

EDITABLE_FIELDS = (
    "phone",
    "door_number",
    "building_name",
    "street",
    "city",
    "state",
    "pincode",
)


class UpdateProfileUseCase:
    """
    Update the current user's contact details and default address.

    Only phone and address fields change; a field that is missing or
    empty keeps its stored value.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, command: UpdateProfileCommand
    ) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

            for field in EDITABLE_FIELDS:
                value = getattr(command, field)
                if value:
                    setattr(user, field, value)

            user = await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(ProfileResponse(user=UserInfo.from_entity(user)))
