import logging

from libs.result import Error, Result, Return
from sqlalchemy.exc import IntegrityError

from src.api.utils.jwt import SigningContext, issue_session_token
from src.app.services.credentials import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, normalize_email
from src.domain.errors import ErrorCode
from .password_policy import validate_password_strength
from .register_dto import RegisterCommand, RegisterResponse, UserInfo

logger = logging.getLogger(__name__)


def _duplicate_email() -> Result:
    return Return.err(Error(ErrorCode.DUPLICATE_RESOURCE, "Email already registered"))


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse] (structured response)

    Business Logic:
    1. Enforce password strength policy
    2. Check if email already exists (case-insensitive)
    3. Hash password with bcrypt cost factor 12 (plaintext discarded)
    4. Create User with no pending reset
    5. Commit transaction; a concurrent registration of the same email
       surfaces as a unique constraint violation and is reported the same way
    6. Issue a session token for the new user
    """

    def __init__(self, uow: UnitOfWork, signing_context: SigningContext):
        self.uow = uow
        self.signing_context = signing_context

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated profile fields and password

        Returns:
            Result[RegisterResponse] with session token and user data,
            or Error(WEAK_PASSWORD | DUPLICATE_RESOURCE)
        """
        strength = validate_password_strength(command.password)
        if strength.is_err():
            return Return.err(strength.error)

        email = normalize_email(command.email)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return _duplicate_email()

            user = User(
                full_name=command.full_name,
                email=email,
                phone=command.phone,
                password_hash=hash_password(command.password),
                door_number=command.door_number,
                building_name=command.building_name,
                street=command.street,
                city=command.city,
                state=command.state,
                pincode=command.pincode,
            )
            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                logger.info("Registration lost a race for an existing email")
                return _duplicate_email()

            logger.info("Registered user %s", user.id)

            token = issue_session_token(self.signing_context, user.id)

            return Return.ok(RegisterResponse(token=token, user=UserInfo.from_entity(user)))
