from passlib.context import CryptContext
from core.exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError
from schemas.auth_schemas import CreateUserRequest, User
from services.collection_client import CollectionClient, USERS
from utils.identifiers import generate_record_id, utc_now
from utils.logger import get_logger

logger = get_logger(__name__)

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class AuthService:

    @staticmethod
    def get_password_hash(password: str) -> str:
        # Bcrypt has a 72-byte limit, truncate if necessary
        return bcrypt_context.hash(password[:72])

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return bcrypt_context.verify(plain_password[:72], hashed_password)

    @staticmethod
    async def find_user_record(client: CollectionClient, **where) -> dict | None:
        records = await client.list(USERS, where=where, limit=1)
        return records[0] if records else None

    @staticmethod
    async def create_user(request: CreateUserRequest, client: CollectionClient) -> User:
        """
        Registers a shopper account.

        Raises:
            EmailAlreadyRegisteredError: if the email is taken
        """
        email = request.email.lower().strip()

        if await AuthService.find_user_record(client, email=email):
            logger.warning(
                "Registration attempt with existing email",
                extra={"email": email}
            )
            raise EmailAlreadyRegisteredError()

        record = await client.create(USERS, {
            "id": generate_record_id("user"),
            "email": email,
            "display_name": request.display_name,
            "hashed_password": AuthService.get_password_hash(request.password),
            "created_at": utc_now(),
        })

        return User.model_validate(record)

    @staticmethod
    async def authenticate_user(email: str, password: str, client: CollectionClient) -> User:
        record = await AuthService.find_user_record(client, email=email.lower().strip())

        if not record:
            logger.warning(
                "Login failed - user not found",
                extra={"email": email}
            )
            raise InvalidCredentialsError()

        if not AuthService.verify_password(password, record["hashed_password"]):
            logger.warning(
                "Login failed - invalid password",
                extra={"user_id": record["id"], "email": email}
            )
            raise InvalidCredentialsError()

        logger.debug(
            "User authenticated successfully",
            extra={"user_id": record["id"], "email": email}
        )

        return User.model_validate(record)

    @staticmethod
    async def get_user_by_id(client: CollectionClient, user_id: str) -> User | None:
        record = await AuthService.find_user_record(client, id=user_id)
        return User.model_validate(record) if record else None
