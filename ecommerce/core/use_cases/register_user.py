# ecommerce/core/use_cases/register_user.py
import structlog

from ecommerce.core.domain.exceptions import DuplicateUserError, ValidationError
from ecommerce.core.domain.models import EMAIL_PATTERN, AuthResult, User, normalize_email
from ecommerce.core.ports.clock import IClock
from ecommerce.core.ports.password_hasher import IPasswordHasher
from ecommerce.core.ports.token_issuer import ITokenIssuer
from ecommerce.core.ports.user_repository import IUserRepository
from ecommerce.shared.telemetry import get_tracer

PASSWORD_MAX_BYTES = 72

logger = structlog.get_logger()
tracer = get_tracer(__name__)

class RegisterUser:
    """
    Use Case: Creates a customer account and signs them in.

    Responsibilities:
    1. Validates names, email shape and password length.
    2. Rejects emails that are already registered.
    3. Stores the user with a hashed password.
    4. Issues an access token for the new account.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: IPasswordHasher,
        tokens: ITokenIssuer,
        clock: IClock,
        password_min_length: int = 8,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.clock = clock
        self.password_min_length = password_min_length

    async def execute(self, first_name: str, last_name: str, email: str, password: str) -> AuthResult:
        """
        Registers a new user.

        Returns:
            AuthResult with the new id, names, email and a fresh token.

        Raises:
            ValidationError: If a field is blank or malformed.
            DuplicateUserError: If the email is already registered.
        """
        with tracer.start_as_current_span("use_case.register_user") as span:
            email = normalize_email(email)
            self._validate(first_name, last_name, email, password)

            if await self.users.get_by_email(email) is not None:
                logger.info("registration_rejected", reason="duplicate_email")
                raise DuplicateUserError(email)

            user = User(
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=email,
                password_hash=self.hasher.hash(password),
                created_at=self.clock.now(),
            )
            # The store repeats the uniqueness check atomically and raises
            # DuplicateUserError if a concurrent registration won.
            user = await self.users.add(user)

            token = self.tokens.issue(user.id, user.first_name, user.last_name)

            span.set_attribute("app.user_id", str(user.id))
            logger.info("user_registered", user_id=str(user.id))

            return AuthResult(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                token=token,
            )

    def _validate(self, first_name: str, last_name: str, email: str, password: str) -> None:
        if not first_name or not first_name.strip():
            raise ValidationError("first name is required")
        if not last_name or not last_name.strip():
            raise ValidationError("last name is required")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("email address is not valid")
        if not password or len(password) < self.password_min_length:
            raise ValidationError(
                f"password must be at least {self.password_min_length} characters long"
            )
        # bcrypt only looks at the first 72 bytes of input.
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValidationError(f"password must be at most {PASSWORD_MAX_BYTES} bytes long")
