# ecommerce/core/use_cases/login_user.py
import structlog

from ecommerce.core.domain.exceptions import InvalidCredentialsError, UserNotFoundError
from ecommerce.core.domain.models import AuthResult, normalize_email
from ecommerce.core.ports.password_hasher import IPasswordHasher
from ecommerce.core.ports.token_issuer import ITokenIssuer
from ecommerce.core.ports.user_repository import IUserRepository
from ecommerce.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

class LoginUser:
    """
    Use Case: Verifies an email/password pair and issues a token.
    """

    def __init__(self, users: IUserRepository, hasher: IPasswordHasher, tokens: ITokenIssuer):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, email: str, password: str) -> AuthResult:
        """
        Raises:
            UserNotFoundError: If no user has this email.
            InvalidCredentialsError: If the password does not match or the
                account is disabled.
        """
        with tracer.start_as_current_span("use_case.login_user"):
            email = normalize_email(email)

            user = await self.users.get_by_email(email)
            if user is None:
                logger.info("login_failed", reason="unknown_email")
                raise UserNotFoundError(email)

            if not self.hasher.verify(password or "", user.password_hash):
                logger.info("login_failed", reason="bad_password", user_id=str(user.id))
                raise InvalidCredentialsError()

            if not user.is_active:
                logger.info("login_failed", reason="inactive", user_id=str(user.id))
                raise InvalidCredentialsError("Account is disabled.")

            token = self.tokens.issue(user.id, user.first_name, user.last_name)
            logger.info("user_logged_in", user_id=str(user.id))

            return AuthResult(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                token=token,
            )
