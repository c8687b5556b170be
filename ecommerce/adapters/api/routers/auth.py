# ecommerce/adapters/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
import structlog

from ecommerce.core.use_cases.login_user import LoginUser
from ecommerce.core.use_cases.register_user import RegisterUser
from ecommerce.core.domain.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from ecommerce.adapters.api.dependencies import get_login_user_use_case, get_register_user_use_case
from ecommerce.adapters.api.schemas import AuthResponse, LoginRequest, RegisterRequest

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new customer",
)
async def register(
    payload: RegisterRequest,
    use_case: RegisterUser = Depends(get_register_user_use_case),
):
    """
    Creates an account and returns it together with an access token.

    **Errors:**
    * 400 when a field is blank or malformed.
    * 409 when the email is already registered.
    """
    try:
        result = await use_case.execute(
            payload.first_name,
            payload.last_name,
            payload.email,
            payload.password,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return AuthResponse.model_validate(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Exchange credentials for an access token",
)
async def login(
    payload: LoginRequest,
    use_case: LoginUser = Depends(get_login_user_use_case),
):
    try:
        result = await use_case.execute(payload.email, payload.password)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse.model_validate(result)
