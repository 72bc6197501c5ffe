from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from auth_service.api.error import raise_for_error
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.password_service import check_password_length
from auth_service.app.services.session_token_service import TokenSettings
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.auth import (
    CreateCredentialsCommand,
    CreateCredentialsUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokensUseCase,
)
from auth_service.depends import (
    get_notification_producer,
    get_token_settings,
    get_unit_of_work,
    get_user_profile_client,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class CredentialsRequest(BaseModel):
    """
    Create credentials HTTP request payload

    Sent by the user service right after a user registers.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId", description="Id assigned by the user service")
    first_name: str = Field(..., alias="firstName", min_length=1, description="First name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="Initial password")

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_length(value)


@router.post("/credentials", status_code=status.HTTP_204_NO_CONTENT)
async def create_credentials(
    request: CredentialsRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifications: INotificationProducer = Depends(get_notification_producer),
):
    """
    Create Credentials

    Stores the first password of a user and mails a verification passcode.

    Raises:
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Email could not be enqueued
    """
    command = CreateCredentialsCommand(
        user_id=request.user_id,
        first_name=request.first_name,
        email=request.email,
        password=request.password,
    )
    result = await CreateCredentialsUseCase(uow, notifications).execute(command)

    if result.is_err():
        raise_for_error(result.error)


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_settings: TokenSettings = Depends(get_token_settings),
    user_profile: IUserProfileClient = Depends(get_user_profile_client),
):
    """
    User Login

    Authenticates the user and sets the access and refresh token cookies.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account suspended, locked or inactive
        - 500 Internal Server Error: User service unavailable
    """
    use_case = LoginUseCase(uow, token_settings, user_profile)
    result = await use_case.execute(request.email, request.password, response)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/token", status_code=status.HTTP_204_NO_CONTENT)
async def refresh_tokens(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_settings: TokenSettings = Depends(get_token_settings),
    user_profile: IUserProfileClient = Depends(get_user_profile_client),
):
    """
    Refresh Tokens

    Rotates the refresh token cookie and issues a new access token cookie.

    Raises:
        - 401 Unauthorized: Invalid, expired or already used refresh token
        - 403 Forbidden: No refresh cookie, or account suspended
        - 500 Internal Server Error: User service unavailable
    """
    use_case = RefreshTokensUseCase(uow, token_settings, user_profile)
    result = await use_case.execute(request, response)

    if result.is_err():
        raise_for_error(result.error)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_settings: TokenSettings = Depends(get_token_settings),
):
    """
    Logout

    Deletes the current refresh token and clears both auth cookies.
    Always succeeds.
    """
    await LogoutUseCase(uow, token_settings).execute(request, response)
