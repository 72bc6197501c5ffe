from uuid import UUID

import httpx
from fastapi import Depends, Request, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from auth_service.adapter.services.notification_producer import RedisNotificationProducer
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.adapter.services.user_profile_client import HttpUserProfileClient
from auth_service.api.error import ClientError
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.session_token_service import (
    INVALID_TOKEN_ERROR,
    SessionTokenService,
    TokenSettings,
)
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.domain.entities import TokenKind

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_settings(request: Request) -> TokenSettings:
    return request.app.state.token_settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_redis(request: Request) -> Redis:
    return request.app.state.redis


def get_user_profile_client(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> IUserProfileClient:
    return HttpUserProfileClient(client)


def get_notification_producer(
    redis: Redis = Depends(get_redis),
) -> INotificationProducer:
    return RedisNotificationProducer(redis, ApplicationConfig.NOTIFICATION_QUEUE)


async def get_current_user_id(
    request: Request,
    token_settings: TokenSettings = Depends(get_token_settings),
) -> UUID:
    """
    Dependency to extract and verify the access token cookie.

    Returns:
        Id of the signed-in user

    Raises:
        ClientError: 401 INVALID_TOKEN if the cookie is missing, invalid or expired
    """
    tokens = SessionTokenService(token_settings)
    access_token = tokens.extract_access_token(request)
    if not access_token:
        raise ClientError(INVALID_TOKEN_ERROR, status_code=status.HTTP_401_UNAUTHORIZED)

    user_id = tokens.extract_user_id(access_token, TokenKind.access)
    if user_id.is_err():
        raise ClientError(user_id.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return user_id.value
