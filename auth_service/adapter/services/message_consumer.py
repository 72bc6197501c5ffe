"""
Redis consumer for the inbound command queues.

Other services push JSON commands onto Redis lists; each message is
dispatched to its use case with a fresh database session. A message that
fails is logged with its traceback and dropped, and the loop moves on.
"""

import asyncio
import json
import logging
from typing import Awaitable, Callable, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.password_service import check_password_length
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.auth import CreateCredentialsCommand, CreateCredentialsUseCase
from auth_service.app.use_cases.data import DeleteUserAuthDataUseCase
from auth_service.app.use_cases.passcode import ResetPasscodeUseCase

logger = logging.getLogger(__name__)

# Seconds BLPOP waits before the loop checks for cancellation again
POLL_TIMEOUT = 5

# Back-off after the Redis connection fails
RECONNECT_DELAY = 5


class CreateCredentialsMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    first_name: str = Field(..., alias="firstName")
    email: str
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_length(value)


class UserIdMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")


def parse_user_id_message(raw: str) -> UUID:
    """Accept either {"userId": ...} or a bare (optionally quoted) user id"""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return UUID(raw.strip())
    if isinstance(payload, str):
        return UUID(payload)
    return UserIdMessage.model_validate(payload).user_id


class RedisMessageConsumer:
    """
    BLPOP loop over the create-credentials, reset-passcode and
    delete-user-data queues.
    """

    def __init__(
        self,
        redis: Redis,
        session_factory,
        user_profile: IUserProfileClient,
        notifications: INotificationProducer,
        create_credentials_queue: str,
        reset_passcode_queue: str,
        delete_user_data_queue: str,
    ):
        self.redis = redis
        self.session_factory = session_factory
        self.user_profile = user_profile
        self.notifications = notifications
        self.handlers: Dict[str, Callable[[str], Awaitable[Result]]] = {
            create_credentials_queue: self.handle_create_credentials,
            reset_passcode_queue: self.handle_reset_passcode,
            delete_user_data_queue: self.handle_delete_user_data,
        }

    async def run(self) -> None:
        queues = list(self.handlers)
        logger.info(f"Listening on queues {queues}")
        while True:
            try:
                item = await self.redis.blpop(queues, timeout=POLL_TIMEOUT)
            except RedisError as exc:
                logger.error(f"Failed to read inbound queues: {exc!r}")
                await asyncio.sleep(RECONNECT_DELAY)
                continue
            except Exception:
                logger.exception("Unexpected error while reading inbound queues")
                await asyncio.sleep(RECONNECT_DELAY)
                continue
            if item is None:
                continue

            queue, raw = item
            await self.dispatch(_as_text(queue), _as_text(raw))

    async def dispatch(self, queue: str, raw: str) -> Optional[Result]:
        handler = self.handlers.get(queue)
        if handler is None:
            logger.warning(f"No handler for queue {queue}")
            return None

        try:
            result = await handler(raw)
        except (ValidationError, ValueError):
            logger.exception(f"Malformed message on {queue}")
            return None
        except SQLAlchemyError:
            logger.exception(f"Database error while handling message on {queue}")
            return None
        except Exception:
            logger.exception(f"Unexpected error while handling message on {queue}")
            return None

        if result.is_err():
            logger.error(
                f"Message on {queue} failed: {result.error.code}: {result.error.message}"
            )
        return result

    async def handle_create_credentials(self, raw: str) -> Result:
        message = CreateCredentialsMessage.model_validate_json(raw)
        logger.info(f"Received create-credentials message for user {message.user_id}")
        command = CreateCredentialsCommand(
            user_id=message.user_id,
            first_name=message.first_name,
            email=message.email,
            password=message.password,
        )
        async with self.session_factory() as session:
            use_case = CreateCredentialsUseCase(SqlAlchemyUnitOfWork(session), self.notifications)
            return await use_case.execute(command)

    async def handle_reset_passcode(self, raw: str) -> Result:
        user_id = UserIdMessage.model_validate_json(raw).user_id
        logger.info(f"Received reset-passcode message for user {user_id}")
        async with self.session_factory() as session:
            use_case = ResetPasscodeUseCase(
                SqlAlchemyUnitOfWork(session), self.user_profile, self.notifications
            )
            return await use_case.execute(user_id)

    async def handle_delete_user_data(self, raw: str) -> Result:
        user_id = parse_user_id_message(raw)
        logger.info(f"Received delete-user-data message for user {user_id}")
        async with self.session_factory() as session:
            use_case = DeleteUserAuthDataUseCase(SqlAlchemyUnitOfWork(session))
            return await use_case.execute(user_id)


def _as_text(value) -> str:
    if isinstance(value, bytes):
        return value.decode()
    return value
