"""
Redis-backed email notification producer.

Messages are JSON documents pushed onto a Redis list that the mailer
service consumes.
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from libs.result import Error, Result, Return
from auth_service.app.services.dtos import (
    EmailMessage,
    ResetPasswordEmail,
    VerificationEmail,
    WelcomeEmail,
)
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.domain.entities import ErrorCode

logger = logging.getLogger(__name__)


class RedisNotificationProducer(INotificationProducer):
    """INotificationProducer that RPUSHes onto a Redis list"""

    def __init__(self, redis: Redis, queue: str):
        self.redis = redis
        self.queue = queue

    async def send_verification_email(self, message: VerificationEmail) -> Result[None]:
        logger.info(f"Sending Verification Email message to {message.email}")
        return await self._send(message)

    async def send_welcome_email(self, message: WelcomeEmail) -> Result[None]:
        logger.info(f"Sending Welcome Email message to {message.email}")
        return await self._send(message)

    async def send_reset_password_email(self, message: ResetPasswordEmail) -> Result[None]:
        logger.info(f"Sending Reset Password Email message to {message.email}")
        return await self._send(message)

    async def _send(self, message: EmailMessage) -> Result[None]:
        payload = message.model_dump_json(by_alias=True)
        try:
            await self.redis.rpush(self.queue, payload)
        except RedisError as exc:
            logger.error(f"Failed to enqueue '{message.kind}' email on {self.queue}: {exc!r}")
            return Return.err(
                Error(ErrorCode.UPSTREAM_UNAVAILABLE, "Failed to send email, please try again later")
            )
        return Return.ok(None)
