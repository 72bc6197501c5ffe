"""
Data retention sweeper.

An APScheduler interval job that purges expired passcodes, reset tokens
and refresh tokens.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy.exc import SQLAlchemyError

from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.app.use_cases.maintenance import PurgeExpiredCredentialsUseCase

logger = logging.getLogger(__name__)

SWEEPER_JOB_ID = "purge-expired-credentials"


async def purge_expired_credentials(session_factory) -> None:
    """Run one sweep; failures are logged so the next run still happens"""
    try:
        async with session_factory() as session:
            await PurgeExpiredCredentialsUseCase(SqlAlchemyUnitOfWork(session)).execute()
    except SQLAlchemyError:
        logger.exception("Expired credential sweep failed")


def create_sweeper(session_factory, interval_minutes: int) -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        purge_expired_credentials,
        "interval",
        minutes=interval_minutes,
        args=[session_factory],
        id=SWEEPER_JOB_ID,
        max_instances=1,
        coalesce=True,
    )
    return scheduler
