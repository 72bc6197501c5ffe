import asyncio
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from .error import ClientError, ServerError
from auth_service.adapter.scheduler import create_sweeper
from auth_service.adapter.services.message_consumer import POLL_TIMEOUT, RedisMessageConsumer
from auth_service.adapter.services.notification_producer import RedisNotificationProducer
from auth_service.adapter.services.redis_client import create_redis_client
from auth_service.adapter.services.user_profile_client import HttpUserProfileClient
from auth_service.app.services.session_token_service import TokenSettings
from auth_service.depends import AsyncSessionLocal, engine

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": str(exc.base_error.code), "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": str(exc.base_error.code), "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_lifespan(ApplicationConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        app.state.http_client = httpx.AsyncClient(
            base_url=ApplicationConfig.USER_SERVICE_URL,
            timeout=ApplicationConfig.USER_SERVICE_TIMEOUT_SECONDS,
        )
        app.state.redis = create_redis_client(
            ApplicationConfig.REDIS_URL, ApplicationConfig.REDIS_TIMEOUT_SECONDS
        )

        consumer_redis = None
        consumer_task = None
        if ApplicationConfig.ENABLE_CONSUMER:
            consumer_redis = create_redis_client(
                ApplicationConfig.REDIS_URL,
                ApplicationConfig.REDIS_TIMEOUT_SECONDS,
                read_timeout=POLL_TIMEOUT + ApplicationConfig.REDIS_TIMEOUT_SECONDS,
            )
            consumer = RedisMessageConsumer(
                redis=consumer_redis,
                session_factory=AsyncSessionLocal,
                user_profile=HttpUserProfileClient(app.state.http_client),
                notifications=RedisNotificationProducer(
                    app.state.redis, ApplicationConfig.NOTIFICATION_QUEUE
                ),
                create_credentials_queue=ApplicationConfig.CREATE_CREDENTIALS_QUEUE,
                reset_passcode_queue=ApplicationConfig.RESET_PASSCODE_QUEUE,
                delete_user_data_queue=ApplicationConfig.DELETE_USER_DATA_QUEUE,
            )
            consumer_task = asyncio.create_task(consumer.run())

        sweeper = None
        if ApplicationConfig.ENABLE_SWEEPER:
            sweeper = create_sweeper(AsyncSessionLocal, ApplicationConfig.SWEEPER_INTERVAL_MINUTES)
            sweeper.start()

        yield

        if sweeper is not None:
            sweeper.shutdown()
        if consumer_task is not None:
            consumer_task.cancel()
            try:
                await consumer_task
            except asyncio.CancelledError:
                logger.info("Inbound queue consumer stopped")
        if consumer_redis is not None:
            await consumer_redis.aclose()
        await app.state.redis.aclose()
        await app.state.http_client.aclose()

    return lifespan


def create_app(ApplicationConfig, lifespan=None) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Auth Service",
        version="0.1.0",
        lifespan=lifespan or build_lifespan(ApplicationConfig),
    )

    # Malformed key material stops the process here
    app.state.token_settings = TokenSettings.from_config(ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from auth_service.api.routes import auth, data, health_check, passcode, password

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(passcode.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(password.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(data.router, prefix=ApplicationConfig.API_PREFIX)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
