from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI

from logrelay.services.logging.logger import log as logger
from logrelay.services.redis import close_redis_connection, connect_to_redis
from logrelay.settings.base import BaseAppSettings


def create_start_app_handler(app: FastAPI, settings: BaseAppSettings) -> Callable:
    """
    Create a startup event handler for the FastAPI application.

    This handler connects to Redis and warns when no shared secret is set.

    :param app: FastAPI application instance.
    :param settings: Application settings instance.
    :return: Asynchronous startup event handler.
    """

    async def start_app() -> None:
        await connect_to_redis(app, settings)
        if not settings.log_secret or not settings.log_secret.get_secret_value():
            logger.error("LOG_SECRET is not set, every push will be rejected")

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """
    Create a shutdown event handler for the FastAPI application.

    This handler closes the Redis connection.

    :param app: FastAPI application instance.
    :return: Asynchronous shutdown event handler.
    """

    @logger.catch
    async def stop_app() -> None:
        await close_redis_connection(app)

    return stop_app


def create_lifespan(settings: BaseAppSettings) -> Callable:
    """Bind the startup and shutdown handlers into a lifespan context."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await create_start_app_handler(app, settings)()
        yield
        await create_stop_app_handler(app)()

    return lifespan
