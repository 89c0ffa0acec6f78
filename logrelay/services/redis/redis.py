from fastapi import FastAPI, Request
from redis.asyncio.client import Redis
from redis.exceptions import ConnectionError

from logrelay.services.logging.logger import log as logger
from logrelay.settings.base import BaseAppSettings


async def connect_to_redis(app: FastAPI, settings: BaseAppSettings) -> None:
    logger.info("Connecting to Redis")
    app.state.redis = Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        max_connections=200,
        socket_connect_timeout=5,
        socket_timeout=10
    )
    try:
        await app.state.redis.ping()
    except ConnectionError:
        logger.error("Can't connect to Redis at {}:{}", settings.redis_host, settings.redis_port)
    else:
        logger.info("Connection established")


async def close_redis_connection(app: FastAPI) -> None:
    logger.info("Closing connection to Redis")
    await app.state.redis.aclose()
    logger.info("Connection closed")


def get_redis(request: Request) -> Redis:
    """
    Retrieve Redis connection from FastAPI application state.

    :param request: FastAPI request object.
    :return: Redis connection instance.
    """
    return request.app.state.redis
