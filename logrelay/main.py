import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from logrelay.config import get_app_settings
from logrelay.domain.api import routers
from logrelay.domain.api.exceptions import APIException, InternalServerError
from logrelay.events import create_lifespan
from logrelay.services.logging.logger import log as logger
from logrelay.services.logging.logger import setup_logging
from logrelay.services.redis.exceptions import RedisResponseError
from logrelay.settings.base import BaseAppSettings


def get_application(settings: BaseAppSettings) -> FastAPI:
    """
    Create and configure FastAPI application.

    :param settings: Application settings instance.
    :return: Configured FastAPI application.
    """
    setup_logging(settings.logging_level, log_path=settings.log_path, loggers=settings.loggers)

    app = FastAPI(lifespan=create_lifespan(settings), **settings.fastapi_kwargs)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RedisResponseError, storage_exception_handler)

    for router in routers:
        app.include_router(router, prefix=settings.api_prefix)

    return app


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """
    Render an APIException as its JSON error document.
    """
    return JSONResponse(status_code=exc.code, content=exc.to_dict())


async def storage_exception_handler(request: Request, exc: RedisResponseError) -> JSONResponse:
    """
    Answer a failed storage call with a bare 500, keeping the cause in the log.
    """
    logger.opt(exception=exc).error(f"Storage failure on {request.method} {request.url.path}")
    error = InternalServerError()
    return JSONResponse(status_code=error.code, content=error.to_dict())


app = get_application(get_app_settings())


def run() -> None:
    settings = get_app_settings()
    uvicorn.run(
        "logrelay.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
