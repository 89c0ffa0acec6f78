from typing import Optional

from fastapi import Depends, Header, Request
from redis.asyncio.client import Redis

from logrelay.config import get_app_settings
from logrelay.domain.api.exceptions import InternalServerError, UnauthorizedError
from logrelay.domain.api.logs.core import JobLogService
from logrelay.services.logging.logger import log as logger
from logrelay.services.redis import get_redis
from logrelay.services.security.signature import (
    JOB_ID_HEADER,
    SIGNATURE_HEADER,
    SecretProvider,
    StaticSecretProvider,
    parse_signature_header,
    verify,
)


def get_job_log_service(
    redis: Redis = Depends(get_redis),
) -> JobLogService:
    """
    Dependency that provides JobLogService.
    """
    return JobLogService(redis)


def get_secret_provider() -> SecretProvider:
    """
    Dependency that provides the shared secret used to verify pushes.
    """
    secret = get_app_settings().log_secret
    return StaticSecretProvider(secret.get_secret_value() if secret else None)


async def verified_body(
    request: Request,
    signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    secrets: SecretProvider = Depends(get_secret_provider),
) -> bytes:
    """
    Read the raw request body and check its signature.

    The digest is computed over the bytes exactly as received, before the
    job id or content are looked at.

    :return: Raw body bytes.
    :raises InternalServerError: if no secret is configured.
    :raises UnauthorizedError: if the signature is missing or wrong.
    """
    secret = secrets.get_secret()
    if not secret:
        logger.error("LOG_SECRET is not configured, rejecting push")
        raise InternalServerError(detail="Server configuration error: LOG_SECRET is missing.")

    client = request.client.host if request.client else "unknown"
    job_id = request.headers.get(JOB_ID_HEADER, "")
    if not signature:
        logger.warning(f"Push without {SIGNATURE_HEADER} from {client} (job {job_id!r})")
        raise UnauthorizedError(detail=f"{SIGNATURE_HEADER} header is missing")

    body = await request.body()
    if not verify(secret, body, parse_signature_header(signature)):
        logger.warning(f"Signature mismatch for push from {client} (job {job_id!r})")
        raise UnauthorizedError(detail="Signature verification failed")
    return body
