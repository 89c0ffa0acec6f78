from datetime import datetime, timezone
from typing import List, Optional

from redis.asyncio.client import Redis
from redis.exceptions import RedisError

from logrelay.domain.api.logs.constants import JOB_LOG_PREFIX
from logrelay.domain.api.logs.schemas import LogRecord, job_log_key
from logrelay.services.logging.logger import log as logger
from logrelay.services.redis.exceptions import RedisResponseError


class JobLogService:
    """
    Latest-snapshot store for job logs, one Redis hash per job.

    Writes are a single HSET so concurrent pushes for the same job resolve as
    last write wins in arrival order. No ordering token is kept.
    """

    def __init__(self, redis: Redis):
        self._redis = redis

    async def upsert(self, job_id: str, content: str) -> LogRecord:
        """
        Create or overwrite the record of ``job_id``.

        :param job_id: Job identifier.
        :param content: Full snapshot text.
        :return: The record as written.
        :raises RedisResponseError: if Redis operation fails.
        """
        record = LogRecord(
            job_id=job_id,
            content=content,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        try:
            await self._redis.hset(record.key, mapping=record.model_dump())
        except RedisError as e:
            logger.error(f"Redis error in upsert for job {job_id}: {e}")
            raise RedisResponseError(str(e)) from e
        logger.debug(f"Stored {len(content)} chars for job {job_id}")
        return record

    async def find_by_job_id(self, job_id: str) -> Optional[LogRecord]:
        """
        Retrieve the record of ``job_id``.

        :return: Stored record, or None if no push was accepted yet.
        :raises RedisResponseError: if Redis operation fails.
        """
        try:
            data = await self._redis.hgetall(job_log_key(job_id))
        except RedisError as e:
            logger.error(f"Redis error in find_by_job_id for job {job_id}: {e}")
            raise RedisResponseError(str(e)) from e
        if not data:
            return None
        return LogRecord(**data)

    async def list_job_ids(self, scan_count: int = 100) -> List[str]:
        """Identifiers of every job with a stored record."""
        prefix = f"{JOB_LOG_PREFIX}:"
        try:
            keys = [key async for key in self._redis.scan_iter(match=f"{prefix}*", count=scan_count)]
        except RedisError as e:
            logger.error(f"Redis error in list_job_ids: {e}")
            raise RedisResponseError(str(e)) from e
        return sorted(key[len(prefix):] for key in keys)
