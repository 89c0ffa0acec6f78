from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi_utils.cbv import cbv

from logrelay.domain.api.exceptions import BadRequestError, InternalServerError, RecordNotFound
from logrelay.domain.api.logs.core import JobLogService
from logrelay.domain.api.logs.dependencies import get_job_log_service, verified_body
from logrelay.domain.api.logs.schemas import JobLogList, LogReceipt, LogRecord
from logrelay.services.logging.logger import log as logger
from logrelay.services.security.signature import JOB_ID_HEADER

router = APIRouter()


@cbv(router)
class JobLogs:
    service: JobLogService = Depends(get_job_log_service)

    @router.post("/logs", response_model=LogReceipt, status_code=status.HTTP_200_OK)
    async def ingest(
            self,
            body: bytes = Depends(verified_body),
            job_id: Optional[str] = Header(None, alias=JOB_ID_HEADER),
    ):
        """
        Store the pushed snapshot as the latest log of the job.
        """
        if not job_id or not job_id.strip():
            raise BadRequestError(detail=f"{JOB_ID_HEADER} header is missing")

        content = body.decode("utf-8", errors="replace")
        try:
            await self.service.upsert(job_id, content)
        except Exception:
            logger.exception(f"Error processing log for job {job_id}")
            raise InternalServerError()
        return LogReceipt(message="Log received and updated successfully", job_id=job_id)

    @router.get("/logs", response_model=JobLogList, status_code=status.HTTP_200_OK)
    async def list_jobs(self):
        """
        List identifiers of all stored job logs.
        """
        return JobLogList(job_ids=await self.service.list_job_ids())

    @router.get("/logs/{job_id}", response_model=LogRecord, status_code=status.HTTP_200_OK)
    async def get_log(self, job_id: str):
        """
        Retrieve the latest snapshot of a job.
        """
        record = await self.service.find_by_job_id(job_id)
        if record is None:
            raise RecordNotFound(detail=f"No log stored for job {job_id}")
        return record
