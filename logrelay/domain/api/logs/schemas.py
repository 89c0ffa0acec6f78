from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from logrelay.domain.api.logs.constants import JOB_LOG_PREFIX


def job_log_key(job_id: str) -> str:
    return f"{JOB_LOG_PREFIX}:{job_id}"


class LogRecord(BaseModel):
    """Latest snapshot stored for one job."""

    job_id: str = Field(..., min_length=1, description="Job identifier")
    content: str = Field("", description="Full log text of the last accepted push")
    updated_at: str = Field(..., description="ISO-8601 UTC timestamp of the last accepted push")

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @property
    def key(self) -> str:
        return job_log_key(self.job_id)


class LogReceipt(BaseModel):
    message: str
    job_id: str


class JobLogList(BaseModel):
    job_ids: List[str]
