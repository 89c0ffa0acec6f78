from typing import Optional

from logrelay.agent.exceptions import JobSourceError
from logrelay.agent.source import JobSource


class SnapshotFetcher:
    """Reads the full log of a job accumulated so far."""

    def __init__(self, source: JobSource):
        self._source = source

    def fetch(self, job_id: str, final: bool = False) -> bytes:
        """
        :param final: The job has finished, so the log must be available.
        :return: Full log bytes, empty if the job produced no output yet.
        :raises JobSourceError: if the log could not be read, or is not
            available yet for a finished job.
        """
        content: Optional[bytes] = self._source.get_log(job_id)
        if content is None:
            if final:
                raise JobSourceError(f"Final log of job {job_id} is not available yet")
            return b""
        if isinstance(content, str):
            return content.encode("utf-8")
        if not isinstance(content, (bytes, bytearray)):
            raise JobSourceError(f"Unexpected log payload {type(content).__name__} for job {job_id}")
        return bytes(content)
