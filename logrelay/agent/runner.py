"""
Poll loop of the shipping agent.

Each tick reads the job status and its full log, then pushes the log. The
tick on which the job is seen finished is the last one, so its push carries
the complete final content. Failed ticks are retried on the next tick until
``failure_threshold`` of them happen in a row.
"""
import enum
import threading
from dataclasses import dataclass
from typing import Optional

from logrelay.agent.detector import JobState, classify
from logrelay.agent.exceptions import JobNotFoundError, JobSourceError, LogRelayError
from logrelay.agent.fetcher import SnapshotFetcher
from logrelay.agent.shipper import LogShipper
from logrelay.agent.source import CANCELLED, FAILED, JobSource
from logrelay.services.logging.logger import log as logger


class ShippingOutcome(enum.Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    ABORTED = "aborted"
    STOPPED = "stopped"


@dataclass
class ShippingResult:
    job_id: str
    outcome: ShippingOutcome
    job_status: Optional[str] = None
    pushes: int = 0
    failures: int = 0
    error: Optional[str] = None
    # size of the last snapshot that reached the endpoint
    shipped_bytes: int = 0

    @property
    def shipping_failed(self) -> bool:
        return self.outcome is ShippingOutcome.ABORTED


def _outcome_for(status: str) -> ShippingOutcome:
    status = (status or "").lower()
    if status == FAILED:
        return ShippingOutcome.FAILED
    if status == CANCELLED:
        return ShippingOutcome.CANCELLED
    return ShippingOutcome.COMPLETED


class ShippingAgent:
    """Relays the log of one job until the job finishes."""

    def __init__(
        self,
        source: JobSource,
        shipper: LogShipper,
        poll_interval: float = 15.0,
        failure_threshold: int = 3,
        fetcher: SnapshotFetcher = None,
        stop_event: threading.Event = None,
    ):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self._source = source
        self._shipper = shipper
        self._fetcher = fetcher or SnapshotFetcher(source)
        self.poll_interval = poll_interval
        self.failure_threshold = failure_threshold
        self.stop_event = stop_event or threading.Event()

    def stop(self) -> None:
        """Ask the loop to exit once the in-flight tick is over."""
        self.stop_event.set()

    def _tick(self, job_id: str, result: ShippingResult):
        status = self._source.get_status(job_id)
        result.job_status = status
        state = classify(status)
        final = state is JobState.TERMINAL
        snapshot = self._fetcher.fetch(job_id, final=final)
        if final and not snapshot and result.shipped_bytes:
            # a finished log never shrinks to nothing, keep the stored one
            raise JobSourceError(f"Final log of job {job_id} came back empty")
        self._shipper.push(job_id, snapshot)
        result.shipped_bytes = len(snapshot)
        return status, state

    def run(self, job_id: str) -> ShippingResult:
        result = ShippingResult(job_id=job_id, outcome=ShippingOutcome.STOPPED)
        logger.info(f"Relaying log of job {job_id} every {self.poll_interval}s")

        while True:
            try:
                status, state = self._tick(job_id, result)
            except LogRelayError as exc:
                result.error = str(exc)
                if isinstance(exc, JobNotFoundError) and result.job_status is None:
                    logger.error(f"Job {job_id} is unknown to the orchestration system: {exc}")
                    result.outcome = ShippingOutcome.ABORTED
                    return result
                result.failures += 1
                logger.warning(
                    f"Tick failed for job {job_id} ({result.failures}/{self.failure_threshold}): {exc}"
                )
                if result.failures >= self.failure_threshold:
                    logger.error(f"Giving up on job {job_id} after {result.failures} consecutive failures")
                    result.outcome = ShippingOutcome.ABORTED
                    return result
            else:
                result.pushes += 1
                result.failures = 0
                result.error = None
                if state is JobState.TERMINAL:
                    result.outcome = _outcome_for(status)
                    logger.info(f"Job {job_id} finished with status {status}, final log shipped")
                    return result

            if self.stop_event.wait(self.poll_interval):
                logger.info(f"Stop requested, leaving relay of job {job_id}")
                result.outcome = ShippingOutcome.STOPPED
                return result
