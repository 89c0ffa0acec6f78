import enum

from logrelay.agent.source import CANCELLED, COMPLETED, FAILED, IN_PROGRESS, QUEUED
from logrelay.services.logging.logger import log as logger


class JobState(enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    TERMINAL = "terminal"


PENDING_STATUSES = frozenset({QUEUED, "pending", "waiting", "requested"})
RUNNING_STATUSES = frozenset({IN_PROGRESS})
TERMINAL_STATUSES = frozenset({COMPLETED, FAILED, CANCELLED})


def classify(raw_status: str) -> JobState:
    """
    Map a status reported by the orchestration system to a lifecycle state.

    Only the pending and running statuses keep the relay polling. Anything
    else stops it; an unmapped status is logged so an early stop is visible.
    """
    status = (raw_status or "").strip().lower()
    if status in PENDING_STATUSES:
        return JobState.PENDING
    if status in RUNNING_STATUSES:
        return JobState.RUNNING
    if status not in TERMINAL_STATUSES:
        logger.warning(f"Unmapped job status {raw_status!r}, treating job as finished")
    return JobState.TERMINAL
