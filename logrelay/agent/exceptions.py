class LogRelayError(Exception):
    """Base error of the shipping agent"""


class JobSourceError(LogRelayError):
    """Job status or log could not be fetched. Retried on the next tick."""


class JobNotFoundError(JobSourceError):
    """The orchestration system does not know the job. Not retried."""


class ShipmentError(LogRelayError):
    """A snapshot push did not reach the endpoint or was refused."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
