"""
Access to the orchestration system that runs the job.

The agent only needs two calls from it, the job's current status and the
full log accumulated so far. ``GitHubJobSource`` provides them for GitHub
Actions jobs through the REST API.
"""
from typing import Optional, Protocol

import requests

from logrelay.agent.exceptions import JobNotFoundError, JobSourceError
from logrelay.services.logging.logger import log as logger

QUEUED = "queued"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"
FAILED = "failed"
CANCELLED = "cancelled"
UNKNOWN = "unknown"

_WAITING_STATUSES = frozenset({"queued", "pending", "waiting", "requested"})
_FAILED_CONCLUSIONS = frozenset({"failure", "timed_out", "action_required", "startup_failure"})
_SUCCESS_CONCLUSIONS = frozenset({"success", "neutral", "skipped"})


class JobSource(Protocol):
    def get_status(self, job_id: str) -> str:
        ...

    def get_log(self, job_id: str) -> Optional[bytes]:
        ...


def normalize_github_status(status: Optional[str], conclusion: Optional[str]) -> str:
    """
    Fold a GitHub job ``status``/``conclusion`` pair into a relay status.

    Statuses GitHub may add later are passed through unchanged.
    """
    status = (status or "").lower()
    if status in _WAITING_STATUSES:
        return QUEUED
    if status == IN_PROGRESS:
        return IN_PROGRESS
    if status == COMPLETED:
        conclusion = (conclusion or "").lower()
        if conclusion in _SUCCESS_CONCLUSIONS:
            return COMPLETED
        if conclusion == CANCELLED:
            return CANCELLED
        if conclusion in _FAILED_CONCLUSIONS:
            return FAILED
        return UNKNOWN
    return status or UNKNOWN


class GitHubJobSource:
    """GitHub Actions REST client for one repository."""

    def __init__(
        self,
        repository: str,
        token: Optional[str] = None,
        api_url: str = "https://api.github.com",
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = f"{api_url.rstrip('/')}/repos/{repository.strip('/')}/actions/jobs"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, job_id: str, path: str = "") -> requests.Response:
        url = f"{self.base_url}/{job_id}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise JobSourceError(f"GET {url} failed: {exc}") from exc
        if response.status_code == 404:
            raise JobNotFoundError(f"Job {job_id} not found")
        if not response.ok:
            raise JobSourceError(f"GET {url} returned {response.status_code}")
        return response

    def get_status(self, job_id: str) -> str:
        response = self._get(job_id)
        try:
            data = response.json()
        except ValueError as exc:
            raise JobSourceError(f"Invalid status document for job {job_id}") from exc
        status = normalize_github_status(data.get("status"), data.get("conclusion"))
        logger.debug(f"Job {job_id} status {data.get('status')}/{data.get('conclusion')} -> {status}")
        return status

    def get_log(self, job_id: str) -> Optional[bytes]:
        """Full log so far, ``None`` while GitHub has no log archive for the job."""
        try:
            response = self._get(job_id, "/logs")
        except JobNotFoundError:
            return None
        return response.content
