from typing import Optional

import requests

from logrelay.agent.exceptions import ShipmentError
from logrelay.services.logging.logger import log as logger
from logrelay.services.security.signature import JOB_ID_HEADER, SIGNATURE_HEADER, signature_header


class LogShipper:
    """
    Pushes full log snapshots to the ingestion endpoint.

    Every push carries the whole log; the endpoint keeps only the latest one.
    """

    def __init__(
        self,
        endpoint_url: str,
        secret: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        if not secret:
            raise ValueError("Shared secret must not be empty")
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._secret = secret
        self.session = session or requests.Session()

    def push(self, job_id: str, snapshot: bytes) -> dict:
        """
        POST one snapshot.

        :return: Acknowledgement document of the endpoint.
        :raises ShipmentError: on network error, timeout or non-2xx answer.
        """
        headers = {
            "Content-Type": "text/plain; charset=utf-8",
            JOB_ID_HEADER: job_id,
            SIGNATURE_HEADER: signature_header(self._secret, snapshot),
        }
        try:
            response = self.session.post(
                self.endpoint_url,
                data=snapshot,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ShipmentError(f"Push for job {job_id} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise ShipmentError(
                f"Push for job {job_id} rejected: {response.status_code}; message: {response.text[:200]}",
                status_code=response.status_code,
            )
        logger.debug(f"Pushed {len(snapshot)} bytes for job {job_id}")
        try:
            return response.json()
        except ValueError:
            return {}
