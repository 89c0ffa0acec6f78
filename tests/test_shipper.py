import hashlib
import hmac
from unittest.mock import MagicMock

import pytest
import requests

from logrelay.agent.exceptions import ShipmentError
from logrelay.agent.shipper import LogShipper

ENDPOINT = "https://collector.example.com/api/v1.0/logs"


def _response(status_code=200, payload=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.text = "" if payload is None else str(payload)
    response.json.return_value = payload or {}
    return response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = _response(200, {"message": "ok", "job_id": "abc123"})
    return session


@pytest.fixture
def shipper(session):
    return LogShipper(ENDPOINT, "s3cr3t", timeout=7.5, session=session)


def test_push_sends_signed_raw_body(shipper, session):
    ack = shipper.push("abc123", b"hello\n")

    assert ack == {"message": "ok", "job_id": "abc123"}
    args, kwargs = session.post.call_args
    assert args == (ENDPOINT,)
    assert kwargs["data"] == b"hello\n"
    assert kwargs["timeout"] == 7.5
    expected = hmac.new(b"s3cr3t", b"hello\n", hashlib.sha256).hexdigest()
    assert kwargs["headers"]["X-Hub-Signature-256"] == f"sha256={expected}"
    assert kwargs["headers"]["X-GitHub-Job-ID"] == "abc123"


def test_push_empty_snapshot(shipper, session):
    shipper.push("abc123", b"")

    assert session.post.call_args.kwargs["data"] == b""


@pytest.mark.parametrize("status_code", [400, 401, 500, 503])
def test_non_2xx_raises(shipper, session, status_code):
    session.post.return_value = _response(status_code, {"title": "nope"})

    with pytest.raises(ShipmentError) as excinfo:
        shipper.push("abc123", b"hello\n")

    assert excinfo.value.status_code == status_code


@pytest.mark.parametrize("error", [requests.ConnectionError("refused"), requests.Timeout("slow")])
def test_network_errors_raise(shipper, session, error):
    session.post.side_effect = error

    with pytest.raises(ShipmentError):
        shipper.push("abc123", b"hello\n")


def test_requires_secret():
    with pytest.raises(ValueError):
        LogShipper(ENDPOINT, "")
