"""
HMAC-SHA256 signing of pushed log snapshots.

The digest always covers the exact bytes of the HTTP body. Nothing is
normalised before signing or verifying: whitespace, trailing newlines and
encoding are all significant.
"""
import hashlib
import hmac
from typing import Optional, Protocol, Union

SIGNATURE_HEADER = "X-Hub-Signature-256"
JOB_ID_HEADER = "X-GitHub-Job-ID"
SIGNATURE_PREFIX = "sha256"

Secret = Union[str, bytes]


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return secret


def sign(secret: Secret, body: bytes) -> str:
    """
    Compute the hex encoded HMAC-SHA256 digest of ``body``.

    :param secret: Shared secret, must not be empty.
    :param body: Raw request body.
    :return: Lower-case hex digest.
    :raises ValueError: if the secret is empty.
    """
    key = _secret_bytes(secret)
    if not key:
        raise ValueError("Signing secret must not be empty")
    return hmac.new(key, body, hashlib.sha256).hexdigest()


def signature_header(secret: Secret, body: bytes) -> str:
    """Value of the signature header for ``body``, e.g. ``sha256=<hex>``."""
    return f"{SIGNATURE_PREFIX}={sign(secret, body)}"


def parse_signature_header(value: Optional[str]) -> Optional[str]:
    """
    Extract the hex digest from a signature header value.

    Both ``sha256=<hex>`` and a bare ``<hex>`` are accepted. A header naming
    another algorithm yields ``None``.
    """
    if not value:
        return None
    algorithm, sep, digest = value.strip().partition("=")
    if not sep:
        return algorithm or None
    if algorithm.lower() != SIGNATURE_PREFIX:
        return None
    return digest or None


def verify(secret: Optional[Secret], body: bytes, presented: Optional[str]) -> bool:
    """
    Check ``presented`` against the digest of ``body``.

    Fails closed: a missing or empty secret rejects every body, including one
    signed with an empty key. The comparison runs in constant time.
    """
    if not secret or not presented:
        return False
    expected = sign(secret, body)
    try:
        return hmac.compare_digest(expected, presented.strip().lower())
    except TypeError:
        # non-ASCII digest presented
        return False


class SecretProvider(Protocol):
    """Source of the shared secret used to verify pushes."""

    def get_secret(self) -> Optional[str]:
        ...


class StaticSecretProvider:
    """Single secret shared by every sender."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None

    def get_secret(self) -> Optional[str]:
        return self._secret
