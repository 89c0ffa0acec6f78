import http
from typing import Optional


class LogRelayException(Exception):
    """Base exception of the log relay service"""


class APIException(LogRelayException):
    """Error that the service turns into a JSON HTTP response.

    ``code`` and ``title`` default to the class ``status``; ``detail`` is only
    rendered when given, so generic errors carry nothing but the HTTP phrase.
    """

    status: http.HTTPStatus = http.HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None, title: Optional[str] = None):
        super().__init__(detail or self.status.phrase)
        self.code = code if code is not None else self.status.value
        self.title = title if title is not None else self.status.phrase
        self.detail = detail

    def to_dict(self):
        """Returns dictionary with error message"""
        _dict = {"code": self.code, "title": self.title}
        if self.detail is not None:
            _dict["detail"] = self.detail
        return _dict


class InternalServerError(APIException):
    """Unexpected failure or server misconfiguration."""

    status = http.HTTPStatus.INTERNAL_SERVER_ERROR


class BadRequestError(APIException):
    """Malformed push, e.g. a missing job id."""

    status = http.HTTPStatus.BAD_REQUEST


class UnauthorizedError(APIException):
    """Request could not be authenticated."""

    status = http.HTTPStatus.UNAUTHORIZED


class RecordNotFound(APIException):
    """No log stored for the requested job."""

    status = http.HTTPStatus.NOT_FOUND
