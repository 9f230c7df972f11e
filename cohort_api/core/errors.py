"""
Error taxonomy - every failure a resource operation can report.

Services raise ApiError tagged with an ErrorKind; the handlers registered in
cohort_api.api.error_handlers map the kind to an HTTP status in one place, so no
route hardcodes status codes for failures.
"""

from enum import Enum


class ErrorKind(str, Enum):
    MALFORMED_INPUT = "malformed_input"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.MALFORMED_INPUT: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """A resource failure with a client-facing message."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_response(self) -> dict:
        return {"error": self.message}


def malformed(message: str = "Invalid id") -> ApiError:
    return ApiError(ErrorKind.MALFORMED_INPUT, message)


def unauthenticated(message: str = "Invalid or missing token") -> ApiError:
    return ApiError(ErrorKind.UNAUTHENTICATED, message)


def not_found(message: str = "Not found") -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, message)


def conflict(message: str = "Duplicate key") -> ApiError:
    return ApiError(ErrorKind.CONFLICT, message)
