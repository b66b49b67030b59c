# errors.py
# Error kinds surfaced by the service.
#
# Request-level errors (NotFound, Unauthorized) are returned to the caller as a
# normal JSON body, `{"error": {"message": ...}}`, with HTTP 200. LoadError is
# only raised during startup and aborts the process.

from typing import Any, Dict


class ServiceError(Exception):
    """Base for errors reported to the caller in the response body."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return error_body(self.message)


class NotFound(ServiceError):
    pass


class Unauthorized(ServiceError):
    def __init__(self, message: str = "must provide a valid authorization token in the headers"):
        super().__init__(message)


class LoadError(RuntimeError):
    """The startup fetch of the dataset failed (transport or payload)."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


def error_body(message: str) -> Dict[str, Any]:
    return {"error": {"message": message}}
