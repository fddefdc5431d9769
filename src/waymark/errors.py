"""Waymark exception hierarchy.

Shared across the manifest loader, router, generator, and sitemap writer
so every module raises and catches the same types.
"""

from dataclasses import dataclass
from pathlib import Path


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class ConfigurationError(WaymarkError):
    """Raised when site configuration is invalid or incomplete."""


class ManifestError(WaymarkError):
    """Raised when a build manifest cannot be read or deserialized.

    Carries the source path when the manifest came from disk.
    """

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class MissingParameterError(WaymarkError):
    """A dynamic route part had no value in the parameter map.

    Not recoverable locally: the caller must supply every dynamic
    parameter the route declares.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing parameter: {name}")


@dataclass(frozen=True, slots=True)
class HTTPError(WaymarkError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


# Action error codes carried by the build output (tRPC error code table)
ERROR_CODE_STATUS: dict[str, int] = {
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "TIMEOUT": 405,
    "CONFLICT": 409,
    "PRECONDITION_FAILED": 412,
    "PAYLOAD_TOO_LARGE": 413,
    "UNSUPPORTED_MEDIA_TYPE": 415,
    "UNPROCESSABLE_CONTENT": 422,
    "TOO_MANY_REQUESTS": 429,
    "CLIENT_CLOSED_REQUEST": 499,
    "INTERNAL_SERVER_ERROR": 500,
}

STATUS_ERROR_CODE: dict[int, str] = {status: code for code, status in ERROR_CODE_STATUS.items()}


def status_for_code(code: str) -> int:
    """Return the HTTP status for an action error code.

    Unknown codes map to 500.
    """
    return ERROR_CODE_STATUS.get(code, 500)


def code_for_status(status: int) -> str:
    """Return the action error code for an HTTP status.

    Unknown statuses map to ``INTERNAL_SERVER_ERROR``.
    """
    return STATUS_ERROR_CODE.get(status, "INTERNAL_SERVER_ERROR")
