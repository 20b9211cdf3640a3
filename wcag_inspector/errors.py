from __future__ import annotations

from typing import Literal

ErrorCode = Literal["INVALID_URL", "FETCH_TIMEOUT", "FETCH_FAILURE", "UNKNOWN_ERROR"]

UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
FETCH_FAILURE_MESSAGE = "We could not reach the target site. Check the URL and try again."


class AnalysisError(Exception):
    """A classified failure that can be shown to callers as-is."""

    def __init__(self, status: int, code: ErrorCode, message: str):
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"AnalysisError(status={self.status}, code={self.code!r}, message={self.message!r})"


def invalid_url_error(message: str) -> AnalysisError:
    return AnalysisError(400, "INVALID_URL", message)


def _display_seconds(timeout_ms: float) -> str:
    seconds = timeout_ms / 1000
    if float(seconds).is_integer():
        return str(int(seconds))
    return f"{seconds:.1f}"


def fetch_timeout_error(timeout_ms: float) -> AnalysisError:
    return AnalysisError(
        504,
        "FETCH_TIMEOUT",
        f"The target site did not respond within {_display_seconds(timeout_ms)} seconds. Please try again later.",
    )


def fetch_failure_error() -> AnalysisError:
    return AnalysisError(502, "FETCH_FAILURE", FETCH_FAILURE_MESSAGE)


def unknown_error() -> AnalysisError:
    return AnalysisError(500, "UNKNOWN_ERROR", UNKNOWN_ERROR_MESSAGE)


def to_error_response(err: BaseException) -> tuple[int, dict[str, str]]:
    # Only classified errors carry their own message; everything else is masked.
    if isinstance(err, AnalysisError):
        return err.status, {"code": err.code, "message": err.message}
    return 500, {"code": "UNKNOWN_ERROR", "message": UNKNOWN_ERROR_MESSAGE}
