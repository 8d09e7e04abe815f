"""
Error types raised across the finops UI.

- ``ApiError``: transport failures and non-2xx responses from the REST API
- ``ActionRejected``: a store action failed; carries the user-facing message
- ``NoMorePagesError``: ``load_more`` called without a next page
- ``FormValidationError``: client-side form checks failed
"""

from typing import Any, Mapping


class FinOpsError(Exception):
    """Base class for all UI errors."""


class ApiError(FinOpsError):
    """A request to the REST API failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.payload = payload


class ActionRejected(FinOpsError):
    """An async action dispatched its rejected transition."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoMorePagesError(FinOpsError):
    """Raised when loading another page while the last one has been reached."""


class FormValidationError(FinOpsError):
    """Form input failed validation; ``errors`` maps field name to message."""

    def __init__(self, errors: Mapping[str, str]) -> None:
        super().__init__("Please fix all validation errors")
        self.errors = dict(errors)


def error_message(exc: BaseException | None, fallback: str) -> str:
    """
    Pick the message to show for a failure.

    Server messages carried by ``ApiError`` win, then the exception's own text,
    then ``fallback``.
    """
    if exc is None:
        return fallback
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    text = str(exc).strip()
    return text or fallback
