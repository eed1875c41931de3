"""Error hierarchy shared by the backend, the remote client and the data layer."""

from typing import Any


class FleetImsError(Exception):
    """Base error for fleetims.

    Every error carries a machine-readable ``code`` that survives the trip
    over HTTP, so the client can rebuild the same error class the server
    raised.
    """

    code: str = "unknown"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the error."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(FleetImsError):
    """Raised when input or entity state is invalid."""

    code = "invalid_argument"


class NotPersistedError(ValidationError):
    """Raised when an operation requiring a saved entity gets a transient one."""


class NotFoundError(FleetImsError):
    """Raised when a record does not exist (or was soft-deleted)."""

    code = "not_found"


class ForeignKeyError(NotFoundError):
    """Raised when a write references a row that does not exist."""


class DuplicateError(FleetImsError):
    """Raised when a unique field already holds the given value."""

    code = "already_exists"


class InvalidStateTransitionError(FleetImsError):
    """Raised when a status change is not allowed from the current status."""

    code = "failed_precondition"


class RemoteError(FleetImsError):
    """Raised for remote failures that have no more specific class."""


ERROR_CLASSES: dict[str, type[FleetImsError]] = {
    ValidationError.code: ValidationError,
    NotFoundError.code: NotFoundError,
    DuplicateError.code: DuplicateError,
    InvalidStateTransitionError.code: InvalidStateTransitionError,
}


def error_from_payload(
    payload: dict[str, Any],
    status_code: int | None = None,
) -> FleetImsError:
    """Rebuild a typed error from its wire representation.

    Args:
        payload: Decoded error body with ``code``, ``message`` and ``details``.
        status_code: HTTP status the body arrived with.

    Returns:
        An instance of the error class registered for the code, or a
        RemoteError keeping the original code.
    """
    code = str(payload.get("code") or "unknown")
    message = str(payload.get("message") or "Remote request failed")
    details = payload.get("details")
    if not isinstance(details, dict):
        details = {}

    error_class = ERROR_CLASSES.get(code)
    if error_class is None:
        return RemoteError(
            message, code=code, details=details, status_code=status_code
        )
    return error_class(message, details=details, status_code=status_code)


def is_not_found(error: BaseException | None) -> bool:
    """Check whether an error should render as a not-found view."""
    return isinstance(error, FleetImsError) and error.code == NotFoundError.code
